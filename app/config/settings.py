from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Used by the weekly scheduler (RLS bypass)

    # Accountability buddies
    buddy_timezone: str = "UTC"  # Reference zone for "current week" and the Monday guard
    buddy_room_name_max_length: int = 35
    cron_secret: Optional[str] = None  # Sent by the external scheduler as X-Cron-Secret
    weekly_scheduler_enabled: bool = False
    weekly_scheduler_interval_seconds: int = 3600

    # App
    app_name: str = "buddy-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
