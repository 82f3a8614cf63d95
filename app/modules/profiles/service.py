from supabase import Client
from app.modules.profiles.schemas import DisplayProfile
from typing import Dict, List


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_display_profiles(self, user_ids: List[str]) -> Dict[str, DisplayProfile]:
        """Fetch display profiles keyed by user id. Users without a profile row are absent."""
        if not user_ids:
            return {}
        result = self.supabase.table("client_profiles")\
            .select("id, first_name, last_name, avatar_url")\
            .in_("id", list(user_ids))\
            .execute()
        return {row["id"]: DisplayProfile(**row) for row in (result.data or [])}
