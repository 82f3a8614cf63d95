from pydantic import BaseModel
from typing import Optional


class DisplayProfile(BaseModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar_url: Optional[str] = None

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p) or "Unknown User"

    @property
    def short_name(self) -> Optional[str]:
        """'First L.' form used in buddy room names; None when no name is set."""
        first = (self.first_name or "").strip()
        last = (self.last_name or "").strip()
        if first and last:
            return f"{first} {last[0].upper()}."
        return first or last or None
