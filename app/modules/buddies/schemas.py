from pydantic import BaseModel
from typing import Optional, List
from datetime import date, datetime
from enum import Enum


class BuddyPairingCreate(BaseModel):
    group_id: str
    user_id_1: str
    user_id_2: str
    user_id_3: Optional[str] = None
    week_start: date

    def to_row(self) -> dict:
        return {
            "group_id": self.group_id,
            "user_id_1": self.user_id_1,
            "user_id_2": self.user_id_2,
            "user_id_3": self.user_id_3,
            "week_start": self.week_start.isoformat(),
        }


class BuddyPairingResponse(BaseModel):
    id: str
    group_id: str
    user_id_1: str
    user_id_2: str
    user_id_3: Optional[str] = None
    week_start: date
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @property
    def member_ids(self) -> List[str]:
        return [m for m in (self.user_id_1, self.user_id_2, self.user_id_3) if m]

    def buddy_ids_for(self, user_id: str) -> List[str]:
        return [m for m in self.member_ids if m != user_id]


class BuddyDisplayInfo(BaseModel):
    user_id: str
    name: str
    avatar_url: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class GenerateBuddiesRequest(BaseModel):
    force_regenerate: bool = True


class GenerateBuddiesResponse(BaseModel):
    group_id: str
    week_start: date
    success: bool
    pairings: List[BuddyPairingResponse] = []


class BuddyStatusResponse(BaseModel):
    group_id: str
    week_start: date
    exists: bool


class GenerationOutcome(str, Enum):
    CREATED = "created"
    KEPT = "kept"  # pairings already existed and force_regenerate was off
    INSUFFICIENT_MEMBERS = "insufficient_members"
    FAILED = "failed"
