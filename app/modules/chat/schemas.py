from pydantic import BaseModel
from typing import Optional, List
from datetime import date


class BuddyChatRoom(BaseModel):
    id: str
    name: str
    is_group_chat: bool = True
    is_buddy_chat: bool = True
    group_id: Optional[str] = None
    accountability_pairing_id: str
    week_start: date
    buddy_ids: List[str]


class BuddyChatRoomRequest(BaseModel):
    pairing_id: str


class BuddyChatRoomResponse(BaseModel):
    room_id: str
    pairing_id: str
