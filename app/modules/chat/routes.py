from fastapi import APIRouter, Depends, HTTPException
from app.core.dependencies import get_current_user_id
from app.database.supabase_client import get_supabase
from app.modules.chat.schemas import BuddyChatRoom, BuddyChatRoomRequest, BuddyChatRoomResponse
from app.modules.chat.service import ChatRoomService
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/chat", tags=["chat"])


def get_chat_room_service(supabase: Client = Depends(get_supabase)) -> ChatRoomService:
    return ChatRoomService(supabase)


@router.get("/buddy-rooms", response_model=List[BuddyChatRoom])
async def list_buddy_rooms(
    user_data: Dict = Depends(get_current_user_id),
    service: ChatRoomService = Depends(get_chat_room_service)
):
    """Buddy chat rooms for the current user's latest pairings"""
    return service.fetch_buddy_chat_rooms(user_data["id"])


@router.post("/buddy-rooms", response_model=BuddyChatRoomResponse)
async def get_or_create_buddy_room(
    request: BuddyChatRoomRequest,
    user_data: Dict = Depends(get_current_user_id),
    service: ChatRoomService = Depends(get_chat_room_service)
):
    """Find or create the chat room bound to a pairing (caller must be one of its members)"""
    try:
        pairing = service.get_pairing(request.pairing_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    if pairing is None:
        raise HTTPException(status_code=404, detail="Pairing not found")
    if user_data["id"] not in pairing.member_ids:
        raise HTTPException(status_code=403, detail="You must be a member of this pairing")
    room_id = service.get_buddy_chat_room(pairing.member_ids, pairing.id, group_id=pairing.group_id)
    if not room_id:
        raise HTTPException(status_code=500, detail="Could not get or create buddy chat room")
    return BuddyChatRoomResponse(room_id=room_id, pairing_id=pairing.id)
