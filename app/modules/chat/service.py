from supabase import Client
from app.config import settings
from app.core.week import get_current_week_start, format_week_start
from app.modules.buddies.models import PAIRINGS_TABLE, MEMBER_COLUMNS
from app.modules.buddies.schemas import BuddyPairingResponse
from app.modules.chat.models import CHAT_ROOMS_TABLE, DEFAULT_BUDDY_ROOM_NAME
from app.modules.chat.naming import build_buddy_room_name
from app.modules.chat.schemas import BuddyChatRoom
from app.modules.profiles.service import ProfileService
from typing import List, Optional
from datetime import date
import logging

logger = logging.getLogger(__name__)


def _member_filter(user_id: str) -> str:
    return ",".join(f"{column}.eq.{user_id}" for column in MEMBER_COLUMNS)


class ChatRoomService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.profiles = ProfileService(supabase)

    def get_buddy_chat_room(
        self,
        member_ids: List[str],
        pairing_id: str,
        group_id: Optional[str] = None,
    ) -> Optional[str]:
        """Return the id of the pairing's buddy chat room, creating it on first use. None on failure."""
        if len(member_ids) < 2 or not pairing_id:
            logger.warning(f"Buddy chat room needs 2+ members and a pairing id (got {len(member_ids)}, {pairing_id!r})")
            return None
        try:
            existing = self.supabase.table(CHAT_ROOMS_TABLE)\
                .select("id")\
                .eq("is_buddy_chat", True)\
                .eq("accountability_pairing_id", pairing_id)\
                .execute()
            if existing.data:
                return existing.data[0]["id"]

            room = {
                "name": DEFAULT_BUDDY_ROOM_NAME,
                "is_group_chat": True,
                "is_buddy_chat": True,
                "accountability_pairing_id": pairing_id,
            }
            if group_id:
                room["group_id"] = group_id
            result = self.supabase.table(CHAT_ROOMS_TABLE).insert(room).execute()
            if not result.data:
                logger.error(f"Creating buddy chat room for pairing {pairing_id} returned no rows")
                return None
            room_id = result.data[0]["id"]
            logger.info(f"Created buddy chat room {room_id} for pairing {pairing_id}")
            return room_id
        except Exception as e:
            logger.error(f"Error getting buddy chat room for pairing {pairing_id}: {str(e)}")
            return None

    def get_buddy_room_name(self, buddy_ids: List[str]) -> str:
        """Room name as seen by the member whose buddies are buddy_ids"""
        if not buddy_ids:
            return DEFAULT_BUDDY_ROOM_NAME
        try:
            profiles = self.profiles.get_display_profiles(buddy_ids)
        except Exception as e:
            logger.error(f"Error fetching buddy profiles for room name: {str(e)}")
            return DEFAULT_BUDDY_ROOM_NAME
        names = [profiles[b].short_name for b in buddy_ids if b in profiles]
        return build_buddy_room_name(names, settings.buddy_room_name_max_length)

    def get_pairing(self, pairing_id: str) -> Optional[BuddyPairingResponse]:
        """Load one pairing by id; None if it does not exist. Data errors propagate."""
        result = self.supabase.table(PAIRINGS_TABLE)\
            .select("*")\
            .eq("id", pairing_id)\
            .limit(1)\
            .execute()
        if not result.data:
            return None
        return BuddyPairingResponse(**result.data[0])

    def _user_pairings(self, user_id: str, week_start: date) -> List[BuddyPairingResponse]:
        result = self.supabase.table(PAIRINGS_TABLE)\
            .select("*")\
            .eq("week_start", format_week_start(week_start))\
            .or_(_member_filter(user_id))\
            .execute()
        if result.data:
            return [BuddyPairingResponse(**row) for row in result.data]

        # Nothing for this week yet: show the last known buddies instead
        latest = self.supabase.table(PAIRINGS_TABLE)\
            .select("*")\
            .or_(_member_filter(user_id))\
            .order("week_start", desc=True)\
            .limit(1)\
            .execute()
        return [BuddyPairingResponse(**row) for row in (latest.data or [])]

    def fetch_buddy_chat_rooms(self, user_id: str, week_start: Optional[date] = None) -> List[BuddyChatRoom]:
        """Buddy chat rooms for a user's current (or most recent) pairings. Best effort, never raises."""
        week_start = week_start or get_current_week_start()
        try:
            pairings = self._user_pairings(user_id, week_start)
        except Exception as e:
            logger.error(f"Error fetching buddy pairings for user {user_id}: {str(e)}")
            return []

        rooms = []
        for pairing in pairings:
            try:
                room_id = self.get_buddy_chat_room(pairing.member_ids, pairing.id, group_id=pairing.group_id)
                if not room_id:
                    logger.warning(f"Skipping pairing {pairing.id}: no buddy chat room")
                    continue
                buddy_ids = pairing.buddy_ids_for(user_id)
                rooms.append(BuddyChatRoom(
                    id=room_id,
                    name=self.get_buddy_room_name(buddy_ids),
                    group_id=pairing.group_id,
                    accountability_pairing_id=pairing.id,
                    week_start=pairing.week_start,
                    buddy_ids=buddy_ids,
                ))
            except Exception as e:
                logger.error(f"Error resolving buddy chat room for pairing {pairing.id}: {str(e)}")
        return rooms
