from supabase import Client
from app.core.week import get_current_week_start, format_week_start
from app.modules.buddies.models import PAIRINGS_TABLE
from app.modules.buddies.pairing import build_pairings, MIN_MEMBERS
from app.modules.buddies.schemas import BuddyPairingResponse, BuddyDisplayInfo, GenerationOutcome
from app.modules.groups.service import GroupService
from app.modules.profiles.service import ProfileService
from typing import List, Optional
from datetime import date
import logging
import random

logger = logging.getLogger(__name__)


class BuddyService:
    """
    Weekly accountability-buddy pairings. Public methods never raise: data
    errors are logged and reported as False or an empty list.
    """

    def __init__(self, supabase: Client, rng: Optional[random.Random] = None):
        self.supabase = supabase
        self.rng = rng
        self.groups = GroupService(supabase)
        self.profiles = ProfileService(supabase)

    def _existing_pairing_ids(self, group_id: str, week_start: date) -> List[str]:
        result = self.supabase.table(PAIRINGS_TABLE)\
            .select("id")\
            .eq("group_id", group_id)\
            .eq("week_start", format_week_start(week_start))\
            .execute()
        return [row["id"] for row in (result.data or [])]

    def generate_weekly_buddies(
        self,
        group_id: str,
        force_regenerate: bool = True,
        week_start: Optional[date] = None,
    ) -> bool:
        """Create this week's pairings for a group. True when pairings exist afterwards."""
        outcome = self.generate_pairings(group_id, force_regenerate, week_start)
        return outcome in (GenerationOutcome.CREATED, GenerationOutcome.KEPT)

    def generate_pairings(
        self,
        group_id: str,
        force_regenerate: bool = True,
        week_start: Optional[date] = None,
    ) -> GenerationOutcome:
        """
        Create this week's pairings for a group and report what happened.

        Existing pairings are kept when force_regenerate is False and replaced
        otherwise. Membership is read before anything is deleted, so a group
        with fewer than two members keeps whatever rows it had.
        Delete and insert are not atomic; re-running converges because both
        are keyed by (group_id, week_start).
        """
        week_start = week_start or get_current_week_start()
        week_key = format_week_start(week_start)
        logger.info(f"Generating buddies for group {group_id}, week starting {week_key}")
        try:
            existing = self._existing_pairing_ids(group_id, week_start)
            if existing and not force_regenerate:
                logger.info(f"Pairings already exist for group {group_id} week {week_key}; keeping them")
                return GenerationOutcome.KEPT

            member_ids = self.groups.list_member_ids(group_id)
            if len(member_ids) < MIN_MEMBERS:
                logger.warning(
                    f"Not enough members for buddy pairing in group {group_id} "
                    f"({len(member_ids)} found, {MIN_MEMBERS} needed)"
                )
                return GenerationOutcome.INSUFFICIENT_MEMBERS
            logger.info(f"Found {len(member_ids)} members for group {group_id}")

            pairings = build_pairings(group_id, member_ids, week_start, rng=self.rng)

            if existing:
                logger.info(f"Deleting {len(existing)} existing pairings for group {group_id} week {week_key}")
                self.supabase.table(PAIRINGS_TABLE)\
                    .delete()\
                    .eq("group_id", group_id)\
                    .eq("week_start", week_key)\
                    .execute()

            result = self.supabase.table(PAIRINGS_TABLE)\
                .insert([p.to_row() for p in pairings])\
                .execute()
            if not result.data:
                logger.error(f"Insert of {len(pairings)} buddy pairings for group {group_id} returned no rows")
                return GenerationOutcome.FAILED

            logger.info(f"Inserted {len(pairings)} buddy pairings for group {group_id}")
            return GenerationOutcome.CREATED
        except Exception as e:
            logger.error(f"Error generating weekly buddies for group {group_id}: {str(e)}")
            return GenerationOutcome.FAILED

    def pairings_exist(self, group_id: str, week_start: Optional[date] = None) -> bool:
        """True if the group already has pairings for the week. Never generates; False on error."""
        week_start = week_start or get_current_week_start()
        try:
            existing = self._existing_pairing_ids(group_id, week_start)
            logger.debug(f"Found {len(existing)} existing pairings for group {group_id}")
            return bool(existing)
        except Exception as e:
            logger.error(f"Error checking existing pairings for group {group_id}: {str(e)}")
            return False

    def get_group_weekly_buddies(
        self, group_id: str, week_start: Optional[date] = None
    ) -> List[BuddyPairingResponse]:
        """Pairings for a group for the given (default: current) week"""
        week_start = week_start or get_current_week_start()
        try:
            result = self.supabase.table(PAIRINGS_TABLE)\
                .select("*")\
                .eq("group_id", group_id)\
                .eq("week_start", format_week_start(week_start))\
                .execute()
            return [BuddyPairingResponse(**row) for row in (result.data or [])]
        except Exception as e:
            logger.error(f"Error fetching accountability buddies for group {group_id}: {str(e)}")
            return []

    def get_user_buddies(
        self, group_id: str, user_id: str, week_start: Optional[date] = None
    ) -> List[BuddyDisplayInfo]:
        """The user's buddies in a group this week, with display info"""
        pairings = self.get_group_weekly_buddies(group_id, week_start)
        pairing = next((p for p in pairings if user_id in p.member_ids), None)
        if pairing is None:
            return []
        buddy_ids = pairing.buddy_ids_for(user_id)
        if not buddy_ids:
            return []
        try:
            profiles = self.profiles.get_display_profiles(buddy_ids)
        except Exception as e:
            logger.error(f"Error fetching buddy profiles for user {user_id}: {str(e)}")
            return []
        buddies = []
        for buddy_id in buddy_ids:
            profile = profiles.get(buddy_id)
            if profile is None:
                continue
            buddies.append(BuddyDisplayInfo(
                user_id=profile.id,
                name=profile.full_name,
                avatar_url=profile.avatar_url,
                first_name=profile.first_name,
                last_name=profile.last_name,
            ))
        return buddies
