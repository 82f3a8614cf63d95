"""Partition a group's members into weekly accountability pairings."""
import logging
import random
from datetime import date
from typing import List, Optional, Sequence

from app.modules.buddies.schemas import BuddyPairingCreate

logger = logging.getLogger(__name__)

MIN_MEMBERS = 2


class InsufficientMembersError(ValueError):
    """Raised when a group has fewer members than a single pairing needs."""


def shuffle_members(member_ids: Sequence[str], rng: Optional[random.Random] = None) -> List[str]:
    """Return a shuffled copy of member_ids (Fisher-Yates via random.shuffle)."""
    shuffled = list(member_ids)
    (rng or random).shuffle(shuffled)
    return shuffled


def partition_members(member_ids: Sequence[str]) -> List[List[str]]:
    """
    Split an already-ordered member list into pairs. An odd-sized list puts its
    first three members into one triplet and pairs the rest.
    """
    if len(member_ids) < MIN_MEMBERS:
        raise InsufficientMembersError(
            f"At least {MIN_MEMBERS} members are needed, got {len(member_ids)}"
        )
    members = list(member_ids)
    groups: List[List[str]] = []
    if len(members) % 2 != 0:
        groups.append(members[:3])
        members = members[3:]
    for i in range(0, len(members), 2):
        groups.append(members[i:i + 2])
    return groups


def build_pairings(
    group_id: str,
    member_ids: Sequence[str],
    week_start: date,
    rng: Optional[random.Random] = None,
) -> List[BuddyPairingCreate]:
    """Shuffle member_ids and build the pairing rows for one group and week."""
    if len(set(member_ids)) != len(member_ids):
        # group_members should not hold duplicates; pair each user once regardless
        member_ids = list(dict.fromkeys(member_ids))
    units = partition_members(shuffle_members(member_ids, rng))
    pairings = []
    for unit in units:
        logger.debug(f"Pairing {', '.join(unit)} for group {group_id}")
        pairings.append(BuddyPairingCreate(
            group_id=group_id,
            user_id_1=unit[0],
            user_id_2=unit[1],
            user_id_3=unit[2] if len(unit) == 3 else None,
            week_start=week_start,
        ))
    return pairings
