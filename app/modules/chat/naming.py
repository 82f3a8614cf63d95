"""Display names for buddy chat rooms, seen from one member's side."""
from typing import Optional, Sequence

from app.modules.chat.models import DEFAULT_BUDDY_ROOM_NAME


def build_buddy_room_name(buddy_names: Sequence[Optional[str]], max_length: int = 35) -> str:
    """
    "You, Ann B. & Carl D." when it fits in max_length, otherwise
    "You & 2 accountability buddies"; the generic room name when no buddy
    name is known.
    """
    names = [n for n in buddy_names if n]
    if not names:
        return DEFAULT_BUDDY_ROOM_NAME
    full = "You, " + " & ".join(names)
    if len(full) > max_length:
        return f"You & {len(names)} accountability {'buddy' if len(names) == 1 else 'buddies'}"
    return full
