from supabase import Client
from app.modules.groups.schemas import GroupSummary
from typing import List


class GroupService:
    """Read-only access to groups and their membership. Errors propagate to the caller."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_groups(self) -> List[GroupSummary]:
        """List every group (id and name)"""
        result = self.supabase.table("groups")\
            .select("id, name")\
            .execute()
        return [GroupSummary(**group) for group in (result.data or [])]

    def list_member_ids(self, group_id: str) -> List[str]:
        """Distinct user ids of all members of a group, in row order"""
        result = self.supabase.table("group_members")\
            .select("user_id")\
            .eq("group_id", group_id)\
            .execute()
        return list(dict.fromkeys(member["user_id"] for member in (result.data or [])))

    def is_member(self, group_id: str, user_id: str) -> bool:
        result = self.supabase.table("group_members")\
            .select("id")\
            .eq("group_id", group_id)\
            .eq("user_id", user_id)\
            .execute()
        return bool(result.data)

    def is_coach(self, group_id: str, user_id: str) -> bool:
        result = self.supabase.table("group_coaches")\
            .select("id")\
            .eq("group_id", group_id)\
            .eq("coach_id", user_id)\
            .execute()
        return bool(result.data)
