import asyncio
import logging
from datetime import date
from typing import Optional

from supabase import Client
from app.core.week import is_monday, local_today, week_start_for
from app.modules.buddies.service import BuddyService
from app.modules.groups.schemas import GroupSummary
from app.modules.groups.service import GroupService
from app.modules.maintenance.schemas import GroupMaintenanceResult, MaintenanceResult

logger = logging.getLogger(__name__)


async def _generate_for_group(supabase: Client, group: GroupSummary, week_start: date) -> GroupMaintenanceResult:
    service = BuddyService(supabase)
    success = await asyncio.to_thread(service.generate_weekly_buddies, group.id, True, week_start)
    return GroupMaintenanceResult(group_id=group.id, group_name=group.name, success=success)


async def run_weekly_maintenance(supabase: Client, today: Optional[date] = None) -> MaintenanceResult:
    """
    Regenerate accountability buddies for every group. Only runs on Mondays
    (reference time zone) so a scheduler firing twice in a week is harmless
    on the other days. Groups are processed concurrently; one group's failure
    shows up in its own result entry only.
    """
    today = today or local_today()
    if not is_monday(today):
        logger.info(f"Skipping weekly maintenance: {today.isoformat()} is not a Monday")
        return MaintenanceResult(success=False, rejected=True, message="Weekly maintenance should only run on Mondays")

    week_start = week_start_for(today)
    logger.info(f"Starting weekly maintenance tasks for week {week_start.isoformat()}")
    try:
        groups = await asyncio.to_thread(GroupService(supabase).list_groups)
    except Exception as e:
        logger.error(f"Error fetching groups: {str(e)}")
        return MaintenanceResult(success=False, message="Failed to fetch groups")

    if not groups:
        return MaintenanceResult(success=True, message="No groups found to process")

    logger.info(f"Processing {len(groups)} groups for weekly buddy assignments")
    outcomes = await asyncio.gather(
        *(_generate_for_group(supabase, group, week_start) for group in groups),
        return_exceptions=True,
    )

    results = []
    for group, outcome in zip(groups, outcomes):
        if isinstance(outcome, BaseException):
            logger.error(f"Error generating buddies for group {group.name}: {str(outcome)}")
            results.append(GroupMaintenanceResult(
                group_id=group.id, group_name=group.name, success=False, error=str(outcome)
            ))
        else:
            results.append(outcome)

    success_count = sum(1 for r in results if r.success)
    return MaintenanceResult(
        success=True,
        message=f"Weekly maintenance completed. Generated buddy pairings for {success_count}/{len(groups)} groups.",
        details=results,
    )


def check_and_generate_buddies(supabase: Client, group_id: str) -> bool:
    """
    Whether this week's pairings exist for the group. Read-only: generation is
    a separate, explicit call to BuddyService.generate_weekly_buddies.
    """
    logger.info(f"Checking buddy pairings for group {group_id}")
    return BuddyService(supabase).pairings_exist(group_id)
