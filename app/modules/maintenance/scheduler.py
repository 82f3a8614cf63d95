import asyncio
import logging
from datetime import date
from typing import Optional

from app.config import settings
from app.core.week import is_monday, local_today, week_start_for
from app.database.supabase_client import get_service_supabase
from app.modules.maintenance.service import run_weekly_maintenance

logger = logging.getLogger(__name__)

_last_run_week: Optional[date] = None


async def run_if_due(today: Optional[date] = None) -> bool:
    """Run weekly maintenance once per Monday. Returns True if it ran."""
    global _last_run_week
    today = today or local_today()
    if not is_monday(today) or _last_run_week == week_start_for(today):
        return False
    result = await run_weekly_maintenance(get_service_supabase(), today=today)
    logger.info(f"Weekly maintenance: {result.message}")
    if result.success:
        _last_run_week = week_start_for(today)
    return True


async def weekly_scheduler_loop():
    """Background task that runs buddy maintenance on Mondays"""
    while True:
        try:
            await run_if_due()
        except Exception as e:
            logger.error(f"Error in weekly scheduler loop: {str(e)}")

        await asyncio.sleep(settings.weekly_scheduler_interval_seconds)
