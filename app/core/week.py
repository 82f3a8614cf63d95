"""Calendar-week helpers for weekly buddy pairings.

All "current week" decisions are made in the reference time zone from
settings.buddy_timezone so the web app and the scheduler agree on which
Monday a pairing belongs to.
"""
from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from app.config import settings


def local_today(now: Optional[datetime] = None, tz: Optional[str] = None) -> date:
    """Today's date in the reference time zone. Naive datetimes are taken as UTC."""
    zone = ZoneInfo(tz or settings.buddy_timezone)
    if now is None:
        now = datetime.now(zone)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=ZoneInfo("UTC"))
    return now.astimezone(zone).date()


def week_start_for(day: date) -> date:
    """Monday of the week containing day."""
    return day - timedelta(days=day.weekday())


def get_current_week_start(now: Optional[datetime] = None, tz: Optional[str] = None) -> date:
    return week_start_for(local_today(now, tz))


def format_week_start(week_start: date) -> str:
    return week_start.strftime("%Y-%m-%d")


def is_monday(today: Optional[date] = None) -> bool:
    if today is None:
        today = local_today()
    return today.weekday() == 0
