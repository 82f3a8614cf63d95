"""
Core dependencies for route protection and permission checking
"""

import hmac
import logging

from fastapi import Depends, Header, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from supabase import Client
from typing import Optional

from app.config import settings
from app.database.supabase_client import get_supabase
from app.modules.auth.service import AuthService
from app.modules.groups.service import GroupService

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    token = credentials.credentials
    user_data = auth_service.get_current_user(token)
    return user_data


def is_admin(user_data: dict, supabase: Client) -> bool:
    """Admins are flagged in app_metadata (super_user) or in profiles.is_admin"""
    app_metadata = user_data.get("app_metadata", {})
    if app_metadata.get("type") == "super_user":
        return True
    try:
        result = supabase.table("profiles")\
            .select("is_admin")\
            .eq("id", user_data["id"])\
            .execute()
        return bool(result.data and result.data[0].get("is_admin"))
    except Exception as e:
        logger.error(f"Error checking admin flag: {e}")
        return False


def check_group_coach(
    group_id: str,
    user_data: dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase)
) -> dict:
    """Check if user coaches the group or is an admin"""
    if is_admin(user_data, supabase):
        return user_data
    if GroupService(supabase).is_coach(group_id, user_data["id"]):
        return user_data
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="You must be a coach of this group to perform this action"
    )


def check_group_member(
    group_id: str,
    user_data: dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase)
) -> dict:
    """Check if user is a member or coach of a group, or an admin"""
    if is_admin(user_data, supabase):
        return user_data
    groups = GroupService(supabase)
    if groups.is_member(group_id, user_data["id"]) or groups.is_coach(group_id, user_data["id"]):
        return user_data
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="You must be a member of this group"
    )


def require_cron_secret(x_cron_secret: Optional[str] = Header(default=None)) -> None:
    """Guard for endpoints called by the external scheduler"""
    if not settings.cron_secret:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Scheduled maintenance is not configured"
        )
    if not x_cron_secret or not hmac.compare_digest(x_cron_secret, settings.cron_secret):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid cron secret"
        )
