from fastapi import APIRouter, Depends, HTTPException
from app.core.dependencies import check_group_coach, check_group_member
from app.core.week import get_current_week_start
from app.database.supabase_client import get_supabase
from app.modules.buddies.schemas import (
    BuddyPairingResponse, BuddyDisplayInfo, BuddyStatusResponse,
    GenerateBuddiesRequest, GenerateBuddiesResponse, GenerationOutcome
)
from app.modules.buddies.pairing import MIN_MEMBERS
from app.modules.buddies.service import BuddyService
from app.modules.maintenance.service import check_and_generate_buddies
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/buddies", tags=["buddies"])


def get_buddy_service(supabase: Client = Depends(get_supabase)) -> BuddyService:
    return BuddyService(supabase)


@router.get("/groups/{group_id}", response_model=List[BuddyPairingResponse])
async def list_group_buddies(
    group_id: str,
    user_data: Dict = Depends(check_group_member),
    service: BuddyService = Depends(get_buddy_service)
):
    """This week's buddy pairings for a group"""
    return service.get_group_weekly_buddies(group_id)


@router.get("/groups/{group_id}/me", response_model=List[BuddyDisplayInfo])
async def list_my_buddies(
    group_id: str,
    user_data: Dict = Depends(check_group_member),
    service: BuddyService = Depends(get_buddy_service)
):
    """The current user's accountability buddies in a group this week"""
    return service.get_user_buddies(group_id, user_data["id"])


@router.get("/groups/{group_id}/status", response_model=BuddyStatusResponse)
async def buddy_status(
    group_id: str,
    user_data: Dict = Depends(check_group_member),
    supabase: Client = Depends(get_supabase)
):
    """Whether pairings exist for the current week (does not generate them)"""
    return BuddyStatusResponse(
        group_id=group_id,
        week_start=get_current_week_start(),
        exists=check_and_generate_buddies(supabase, group_id),
    )


@router.post("/groups/{group_id}/generate", response_model=GenerateBuddiesResponse)
async def generate_buddies(
    group_id: str,
    request: Optional[GenerateBuddiesRequest] = None,
    user_data: Dict = Depends(check_group_coach),
    service: BuddyService = Depends(get_buddy_service)
):
    """Generate (or, with force_regenerate, reassign) this week's pairings (group coach or admin)"""
    force_regenerate = request.force_regenerate if request else True
    week_start = get_current_week_start()
    outcome = service.generate_pairings(group_id, force_regenerate, week_start=week_start)
    if outcome == GenerationOutcome.INSUFFICIENT_MEMBERS:
        raise HTTPException(
            status_code=422,
            detail=f"Not enough members for buddy pairing; at least {MIN_MEMBERS} are needed"
        )
    if outcome == GenerationOutcome.FAILED:
        raise HTTPException(status_code=500, detail="Failed to generate buddy pairings")
    return GenerateBuddiesResponse(
        group_id=group_id,
        week_start=week_start,
        success=True,
        pairings=service.get_group_weekly_buddies(group_id, week_start),
    )
