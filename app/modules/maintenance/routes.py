from fastapi import APIRouter, Depends, HTTPException
from app.core.dependencies import require_cron_secret
from app.database.supabase_client import get_service_supabase
from app.modules.maintenance.schemas import MaintenanceResult
from app.modules.maintenance.service import run_weekly_maintenance
from supabase import Client

router = APIRouter(prefix="/maintenance", tags=["maintenance"])


@router.post("/weekly", response_model=MaintenanceResult, dependencies=[Depends(require_cron_secret)])
async def weekly_maintenance(supabase: Client = Depends(get_service_supabase)):
    """Weekly buddy regeneration for every group (called by the scheduler on Mondays)"""
    result = await run_weekly_maintenance(supabase)
    if not result.success:
        status_code = 409 if result.rejected else 500
        raise HTTPException(status_code=status_code, detail=result.message)
    return result
