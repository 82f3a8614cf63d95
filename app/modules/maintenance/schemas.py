from pydantic import BaseModel
from typing import Optional, List


class GroupMaintenanceResult(BaseModel):
    group_id: str
    group_name: str
    success: bool
    error: Optional[str] = None


class MaintenanceResult(BaseModel):
    success: bool
    message: str
    rejected: bool = False  # precondition failed (not a Monday); nothing was processed
    details: List[GroupMaintenanceResult] = []
