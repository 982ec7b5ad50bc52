from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from tasklane.models.user import User
from tasklane.schemas.activity import Activity
from tasklane.schemas.response import APIResponse
from tasklane.services.activity import activity_service
from tasklane.utils import deps

router = APIRouter()

@router.get("/", response_model=APIResponse[List[Activity]])
async def get_task_activities(
    task_id: int,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.get_current_user)
):
    """Activity feed of a task, newest first."""
    data = activity_service.get_task_activities(db, task_id=task_id)
    return APIResponse(message="Activities fetched successfully", data=data)
