from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from tasklane.models.user import User
from tasklane.schemas.response import APIResponse
from tasklane.schemas.task import Task, TaskCreate, TaskUpdate, TaskStatusUpdate
from tasklane.services.task import task_service
from tasklane.utils import deps

router = APIRouter()

@router.post("/", response_model=APIResponse[Task], status_code=status.HTTP_201_CREATED)
async def create_task(
    task_in: TaskCreate,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.get_current_user)
):
    """Create a task. Initial assignees are notified that they were assigned."""
    task = task_service.create_task(db, task_in=task_in, user_id=user.id)
    return APIResponse(message="Task created successfully", data=task)

@router.get("/{task_id}", response_model=APIResponse[Task])
async def get_task(
    task_id: int,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.get_current_user)
):
    task = task_service.get_task(db, task_id=task_id)
    return APIResponse(message="Task fetched successfully", data=task)

@router.patch("/{task_id}", response_model=APIResponse[Task])
async def update_task(
    task_id: int,
    task_in: TaskUpdate,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.get_current_user)
):
    """
    Update task fields. Every changed aspect is recorded as its own activity
    and assignees other than the editor are notified about each one.
    """
    task = task_service.update_task(db, task_id=task_id, task_in=task_in, user_id=user.id)
    return APIResponse(message="Task updated successfully", data=task)

@router.patch("/{task_id}/status", response_model=APIResponse[Task])
async def update_task_status(
    task_id: int,
    status_in: TaskStatusUpdate,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.get_current_user)
):
    task = task_service.update_task_status(db, task_id=task_id, new_status=status_in.status, user_id=user.id)
    return APIResponse(message="Task status updated successfully", data=task)
