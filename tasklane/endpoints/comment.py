from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from tasklane.models.user import User
from tasklane.schemas.comment import Comment, CommentCreate
from tasklane.schemas.response import APIResponse
from tasklane.services.comment import comment_service
from tasklane.utils import deps

router = APIRouter()

@router.post("/", response_model=APIResponse[Comment], status_code=status.HTTP_201_CREATED)
async def create_comment(
    comment_in: CommentCreate,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.get_current_user)
):
    """Comment on a task. Users @mentioned in the text are notified."""
    comment = comment_service.create_comment(db, comment_in=comment_in, user_id=user.id)
    return APIResponse(message="Comment created successfully", data=comment)

@router.get("/", response_model=APIResponse[List[Comment]])
async def get_task_comments(
    task_id: int,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.get_current_user)
):
    data = comment_service.get_task_comments(db, task_id=task_id)
    return APIResponse(message="Comments fetched successfully", data=data)
