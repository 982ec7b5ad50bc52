from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from typing import List
import logging

from tasklane.crud.comment import comment as crud_comment
from tasklane.crud.task import task as crud_task
from tasklane.models.comment import Comment
from tasklane.schemas.comment import CommentCreate
from tasklane.services.notification_rules import notification_rules
from tasklane.utils.best_effort import run_best_effort

logger = logging.getLogger(__name__)

class CommentService:
    def create_comment(self, db: Session, *, comment_in: CommentCreate, user_id: int) -> Comment:
        if not crud_task.get(db, id=comment_in.task_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")

        comment = crud_comment.create(db, obj_in={**comment_in.model_dump(), "user_id": user_id})
        logger.info(f"User {user_id} commented on task {comment.task_id} (comment {comment.id})")

        run_best_effort(
            db, "notify mentions", notification_rules.notify_mentions,
            comment_id=comment.id, text=comment.text, task_id=comment.task_id, author_user_id=user_id,
        )
        return comment

    def get_task_comments(self, db: Session, *, task_id: int) -> List[Comment]:
        if not crud_task.get(db, id=task_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
        return crud_comment.get_for_task(db, task_id=task_id)

comment_service = CommentService()
