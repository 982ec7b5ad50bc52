from sqlalchemy.orm import Session, joinedload
from typing import List

from tasklane.crud.base import CRUDBase
from tasklane.models.comment import Comment
from tasklane.schemas.comment import CommentCreate

class CRUDComment(CRUDBase[Comment, CommentCreate, CommentCreate]):
    def get_for_task(self, db: Session, *, task_id: int) -> List[Comment]:
        return (
            db.query(Comment)
            .options(joinedload(Comment.user))
            .filter(Comment.task_id == task_id)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
            .all()
        )

comment = CRUDComment(Comment)
