from sqlalchemy.orm import Session, joinedload
from typing import List

from tasklane.crud.base import CRUDBase
from tasklane.models.activity import Activity
from tasklane.schemas.activity import ActivityCreate

class CRUDActivity(CRUDBase[Activity, ActivityCreate, ActivityCreate]):
    """Activities are append-only; there is no update path."""

    def get_for_task(self, db: Session, *, task_id: int) -> List[Activity]:
        return (
            db.query(self.model)
            .options(joinedload(self.model.user))
            .filter(self.model.task_id == task_id)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .all()
        )

activity = CRUDActivity(Activity)
