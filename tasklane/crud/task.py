from datetime import datetime
from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload
from typing import Iterable, List, Optional

from tasklane.core.constants import TaskStatusEnum
from tasklane.crud.base import CRUDBase
from tasklane.models.task import Task, TaskAssignment
from tasklane.schemas.task import TaskCreate, TaskUpdate

class CRUDTask(CRUDBase[Task, TaskCreate, TaskUpdate]):
    def get_with_assignments(self, db: Session, *, task_id: int) -> Optional[Task]:
        return (
            db.query(Task)
            .options(selectinload(Task.assignments).selectinload(TaskAssignment.user))
            .filter(Task.id == task_id)
            .first()
        )

    def get_assignee_ids(self, db: Session, *, task_id: int) -> List[int]:
        rows = (
            db.query(TaskAssignment.user_id)
            .filter(TaskAssignment.task_id == task_id)
            .order_by(TaskAssignment.id)
            .all()
        )
        return [row[0] for row in rows]

    def add_assignees(self, db: Session, *, task_id: int, user_ids: Iterable[int]) -> None:
        for user_id in user_ids:
            db.add(TaskAssignment(task_id=task_id, user_id=user_id))
        db.flush()

    def remove_assignees(self, db: Session, *, task_id: int, user_ids: Iterable[int]) -> None:
        user_ids = list(user_ids)
        if not user_ids:
            return
        db.query(TaskAssignment).filter(
            TaskAssignment.task_id == task_id, TaskAssignment.user_id.in_(user_ids)
        ).delete(synchronize_session="fetch")
        db.flush()

    def get_for_workspace(self, db: Session, *, workspace_id: int, skip: int = 0, limit: int = 100) -> List[Task]:
        return (
            db.query(Task)
            .options(selectinload(Task.assignments))
            .filter(Task.workspace_id == workspace_id)
            .order_by(Task.id)
            .offset(skip)
            .limit(limit)
            .all()
        )

    def _open_tasks(self, db: Session):
        # A task without a status has not been finished either
        return db.query(Task).options(selectinload(Task.assignments)).filter(
            or_(Task.status.is_(None), Task.status != TaskStatusEnum.DONE)
        )

    def get_due_between(self, db: Session, *, after: datetime, until: datetime) -> List[Task]:
        """Open tasks with ``after < due_date <= until``."""
        return (
            self._open_tasks(db)
            .filter(Task.due_date > after, Task.due_date <= until)
            .order_by(Task.id)
            .all()
        )

    def get_due_by(self, db: Session, *, until: datetime) -> List[Task]:
        """Open tasks with ``due_date <= until``."""
        return self._open_tasks(db).filter(Task.due_date <= until).order_by(Task.id).all()

task = CRUDTask(Task)
