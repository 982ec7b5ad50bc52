from datetime import datetime, timezone
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from typing import Any, Dict, List, Optional
import logging

from tasklane.core.constants import ActivityTypeEnum, TaskStatusEnum
from tasklane.crud.task import task as crud_task
from tasklane.crud.user import user as crud_user
from tasklane.models.task import Task
from tasklane.schemas.task import TaskCreate, TaskUpdate
from tasklane.services.activity import activity_service
from tasklane.services.guard import membership_guard
from tasklane.services.notification_rules import notification_rules
from tasklane.utils.best_effort import run_best_effort

logger = logging.getLogger(__name__)

def _to_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

def _calendar_day(value: Optional[datetime]):
    value = _to_utc(value)
    return value.date() if value else None

def describe_task_changes(task: Task, update_data: Dict[str, Any]) -> List[str]:
    """One human-readable description per changed aspect of ``task``."""
    changes = []
    if "title" in update_data and update_data["title"] != task.title:
        changes.append("updated the title")
    if "description" in update_data and update_data["description"] != task.description:
        changes.append("updated the description")
    if "status" in update_data and update_data["status"] != task.status:
        new_status = update_data["status"]
        changes.append(f"changed the status to {new_status.value}" if new_status else "removed the status")
    if "priority" in update_data and update_data["priority"] != task.priority:
        new_priority = update_data["priority"]
        changes.append(f"changed the priority to {new_priority}" if new_priority else "removed the priority")
    for field, label in (("start_date", "start date"), ("due_date", "due date")):
        if field in update_data and _calendar_day(update_data[field]) != _calendar_day(getattr(task, field)):
            changes.append(f"set the {label}" if update_data[field] else f"removed the {label}")
    if "points" in update_data and update_data["points"] != task.points:
        new_points = update_data["points"]
        changes.append(f"updated the points to {new_points}" if new_points is not None else "removed the points")
    return changes

class TaskService:
    def get_task(self, db: Session, *, task_id: int) -> Task:
        task = crud_task.get_with_assignments(db, task_id=task_id)
        if not task:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
        return task

    def get_workspace_tasks(self, db: Session, *, workspace_id: int, skip: int = 0, limit: int = 100) -> List[Task]:
        return crud_task.get_for_workspace(db, workspace_id=workspace_id, skip=skip, limit=limit)

    def _check_assignees(self, db: Session, user_ids: List[int]) -> None:
        if len(crud_user.get_multi_by_ids(db, ids=user_ids)) != len(user_ids):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="One or more assignees do not exist")

    def create_task(self, db: Session, *, task_in: TaskCreate, user_id: int) -> Task:
        if task_in.workspace_id is not None and not membership_guard.is_member(db, workspace_id=task_in.workspace_id, user_id=user_id):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not a member of this workspace")

        assignee_ids = list(dict.fromkeys(task_in.assignee_ids))
        self._check_assignees(db, assignee_ids)

        task_data = task_in.model_dump(exclude={"assignee_ids"})
        task_data["start_date"] = _to_utc(task_data["start_date"])
        task_data["due_date"] = _to_utc(task_data["due_date"])
        task_data["author_user_id"] = user_id
        try:
            task = crud_task.create(db, obj_in=task_data, commit=False)
            crud_task.add_assignees(db, task_id=task.id, user_ids=assignee_ids)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"User {user_id} created task {task.id}")

        run_best_effort(
            db, "record task creation", activity_service.create_activity,
            task_id=task.id, user_id=user_id, activity_type=ActivityTypeEnum.CREATE_TASK,
        )
        if assignee_ids:
            run_best_effort(
                db, "notify initial assignees", notification_rules.notify_reassignment,
                task_id=task.id, added_user_ids=assignee_ids, removed_user_ids=[], changed_by_user_id=user_id,
            )
        return self.get_task(db, task_id=task.id)

    def update_task_status(self, db: Session, *, task_id: int, new_status: TaskStatusEnum, user_id: int) -> Task:
        task = self.get_task(db, task_id=task_id)
        previous_status = task.status
        if previous_status == new_status:
            return task

        task.status = new_status
        db.add(task)
        db.commit()
        logger.info(f"User {user_id} moved task {task_id} to '{new_status.value}'")

        if previous_status is None:
            activity = run_best_effort(
                db, "record task status change", activity_service.create_activity,
                task_id=task_id, user_id=user_id, activity_type=ActivityTypeEnum.EDIT_TASK,
                edit_field=f"changed the status to {new_status.value}",
            )
        else:
            activity = run_best_effort(
                db, "record task move", activity_service.create_activity,
                task_id=task_id, user_id=user_id, activity_type=ActivityTypeEnum.MOVE_TASK,
                previous_status=previous_status.value, new_status=new_status.value,
            )
        if activity:
            run_best_effort(
                db, "notify task edit", notification_rules.notify_task_edit,
                task_id=task_id, activity_id=activity.id, editor_user_id=user_id,
            )
        return self.get_task(db, task_id=task_id)

    def update_task(self, db: Session, *, task_id: int, task_in: TaskUpdate, user_id: int) -> Task:
        task = self.get_task(db, task_id=task_id)
        update_data = task_in.model_dump(exclude_unset=True)
        assignee_ids = update_data.pop("assignee_ids", None)

        if "title" in update_data and (not update_data["title"] or not update_data["title"].strip()):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Task title cannot be empty")
        for field in ("start_date", "due_date"):
            if field in update_data:
                update_data[field] = _to_utc(update_data[field])

        edit_fields = describe_task_changes(task, update_data)

        added_ids: List[int] = []
        removed_ids: List[int] = []
        if assignee_ids is not None:
            wanted = list(dict.fromkeys(assignee_ids))
            self._check_assignees(db, wanted)
            current = crud_task.get_assignee_ids(db, task_id=task_id)
            added_ids = [uid for uid in wanted if uid not in current]
            removed_ids = [uid for uid in current if uid not in wanted]
            if added_ids or removed_ids:
                edit_fields.append("updated the assignees")

        try:
            for field, value in update_data.items():
                setattr(task, field, value)
            db.add(task)
            crud_task.remove_assignees(db, task_id=task_id, user_ids=removed_ids)
            crud_task.add_assignees(db, task_id=task_id, user_ids=added_ids)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"User {user_id} updated task {task_id}: {', '.join(edit_fields) or 'no changes'}")

        for edit_field in edit_fields:
            activity = run_best_effort(
                db, "record task edit", activity_service.create_activity,
                task_id=task_id, user_id=user_id, activity_type=ActivityTypeEnum.EDIT_TASK, edit_field=edit_field,
            )
            if activity:
                run_best_effort(
                    db, "notify task edit", notification_rules.notify_task_edit,
                    task_id=task_id, activity_id=activity.id, editor_user_id=user_id,
                )
        if added_ids or removed_ids:
            run_best_effort(
                db, "notify reassignment", notification_rules.notify_reassignment,
                task_id=task_id, added_user_ids=added_ids, removed_user_ids=removed_ids, changed_by_user_id=user_id,
            )

        db.expire_all()
        return self.get_task(db, task_id=task_id)

task_service = TaskService()
