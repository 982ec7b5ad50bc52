from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from typing import List, Optional
import logging

from tasklane.core.constants import ActivityTypeEnum
from tasklane.core.exceptions import ActivityValidationError
from tasklane.crud.activity import activity as crud_activity
from tasklane.crud.task import task as crud_task
from tasklane.models.activity import Activity
from tasklane.schemas.activity import ActivityCreate

logger = logging.getLogger(__name__)

class ActivityService:
    def create_activity(
        self,
        db: Session,
        *,
        task_id: int,
        user_id: int,
        activity_type: ActivityTypeEnum,
        previous_status: Optional[str] = None,
        new_status: Optional[str] = None,
        edit_field: Optional[str] = None,
    ) -> Activity:
        """Record an immutable task event. Input is checked before anything is written."""
        if activity_type == ActivityTypeEnum.MOVE_TASK and (not previous_status or not new_status):
            raise ActivityValidationError("A move activity needs both the previous and the new status")
        if activity_type == ActivityTypeEnum.EDIT_TASK and (not edit_field or not edit_field.strip()):
            raise ActivityValidationError("An edit activity needs a description of what was edited")

        activity_in = ActivityCreate(
            task_id=task_id,
            user_id=user_id,
            activity_type=activity_type,
            previous_status=previous_status,
            new_status=new_status,
            edit_field=edit_field,
        )
        activity = crud_activity.create(db, obj_in=activity_in)
        logger.info(f"Recorded {activity_type.value} activity {activity.id} on task {task_id} by user {user_id}")
        return activity

    def get_task_activities(self, db: Session, *, task_id: int) -> List[Activity]:
        if not crud_task.get(db, id=task_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
        return crud_activity.get_for_task(db, task_id=task_id)

activity_service = ActivityService()
