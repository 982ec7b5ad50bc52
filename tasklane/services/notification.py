from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from typing import List, Optional
import logging

from tasklane.core.constants import NotificationTypeEnum, NotificationSeverityEnum
from tasklane.crud.notification import notification as crud_notification
from tasklane.models.notification import Notification
from tasklane.schemas.notification import NotificationCreate

logger = logging.getLogger(__name__)

class NotificationService:
    def create_notification(
        self,
        db: Session,
        *,
        user_id: int,
        notification_type: NotificationTypeEnum,
        severity: NotificationSeverityEnum,
        task_id: Optional[int] = None,
        comment_id: Optional[int] = None,
        activity_id: Optional[int] = None,
        message: Optional[str] = None,
    ) -> Notification:
        """
        Write one notification row. Which links are set for which type is the
        caller's business; nothing is validated here and nothing is retried.
        """
        notification_in = NotificationCreate(
            user_id=user_id,
            type=notification_type,
            severity=severity,
            task_id=task_id,
            comment_id=comment_id,
            activity_id=activity_id,
            message=message,
        )
        try:
            notification = crud_notification.create(db, obj_in=notification_in)
        except Exception:
            db.rollback()
            logger.error(
                f"Failed to create {notification_type.value} notification for user {user_id}",
                exc_info=True,
            )
            raise
        logger.info(
            f"Created {notification_type.value} notification {notification.id} for user {user_id} "
            f"(task={task_id}, comment={comment_id}, activity={activity_id})"
        )
        return notification

    def get_user_notifications(self, db: Session, *, user_id: int, unread_only: bool = False, skip: int = 0, limit: int = 100) -> List[Notification]:
        return crud_notification.get_for_user(db, user_id=user_id, unread_only=unread_only, skip=skip, limit=limit)

    def get_unread_count(self, db: Session, *, user_id: int) -> int:
        return crud_notification.count_unread_for_user(db, user_id=user_id)

    def _get_owned(self, db: Session, *, notification_id: int, user_id: int) -> Notification:
        notification = crud_notification.get(db, id=notification_id)
        if not notification:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
        if notification.user_id != user_id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You cannot access this notification")
        return notification

    def set_read_state(self, db: Session, *, notification_id: int, user_id: int, is_read: bool) -> Notification:
        notification = self._get_owned(db, notification_id=notification_id, user_id=user_id)
        if notification.is_read == is_read:
            return notification
        return crud_notification.set_read_state(db, notification=notification, is_read=is_read)

    def mark_all_as_read(self, db: Session, *, user_id: int) -> int:
        return crud_notification.mark_all_as_read(db, user_id=user_id)

    def delete_notification(self, db: Session, *, notification_id: int, user_id: int) -> None:
        self._get_owned(db, notification_id=notification_id, user_id=user_id)
        crud_notification.delete(db, id=notification_id)

    def batch_delete(self, db: Session, *, ids: List[int], user_id: int) -> int:
        """All-or-nothing: every id must exist and belong to ``user_id``."""
        if not ids:
            return 0
        unique_ids = list(dict.fromkeys(ids))
        notifications = crud_notification.get_multi_by_ids(db, ids=unique_ids)
        if len(notifications) != len(unique_ids):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid notification IDs")
        if any(n.user_id != user_id for n in notifications):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You cannot delete notifications of another user")
        return crud_notification.delete_many_for_user(db, user_id=user_id, ids=unique_ids)

notification_service = NotificationService()
