from datetime import datetime, timedelta, timezone
from sqlalchemy.orm import Session
from typing import Dict, Iterable, List, Optional
import logging

from tasklane.core.config import settings
from tasklane.core.constants import NotificationTypeEnum, NotificationSeverityEnum
from tasklane.crud.notification import notification as crud_notification
from tasklane.crud.task import task as crud_task
from tasklane.crud.user import user as crud_user
from tasklane.models.notification import Notification
from tasklane.models.task import Task
from tasklane.services.mentions import parse_mentions
from tasklane.services.notification import notification_service

logger = logging.getLogger(__name__)

MENTION_MESSAGE = "You were mentioned in a comment"
TASK_EDITED_MESSAGE = "A task you're assigned to was edited"
ASSIGNED_MESSAGE = "assigned"
REMOVED_MESSAGE = "removed"

class NotificationRules:
    """Turns task and comment events into notifications.

    The user who caused an event never receives a notification about it.
    """

    def notify_mentions(self, db: Session, *, comment_id: int, text: str, task_id: int, author_user_id: int) -> List[Notification]:
        usernames = parse_mentions(text)
        if not usernames:
            return []

        recipients = crud_user.get_by_usernames_insensitive(db, usernames=usernames)
        created = []
        for recipient in recipients:
            if recipient.id == author_user_id:
                continue
            created.append(notification_service.create_notification(
                db,
                user_id=recipient.id,
                notification_type=NotificationTypeEnum.MENTION,
                severity=NotificationSeverityEnum.INFO,
                task_id=task_id,
                comment_id=comment_id,
                message=MENTION_MESSAGE,
            ))
        return created

    def notify_task_edit(self, db: Session, *, task_id: int, activity_id: int, editor_user_id: int) -> List[Notification]:
        created = []
        for assignee_id in crud_task.get_assignee_ids(db, task_id=task_id):
            if assignee_id == editor_user_id:
                continue
            created.append(notification_service.create_notification(
                db,
                user_id=assignee_id,
                notification_type=NotificationTypeEnum.TASK_EDITED,
                severity=NotificationSeverityEnum.INFO,
                task_id=task_id,
                activity_id=activity_id,
                message=TASK_EDITED_MESSAGE,
            ))
        return created

    def notify_reassignment(
        self,
        db: Session,
        *,
        task_id: int,
        added_user_ids: Iterable[int],
        removed_user_ids: Iterable[int],
        changed_by_user_id: int,
    ) -> List[Notification]:
        created = []
        for user_ids, message in ((added_user_ids, ASSIGNED_MESSAGE), (removed_user_ids, REMOVED_MESSAGE)):
            for user_id in dict.fromkeys(user_ids):
                if user_id == changed_by_user_id:
                    continue
                created.append(notification_service.create_notification(
                    db,
                    user_id=user_id,
                    notification_type=NotificationTypeEnum.TASK_REASSIGNED,
                    severity=NotificationSeverityEnum.INFO,
                    task_id=task_id,
                    message=message,
                ))
        return created

    def _notify_assignees_once(
        self,
        db: Session,
        tasks: List[Task],
        notification_type: NotificationTypeEnum,
        severity: NotificationSeverityEnum,
        message_template: str,
    ) -> int:
        count = 0
        for task in tasks:
            for assignment in task.assignments:
                if crud_notification.exists_for(db, user_id=assignment.user_id, task_id=task.id, notification_type=notification_type):
                    continue
                notification_service.create_notification(
                    db,
                    user_id=assignment.user_id,
                    notification_type=notification_type,
                    severity=severity,
                    task_id=task.id,
                    message=message_template.format(title=task.title),
                )
                count += 1
        return count

    def run_due_date_sweep(self, db: Session, *, now: Optional[datetime] = None) -> Dict[str, int]:
        """
        Notify assignees of open tasks that are due soon or already overdue.

        A task due within the window gets NEAR_OVERDUE; one whose due date has
        passed gets OVERDUE. Each (user, task, type) is notified at most once,
        so running the sweep repeatedly is safe.
        """
        now = now or datetime.now(timezone.utc)
        window_hours = settings.NEAR_OVERDUE_WINDOW_HOURS
        window_end = now + timedelta(hours=window_hours)

        near_overdue_tasks = crud_task.get_due_between(db, after=now, until=window_end)
        near_overdue_count = self._notify_assignees_once(
            db,
            near_overdue_tasks,
            NotificationTypeEnum.NEAR_OVERDUE,
            NotificationSeverityEnum.INFO,
            'Task "{title}" is due within ' + f"{window_hours} hours",
        )

        overdue_tasks = crud_task.get_due_by(db, until=now)
        overdue_count = self._notify_assignees_once(
            db,
            overdue_tasks,
            NotificationTypeEnum.OVERDUE,
            NotificationSeverityEnum.CRITICAL,
            'Task "{title}" is overdue',
        )

        logger.info(f"Due date sweep created {near_overdue_count} near-overdue and {overdue_count} overdue notifications")
        return {"near_overdue_count": near_overdue_count, "overdue_count": overdue_count}

notification_rules = NotificationRules()
