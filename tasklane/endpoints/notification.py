from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from tasklane.models.user import User
from tasklane.schemas.response import APIResponse
from tasklane.utils import deps
from tasklane.schemas.notification import (
    Notification, NotificationBatchDelete, NotificationCount, DueDateSweepResult
)
from tasklane.services.notification import notification_service
from tasklane.services.notification_rules import notification_rules

router = APIRouter()

@router.get("/", response_model=APIResponse[List[Notification]])
async def get_my_notifications(
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.get_current_user),
    unread_only: bool = False,
    skip: int = 0,
    limit: int = 100
):
    """Retrieve notifications for the current user, newest first."""
    data = notification_service.get_user_notifications(db, user_id=user.id, unread_only=unread_only, skip=skip, limit=limit)
    return APIResponse(message="Notifications fetched successfully", data=data)

@router.get("/unread_count", response_model=APIResponse[NotificationCount])
async def get_unread_notifications_count(
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.get_current_user)
):
    """Get the count of unread notifications for the current user."""
    count = notification_service.get_unread_count(db, user_id=user.id)
    return APIResponse(message="Unread notifications count fetched successfully", data=NotificationCount(count=count))

@router.post("/mark_all_read", response_model=APIResponse[NotificationCount])
async def mark_all_notifications_as_read(
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.get_current_user)
):
    """Mark all unread notifications for the current user as read."""
    count = notification_service.mark_all_as_read(db, user_id=user.id)
    return APIResponse(message="All notifications marked as read", data=NotificationCount(count=count))

@router.post("/batch_delete", response_model=APIResponse[NotificationCount])
async def batch_delete_notifications(
    payload: NotificationBatchDelete,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.get_current_user)
):
    """Delete several of the current user's notifications at once."""
    count = notification_service.batch_delete(db, ids=payload.ids, user_id=user.id)
    return APIResponse(message="Notifications deleted", data=NotificationCount(count=count))

@router.post("/check-due-dates", response_model=APIResponse[DueDateSweepResult])
async def check_due_dates(
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.get_current_user)
):
    """Run the due-date sweep now instead of waiting for the scheduler."""
    counts = notification_rules.run_due_date_sweep(db)
    return APIResponse(message="Due date check completed", data=DueDateSweepResult(**counts))

@router.post("/{notification_id}/read", response_model=APIResponse[Notification])
async def mark_notification_as_read(
    notification_id: int,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.get_current_user)
):
    """Mark a specific notification as read."""
    notification = notification_service.set_read_state(db, notification_id=notification_id, user_id=user.id, is_read=True)
    return APIResponse(message="Notification marked as read", data=notification)

@router.post("/{notification_id}/unread", response_model=APIResponse[Notification])
async def mark_notification_as_unread(
    notification_id: int,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.get_current_user)
):
    """Mark a specific notification as unread."""
    notification = notification_service.set_read_state(db, notification_id=notification_id, user_id=user.id, is_read=False)
    return APIResponse(message="Notification marked as unread", data=notification)

@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notification(
    notification_id: int,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.get_current_user)
):
    notification_service.delete_notification(db, notification_id=notification_id, user_id=user.id)
