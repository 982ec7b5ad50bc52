from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import List, Optional

from tasklane.core.constants import NotificationTypeEnum, NotificationSeverityEnum, ActivityTypeEnum

class NotificationTaskRef(BaseModel):
    id: int
    title: str
    model_config = ConfigDict(from_attributes=True)

class NotificationCommentRef(BaseModel):
    id: int
    text: str
    model_config = ConfigDict(from_attributes=True)

class NotificationActivityRef(BaseModel):
    id: int
    activity_type: ActivityTypeEnum
    edit_field: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)

class NotificationBase(BaseModel):
    """Base schema for a notification."""
    type: NotificationTypeEnum
    severity: NotificationSeverityEnum
    message: Optional[str] = None
    task_id: Optional[int] = None
    comment_id: Optional[int] = None
    activity_id: Optional[int] = None

class NotificationCreate(NotificationBase):
    """Schema for creating a notification."""
    user_id: int

class NotificationUpdate(BaseModel):
    """Schema for updating a notification (read state only)."""
    is_read: bool

class Notification(NotificationBase):
    """Schema for reading a notification, includes ID, status and linked records."""
    id: int
    user_id: int
    is_read: bool
    created_at: Optional[datetime] = None
    task: Optional[NotificationTaskRef] = None
    comment: Optional[NotificationCommentRef] = None
    activity: Optional[NotificationActivityRef] = None

    model_config = ConfigDict(from_attributes=True)

class NotificationBatchDelete(BaseModel):
    ids: List[int]

class NotificationCount(BaseModel):
    count: int

class DueDateSweepResult(BaseModel):
    near_overdue_count: int
    overdue_count: int
