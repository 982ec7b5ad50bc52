from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional

from tasklane.core.constants import ActivityTypeEnum
from tasklane.schemas.user import UserSummary

class ActivityCreate(BaseModel):
    """Input to the activity recorder. Field presence is checked by the recorder, not here."""
    task_id: int
    user_id: int
    activity_type: ActivityTypeEnum
    previous_status: Optional[str] = None
    new_status: Optional[str] = None
    edit_field: Optional[str] = None

class Activity(BaseModel):
    id: int
    task_id: int
    user_id: int
    activity_type: ActivityTypeEnum
    previous_status: Optional[str] = None
    new_status: Optional[str] = None
    edit_field: Optional[str] = None
    created_at: Optional[datetime] = None
    user: Optional[UserSummary] = None

    model_config = ConfigDict(from_attributes=True)
