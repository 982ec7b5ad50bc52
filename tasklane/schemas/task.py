from pydantic import BaseModel, ConfigDict, field_validator
from datetime import datetime
from typing import List, Optional

from tasklane.core.constants import TaskStatusEnum
from tasklane.schemas.user import UserSummary

class TaskBase(BaseModel):
    title: str
    description: Optional[str] = None
    status: Optional[TaskStatusEnum] = None
    priority: Optional[str] = None
    start_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    points: Optional[int] = None
    workspace_id: Optional[int] = None

class TaskCreate(TaskBase):
    assignee_ids: List[int] = []

    @field_validator("title")
    def title_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("Task title cannot be empty")
        return v

class TaskUpdate(BaseModel):
    """Partial update. Only fields present in the request body are applied."""
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatusEnum] = None
    priority: Optional[str] = None
    start_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    points: Optional[int] = None
    assignee_ids: Optional[List[int]] = None

class TaskStatusUpdate(BaseModel):
    status: TaskStatusEnum

class TaskAssignment(BaseModel):
    user_id: int
    user: Optional[UserSummary] = None
    model_config = ConfigDict(from_attributes=True)

class Task(TaskBase):
    id: int
    author_user_id: int
    assignments: List[TaskAssignment] = []
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)
