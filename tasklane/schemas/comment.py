from pydantic import BaseModel, ConfigDict, field_validator
from datetime import datetime
from typing import Optional

from tasklane.schemas.user import UserSummary

class CommentCreate(BaseModel):
    task_id: int
    text: str

    @field_validator("text")
    def text_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("Comment text cannot be empty")
        return v

class Comment(BaseModel):
    id: int
    task_id: int
    user_id: int
    text: str
    created_at: Optional[datetime] = None
    user: Optional[UserSummary] = None
    model_config = ConfigDict(from_attributes=True)
