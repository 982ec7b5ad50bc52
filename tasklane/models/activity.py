from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from tasklane.core.database import Base
from tasklane.core.constants import ActivityTypeEnum, ACTIVITY_TYPE_CODES
from tasklane.models.types import CodedEnum

class Activity(Base):
    """Immutable audit entry for a task event."""
    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    activity_type = Column(CodedEnum(ActivityTypeEnum, ACTIVITY_TYPE_CODES), nullable=False)
    previous_status = Column(String, nullable=True)  # MOVE_TASK only
    new_status = Column(String, nullable=True)  # MOVE_TASK only
    edit_field = Column(String, nullable=True)  # EDIT_TASK only

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    task = relationship("Task", back_populates="activities")
    user = relationship("User")
