from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from tasklane.core.database import Base
from tasklane.core.constants import (
    NotificationTypeEnum, NOTIFICATION_TYPE_CODES,
    NotificationSeverityEnum, NOTIFICATION_SEVERITY_CODES,
)
from tasklane.models.types import CodedEnum

class Notification(Base):
    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_user_task_type", "user_id", "task_id", "type"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(CodedEnum(NotificationTypeEnum, NOTIFICATION_TYPE_CODES), nullable=False)
    severity = Column(CodedEnum(NotificationSeverityEnum, NOTIFICATION_SEVERITY_CODES), nullable=False)
    message = Column(String, nullable=True)
    is_read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Optional links; which ones are set depends on the type
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=True)
    comment_id = Column(Integer, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True)
    activity_id = Column(Integer, ForeignKey("activities.id", ondelete="CASCADE"), nullable=True)

    user = relationship("User", back_populates="notifications")
    task = relationship("Task")
    comment = relationship("Comment")
    activity = relationship("Activity")
