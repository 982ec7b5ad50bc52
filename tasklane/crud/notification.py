from sqlalchemy.orm import Session, joinedload
from typing import List

from tasklane.core.constants import NotificationTypeEnum
from tasklane.crud.base import CRUDBase
from tasklane.models.notification import Notification
from tasklane.schemas.notification import NotificationCreate, NotificationUpdate

class CRUDNotification(CRUDBase[Notification, NotificationCreate, NotificationUpdate]):
    """CRUD operations for Notifications."""

    def _with_links(self, db: Session):
        return db.query(self.model).options(
            joinedload(self.model.task),
            joinedload(self.model.comment),
            joinedload(self.model.activity),
        )

    def get_for_user(self, db: Session, *, user_id: int, unread_only: bool = False, skip: int = 0, limit: int = 100) -> List[Notification]:
        query = self._with_links(db).filter(self.model.user_id == user_id)
        if unread_only:
            query = query.filter(self.model.is_read == False)
        return query.order_by(self.model.created_at.desc(), self.model.id.desc()).offset(skip).limit(limit).all()

    def count_unread_for_user(self, db: Session, *, user_id: int) -> int:
        return db.query(self.model).filter(self.model.user_id == user_id, self.model.is_read == False).count()

    def get_multi_by_ids(self, db: Session, *, ids: List[int]) -> List[Notification]:
        return db.query(self.model).filter(self.model.id.in_(ids)).all()

    def exists_for(self, db: Session, *, user_id: int, task_id: int, notification_type: NotificationTypeEnum) -> bool:
        return db.query(
            db.query(self.model).filter(
                self.model.user_id == user_id,
                self.model.task_id == task_id,
                self.model.type == notification_type,
            ).exists()
        ).scalar()

    def set_read_state(self, db: Session, *, notification: Notification, is_read: bool) -> Notification:
        notification.is_read = is_read
        db.add(notification)
        db.commit()
        db.refresh(notification)
        return notification

    def mark_all_as_read(self, db: Session, *, user_id: int) -> int:
        count = db.query(self.model).filter(
            self.model.user_id == user_id, self.model.is_read == False
        ).update({"is_read": True}, synchronize_session=False)
        db.commit()
        return count

    def delete_many_for_user(self, db: Session, *, user_id: int, ids: List[int]) -> int:
        count = db.query(self.model).filter(
            self.model.id.in_(ids), self.model.user_id == user_id
        ).delete(synchronize_session=False)
        db.commit()
        return count

notification = CRUDNotification(Notification)
