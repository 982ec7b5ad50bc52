from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import List, Optional

from tasklane.crud.base import CRUDBase
from tasklane.models.user import User
from tasklane.schemas.user import UserCreate, UserUpdate

class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
    def get_by_username(self, db: Session, *, username: str) -> Optional[User]:
        return db.query(User).filter(func.lower(User.username) == username.lower()).first()

    def get_by_usernames_insensitive(self, db: Session, *, usernames: List[str]) -> List[User]:
        if not usernames:
            return []
        lowered = {name.lower() for name in usernames}
        return db.query(User).filter(func.lower(User.username).in_(lowered)).order_by(User.id).all()

    def get_multi_by_ids(self, db: Session, *, ids: List[int]) -> List[User]:
        if not ids:
            return []
        return db.query(User).filter(User.id.in_(ids)).all()

user = CRUDUser(User)
