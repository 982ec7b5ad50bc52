from sqlalchemy.orm import Session
from typing import List, Optional

from tasklane.crud.base import CRUDBase
from tasklane.models.role import Role
from tasklane.models.workspace import WorkspaceMember
from tasklane.schemas.role import RoleCreate, RoleUpdate

class CRUDRole(CRUDBase[Role, RoleCreate, RoleUpdate]):
    def get_for_workspace(self, db: Session, *, workspace_id: int) -> List[Role]:
        return db.query(Role).filter(Role.workspace_id == workspace_id).order_by(Role.id).all()

    def get_in_workspace(self, db: Session, *, workspace_id: int, role_id: int) -> Optional[Role]:
        return db.query(Role).filter(Role.id == role_id, Role.workspace_id == workspace_id).first()

    def get_by_name(self, db: Session, *, workspace_id: int, name: str) -> Optional[Role]:
        return db.query(Role).filter(Role.workspace_id == workspace_id, Role.name == name).first()

    def count_members(self, db: Session, *, role_id: int) -> int:
        return db.query(WorkspaceMember).filter(WorkspaceMember.role_id == role_id).count()

role = CRUDRole(Role)
