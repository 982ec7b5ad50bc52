from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from typing import List
import logging

from tasklane.core.constants import RESERVED_ROLE_NAMES
from tasklane.core.exceptions import ProtectedRoleError, RoleConflictError, RoleInUseError
from tasklane.crud.role import role as crud_role
from tasklane.models.role import Role
from tasklane.schemas.role import RoleCreate, RoleUpdate

logger = logging.getLogger(__name__)

def is_reserved_role_name(name: str) -> bool:
    return name.strip().lower() in {reserved.lower() for reserved in RESERVED_ROLE_NAMES}

class RoleService:
    def get_workspace_roles(self, db: Session, *, workspace_id: int) -> List[Role]:
        return crud_role.get_for_workspace(db, workspace_id=workspace_id)

    def get_role(self, db: Session, *, workspace_id: int, role_id: int) -> Role:
        role = crud_role.get_in_workspace(db, workspace_id=workspace_id, role_id=role_id)
        if not role:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Role not found")
        return role

    def _ensure_name_available(self, db: Session, *, workspace_id: int, name: str) -> None:
        if is_reserved_role_name(name):
            raise ProtectedRoleError(f"'{name}' is a reserved role name")
        if crud_role.get_by_name(db, workspace_id=workspace_id, name=name):
            raise RoleConflictError(f"A role named '{name}' already exists in this workspace")

    def create_role(self, db: Session, *, workspace_id: int, role_in: RoleCreate) -> Role:
        self._ensure_name_available(db, workspace_id=workspace_id, name=role_in.name)
        role = crud_role.create(db, obj_in={**role_in.model_dump(), "workspace_id": workspace_id})
        logger.info(f"Created role {role.id} '{role.name}' in workspace {workspace_id}")
        return role

    def update_role(self, db: Session, *, workspace_id: int, role_id: int, role_in: RoleUpdate) -> Role:
        role = self.get_role(db, workspace_id=workspace_id, role_id=role_id)
        if role.name in RESERVED_ROLE_NAMES:
            raise ProtectedRoleError(f"The default role '{role.name}' cannot be modified")

        update_data = role_in.model_dump(exclude_unset=True)
        if update_data.get("name") is None:
            update_data.pop("name", None)
        if update_data.get("color") is None:
            update_data.pop("color", None)
        if update_data.get("permissions") is None:
            update_data.pop("permissions", None)

        new_name = update_data.get("name")
        if new_name is not None:
            new_name = new_name.strip()
            if not new_name:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Role name cannot be empty")
            update_data["name"] = new_name
            if new_name != role.name:
                self._ensure_name_available(db, workspace_id=workspace_id, name=new_name)

        return crud_role.update(db, db_obj=role, obj_in=update_data)

    def delete_role(self, db: Session, *, workspace_id: int, role_id: int) -> None:
        role = self.get_role(db, workspace_id=workspace_id, role_id=role_id)
        if role.name in RESERVED_ROLE_NAMES:
            raise ProtectedRoleError(f"The default role '{role.name}' cannot be deleted")
        if crud_role.count_members(db, role_id=role.id) > 0:
            raise RoleInUseError("Cannot delete a role that is assigned to members")
        crud_role.delete(db, id=role.id)
        logger.info(f"Deleted role {role_id} from workspace {workspace_id}")

role_service = RoleService()
