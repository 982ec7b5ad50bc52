from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from tasklane.core.permissions import PermissionEnum
from tasklane.models.user import User
from tasklane.schemas.response import APIResponse
from tasklane.schemas.role import Role, RoleCreate, RoleUpdate
from tasklane.services.role import role_service
from tasklane.utils import deps

router = APIRouter()

@router.get("/", response_model=APIResponse[List[Role]])
async def get_workspace_roles(
    workspace_id: int,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.require_member())
):
    roles = role_service.get_workspace_roles(db, workspace_id=workspace_id)
    return APIResponse(message="Roles fetched successfully", data=roles)

@router.post("/", response_model=APIResponse[Role], status_code=status.HTTP_201_CREATED)
async def create_role(
    workspace_id: int,
    role_in: RoleCreate,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.require_permission(PermissionEnum.EDIT_MEMBER_ROLES))
):
    role = role_service.create_role(db, workspace_id=workspace_id, role_in=role_in)
    return APIResponse(message="Role created successfully", data=role)

@router.patch("/{role_id}", response_model=APIResponse[Role])
async def update_role(
    workspace_id: int,
    role_id: int,
    role_in: RoleUpdate,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.require_permission(PermissionEnum.EDIT_MEMBER_ROLES))
):
    """Edit a custom role. Owner, Admin and Member cannot be changed."""
    role = role_service.update_role(db, workspace_id=workspace_id, role_id=role_id, role_in=role_in)
    return APIResponse(message="Role updated successfully", data=role)

@router.delete("/{role_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_role(
    workspace_id: int,
    role_id: int,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.require_permission(PermissionEnum.EDIT_MEMBER_ROLES))
):
    role_service.delete_role(db, workspace_id=workspace_id, role_id=role_id)
