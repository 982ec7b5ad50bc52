from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from tasklane.core.constants import ApplicationStatusEnum
from tasklane.core.permissions import PermissionEnum
from tasklane.models.user import User
from tasklane.schemas.response import APIResponse
from tasklane.schemas.task import Task
from tasklane.schemas.workspace import (
    Application, ApplicationCreate, ApplicationResolve, Invitation, InvitationCreate, JoinResult,
    MemberRoleUpdate, Workspace, WorkspaceCreate, WorkspaceMember, WorkspaceMemberAdd, WorkspaceUpdate,
)
from tasklane.services.application import application_service
from tasklane.services.task import task_service
from tasklane.services.workspace import workspace_service
from tasklane.utils import deps

router = APIRouter()

@router.post("/", response_model=APIResponse[Workspace], status_code=status.HTTP_201_CREATED)
async def create_workspace(
    workspace_in: WorkspaceCreate,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.get_current_user)
):
    """Create a workspace with its Owner, Admin and Member roles; the creator becomes Owner."""
    workspace = workspace_service.create_workspace(db, workspace_in=workspace_in, user_id=user.id)
    return APIResponse(message="Workspace created successfully", data=workspace)

@router.get("/", response_model=APIResponse[List[Workspace]])
async def get_my_workspaces(
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.get_current_user)
):
    workspaces = workspace_service.get_user_workspaces(db, user_id=user.id)
    return APIResponse(message="Workspaces fetched successfully", data=workspaces)

@router.post("/invitations/{invitation_id}/join", response_model=APIResponse[WorkspaceMember])
async def join_with_invitation(
    invitation_id: str,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.get_current_user)
):
    member = workspace_service.join_with_invitation(db, invitation_id=invitation_id, user_id=user.id)
    return APIResponse(message="Joined workspace successfully", data=member)

@router.get("/{workspace_id}", response_model=APIResponse[Workspace])
async def get_workspace(
    workspace_id: int,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.require_member())
):
    workspace = workspace_service.get_workspace(db, workspace_id=workspace_id)
    return APIResponse(message="Workspace fetched successfully", data=workspace)

@router.patch("/{workspace_id}", response_model=APIResponse[Workspace])
async def update_workspace(
    workspace_id: int,
    workspace_in: WorkspaceUpdate,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.require_permission(PermissionEnum.EDIT_INFO))
):
    workspace = workspace_service.update_workspace(db, workspace_id=workspace_id, workspace_in=workspace_in)
    return APIResponse(message="Workspace updated successfully", data=workspace)

@router.delete("/{workspace_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workspace(
    workspace_id: int,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.require_admin_action())
):
    workspace_service.delete_workspace(db, workspace_id=workspace_id)

@router.get("/{workspace_id}/tasks", response_model=APIResponse[List[Task]])
async def get_workspace_tasks(
    workspace_id: int,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.require_member())
):
    tasks = task_service.get_workspace_tasks(db, workspace_id=workspace_id, skip=skip, limit=limit)
    return APIResponse(message="Tasks fetched successfully", data=tasks)

# Members

@router.get("/{workspace_id}/members", response_model=APIResponse[List[WorkspaceMember]])
async def get_workspace_members(
    workspace_id: int,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.require_member())
):
    members = workspace_service.get_members(db, workspace_id=workspace_id)
    return APIResponse(message="Members fetched successfully", data=members)

@router.post("/{workspace_id}/members", response_model=APIResponse[WorkspaceMember], status_code=status.HTTP_201_CREATED)
async def add_workspace_member(
    workspace_id: int,
    member_in: WorkspaceMemberAdd,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.require_permission(PermissionEnum.INVITE))
):
    member = workspace_service.add_member(db, workspace_id=workspace_id, user_id=member_in.user_id)
    return APIResponse(message="Member added successfully", data=member)

@router.patch("/{workspace_id}/members/{user_id}/role", response_model=APIResponse[WorkspaceMember])
async def change_member_role(
    workspace_id: int,
    user_id: int,
    role_in: MemberRoleUpdate,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.require_permission(PermissionEnum.EDIT_MEMBER_ROLES))
):
    member = workspace_service.change_member_role(db, workspace_id=workspace_id, user_id=user_id, role_id=role_in.role_id)
    return APIResponse(message="Member role updated successfully", data=member)

@router.delete("/{workspace_id}/members/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_workspace_member(
    workspace_id: int,
    user_id: int,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.require_member())
):
    """Leave the workspace, or remove another member (needs EDIT_MEMBER_ROLES)."""
    workspace_service.remove_member(db, workspace_id=workspace_id, user_id=user_id, acting_user_id=user.id)

# Invitations

@router.post("/{workspace_id}/invitations", response_model=APIResponse[Invitation], status_code=status.HTTP_201_CREATED)
async def create_invitation(
    workspace_id: int,
    invitation_in: InvitationCreate,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.require_permission(PermissionEnum.INVITE))
):
    invitation = workspace_service.create_invitation(
        db, workspace_id=workspace_id, user_id=user.id, expires_in_days=invitation_in.expires_in_days
    )
    return APIResponse(message="Invitation created successfully", data=invitation)

@router.get("/{workspace_id}/invitations", response_model=APIResponse[List[Invitation]])
async def get_invitations(
    workspace_id: int,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.require_permission(PermissionEnum.INVITE))
):
    invitations = workspace_service.get_invitations(db, workspace_id=workspace_id)
    return APIResponse(message="Invitations fetched successfully", data=invitations)

@router.delete("/{workspace_id}/invitations/{invitation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invitation(
    workspace_id: int,
    invitation_id: str,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.require_permission(PermissionEnum.INVITE))
):
    workspace_service.delete_invitation(db, workspace_id=workspace_id, invitation_id=invitation_id)

# Applications

@router.post("/{workspace_id}/apply", response_model=APIResponse[JoinResult])
async def apply_to_workspace(
    workspace_id: int,
    application_in: ApplicationCreate,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.get_current_user)
):
    result = application_service.apply(db, workspace_id=workspace_id, user_id=user.id, application_in=application_in)
    message = "Joined workspace successfully" if result.joined else "Application submitted successfully"
    return APIResponse(message=message, data=result)

@router.get("/{workspace_id}/applications", response_model=APIResponse[List[Application]])
async def get_applications(
    workspace_id: int,
    status_filter: Optional[ApplicationStatusEnum] = None,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.require_permission(PermissionEnum.MANAGE_APPLICATIONS))
):
    applications = application_service.get_applications(db, workspace_id=workspace_id, status_filter=status_filter)
    return APIResponse(message="Applications fetched successfully", data=applications)

@router.post("/{workspace_id}/applications/{application_id}", response_model=APIResponse[Application])
async def resolve_application(
    workspace_id: int,
    application_id: int,
    resolve_in: ApplicationResolve,
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.require_permission(PermissionEnum.MANAGE_APPLICATIONS))
):
    application = application_service.resolve(db, workspace_id=workspace_id, application_id=application_id, action=resolve_in.action)
    return APIResponse(message=f"Application {application.status.value}", data=application)
