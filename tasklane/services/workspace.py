from datetime import datetime, timedelta, timezone
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from typing import List, Optional
import logging

from tasklane.core.config import settings
from tasklane.core.constants import DEFAULT_ROLE_COLOR, DefaultRoleEnum
from tasklane.core.exceptions import MembershipError
from tasklane.core.permissions import ALL_PERMISSIONS, ADMIN_PERMISSIONS, MEMBER_PERMISSIONS, PermissionEnum
from tasklane.crud.role import role as crud_role
from tasklane.crud.user import user as crud_user
from tasklane.crud.workspace import (
    workspace as crud_workspace,
    workspace_member as crud_workspace_member,
    workspace_invitation as crud_workspace_invitation,
)
from tasklane.models.workspace import Workspace, WorkspaceMember, WorkspaceInvitation
from tasklane.schemas.workspace import WorkspaceCreate, WorkspaceUpdate
from tasklane.services.guard import membership_guard

logger = logging.getLogger(__name__)

DEFAULT_ROLES = (
    (DefaultRoleEnum.OWNER, ALL_PERMISSIONS),
    (DefaultRoleEnum.ADMIN, ADMIN_PERMISSIONS),
    (DefaultRoleEnum.MEMBER, MEMBER_PERMISSIONS),
)

def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

class WorkspaceService:
    def create_workspace(self, db: Session, *, workspace_in: WorkspaceCreate, user_id: int) -> Workspace:
        """Create the workspace, its three default roles and the creator's Owner membership together."""
        try:
            workspace = crud_workspace.create(
                db, obj_in={**workspace_in.model_dump(), "created_by_id": user_id}, commit=False
            )
            roles = {}
            for role_name, permissions in DEFAULT_ROLES:
                roles[role_name] = crud_role.create(
                    db,
                    obj_in={
                        "workspace_id": workspace.id,
                        "name": role_name.value,
                        "color": DEFAULT_ROLE_COLOR,
                        "permissions": permissions,
                    },
                    commit=False,
                )
            crud_workspace_member.create(
                db,
                obj_in={"workspace_id": workspace.id, "user_id": user_id, "role_id": roles[DefaultRoleEnum.OWNER].id},
                commit=False,
            )
            db.commit()
        except Exception:
            db.rollback()
            logger.error(f"Failed to create workspace '{workspace_in.name}' for user {user_id}", exc_info=True)
            raise
        db.refresh(workspace)
        logger.info(f"User {user_id} created workspace {workspace.id}")
        return workspace

    def get_workspace(self, db: Session, *, workspace_id: int) -> Workspace:
        workspace = crud_workspace.get(db, id=workspace_id)
        if not workspace:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workspace not found")
        return workspace

    def get_user_workspaces(self, db: Session, *, user_id: int) -> List[Workspace]:
        return crud_workspace.get_for_user(db, user_id=user_id)

    def update_workspace(self, db: Session, *, workspace_id: int, workspace_in: WorkspaceUpdate) -> Workspace:
        workspace = self.get_workspace(db, workspace_id=workspace_id)
        update_data = workspace_in.model_dump(exclude_unset=True)
        if "name" in update_data:
            if not update_data["name"] or not update_data["name"].strip():
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Workspace name cannot be empty")
            update_data["name"] = update_data["name"].strip()
        if "join_policy" in update_data and update_data["join_policy"] is None:
            update_data.pop("join_policy")
        return crud_workspace.update(db, db_obj=workspace, obj_in=update_data)

    def delete_workspace(self, db: Session, *, workspace_id: int) -> None:
        self.get_workspace(db, workspace_id=workspace_id)
        crud_workspace.delete(db, id=workspace_id)
        logger.info(f"Deleted workspace {workspace_id}")

    # Members

    def get_members(self, db: Session, *, workspace_id: int) -> List[WorkspaceMember]:
        self.get_workspace(db, workspace_id=workspace_id)
        return crud_workspace_member.get_for_workspace(db, workspace_id=workspace_id)

    def _member_role(self, db: Session, *, workspace_id: int):
        role = crud_role.get_by_name(db, workspace_id=workspace_id, name=DefaultRoleEnum.MEMBER.value)
        if not role:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Role '{DefaultRoleEnum.MEMBER.value}' not found in workspace {workspace_id}",
            )
        return role

    def add_member(self, db: Session, *, workspace_id: int, user_id: int, commit: bool = True) -> WorkspaceMember:
        """Add ``user_id`` with the workspace's Member role."""
        self.get_workspace(db, workspace_id=workspace_id)
        if not crud_user.get(db, id=user_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        if crud_workspace_member.get_membership(db, workspace_id=workspace_id, user_id=user_id):
            raise MembershipError("User is already a member of this workspace")

        member_role = self._member_role(db, workspace_id=workspace_id)
        member = crud_workspace_member.create(
            db,
            obj_in={"workspace_id": workspace_id, "user_id": user_id, "role_id": member_role.id},
            commit=commit,
        )
        logger.info(f"User {user_id} joined workspace {workspace_id} as {member_role.name}")
        return member

    def _get_member(self, db: Session, *, workspace_id: int, user_id: int) -> WorkspaceMember:
        membership = crud_workspace_member.get_membership(db, workspace_id=workspace_id, user_id=user_id)
        if not membership:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Member not found")
        return membership

    def change_member_role(self, db: Session, *, workspace_id: int, user_id: int, role_id: int) -> WorkspaceMember:
        workspace = self.get_workspace(db, workspace_id=workspace_id)
        membership = self._get_member(db, workspace_id=workspace_id, user_id=user_id)
        if workspace.created_by_id == user_id:
            raise MembershipError("The workspace creator's role cannot be changed")

        role = crud_role.get_in_workspace(db, workspace_id=workspace_id, role_id=role_id)
        if not role:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Role does not belong to this workspace")

        membership = crud_workspace_member.update(db, db_obj=membership, obj_in={"role_id": role.id})
        logger.info(f"Member {user_id} of workspace {workspace_id} now has role {role.name}")
        return membership

    def remove_member(self, db: Session, *, workspace_id: int, user_id: int, acting_user_id: int) -> None:
        """Remove a member. Anyone may leave; removing someone else takes EDIT_MEMBER_ROLES."""
        workspace = self.get_workspace(db, workspace_id=workspace_id)
        membership = self._get_member(db, workspace_id=workspace_id, user_id=user_id)
        if workspace.created_by_id == user_id:
            raise MembershipError("The workspace creator cannot be removed")

        if acting_user_id != user_id:
            result = membership_guard.authorize(
                db, workspace_id=workspace_id, user_id=acting_user_id, permission=PermissionEnum.EDIT_MEMBER_ROLES
            )
            if not result.allowed:
                raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=result.message)

        crud_workspace_member.delete(db, id=membership.id)
        logger.info(f"User {acting_user_id} removed member {user_id} from workspace {workspace_id}")

    # Invitations

    def create_invitation(self, db: Session, *, workspace_id: int, user_id: int, expires_in_days: Optional[int] = None) -> WorkspaceInvitation:
        self.get_workspace(db, workspace_id=workspace_id)
        days = settings.INVITATION_DEFAULT_EXPIRE_DAYS if expires_in_days is None else expires_in_days
        if days < 1 or days > settings.INVITATION_MAX_EXPIRE_DAYS:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invitation expiry must be between 1 and {settings.INVITATION_MAX_EXPIRE_DAYS} days",
            )
        invitation = crud_workspace_invitation.create(
            db,
            obj_in={
                "workspace_id": workspace_id,
                "created_by_id": user_id,
                "expires_at": datetime.now(timezone.utc) + timedelta(days=days),
            },
        )
        logger.info(f"User {user_id} created invitation {invitation.id} for workspace {workspace_id}")
        return invitation

    def get_invitations(self, db: Session, *, workspace_id: int) -> List[WorkspaceInvitation]:
        return crud_workspace_invitation.get_for_workspace(db, workspace_id=workspace_id)

    def delete_invitation(self, db: Session, *, workspace_id: int, invitation_id: str) -> None:
        invitation = crud_workspace_invitation.get(db, id=invitation_id)
        if not invitation or invitation.workspace_id != workspace_id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invitation not found")
        crud_workspace_invitation.delete(db, id=invitation_id)

    def join_with_invitation(self, db: Session, *, invitation_id: str, user_id: int) -> WorkspaceMember:
        invitation = crud_workspace_invitation.get(db, id=invitation_id)
        if not invitation:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invitation not found")
        if _as_utc(invitation.expires_at) <= datetime.now(timezone.utc):
            raise HTTPException(status_code=status.HTTP_410_GONE, detail="Invitation has expired")
        return self.add_member(db, workspace_id=invitation.workspace_id, user_id=user_id)

workspace_service = WorkspaceService()
