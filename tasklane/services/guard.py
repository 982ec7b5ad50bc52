from dataclasses import dataclass
from enum import Enum
from sqlalchemy.orm import Session
from typing import Optional

from tasklane.core.constants import DefaultRoleEnum
from tasklane.core.permissions import ALL_PERMISSIONS, PermissionEnum, has_permission
from tasklane.crud.workspace import workspace_member as crud_workspace_member

class DenyReasonEnum(str, Enum):
    NOT_A_MEMBER = "NOT_A_MEMBER"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"
    ADMIN_ONLY = "ADMIN_ONLY"

DENY_MESSAGES = {
    DenyReasonEnum.NOT_A_MEMBER: "Not a member of this workspace",
    DenyReasonEnum.INSUFFICIENT_PERMISSIONS: "Insufficient permissions",
    DenyReasonEnum.ADMIN_ONLY: "Only the Admin can delete the workspace",
}

@dataclass(frozen=True)
class AuthorizationResult:
    allowed: bool
    reason: Optional[DenyReasonEnum] = None

    @property
    def message(self) -> Optional[str]:
        return DENY_MESSAGES.get(self.reason) if self.reason else None

ALLOWED = AuthorizationResult(allowed=True)

class MembershipGuard:
    """Answers whether a user may perform an action in a workspace.

    Denials come back as values; turning them into HTTP errors is left to
    the caller (see ``tasklane.utils.deps``).
    """

    def authorize(self, db: Session, *, workspace_id: int, user_id: int, permission: PermissionEnum) -> AuthorizationResult:
        membership = crud_workspace_member.get_membership(db, workspace_id=workspace_id, user_id=user_id)
        if not membership:
            return AuthorizationResult(allowed=False, reason=DenyReasonEnum.NOT_A_MEMBER)
        if not has_permission(membership.role.permissions, permission):
            return AuthorizationResult(allowed=False, reason=DenyReasonEnum.INSUFFICIENT_PERMISSIONS)
        return ALLOWED

    def authorize_admin_action(self, db: Session, *, workspace_id: int, user_id: int) -> AuthorizationResult:
        membership = crud_workspace_member.get_membership(db, workspace_id=workspace_id, user_id=user_id)
        if not membership:
            return AuthorizationResult(allowed=False, reason=DenyReasonEnum.NOT_A_MEMBER)
        role = membership.role
        if role.name == DefaultRoleEnum.ADMIN.value or role.permissions == ALL_PERMISSIONS:
            return ALLOWED
        return AuthorizationResult(allowed=False, reason=DenyReasonEnum.ADMIN_ONLY)

    def is_member(self, db: Session, *, workspace_id: int, user_id: int) -> bool:
        return crud_workspace_member.get_membership(db, workspace_id=workspace_id, user_id=user_id) is not None

membership_guard = MembershipGuard()
