"""Workspace capabilities encoded as bit flags on a role's ``permissions`` column."""
from enum import IntFlag


class PermissionEnum(IntFlag):
    DELETE_WORKSPACE = 1 << 0
    EDIT_INFO = 1 << 1
    INVITE = 1 << 2
    EDIT_MEMBER_ROLES = 1 << 3
    MANAGE_APPLICATIONS = 1 << 4


ALL_PERMISSIONS = int(
    PermissionEnum.DELETE_WORKSPACE
    | PermissionEnum.EDIT_INFO
    | PermissionEnum.INVITE
    | PermissionEnum.EDIT_MEMBER_ROLES
    | PermissionEnum.MANAGE_APPLICATIONS
)  # 31

ADMIN_PERMISSIONS = ALL_PERMISSIONS & ~int(PermissionEnum.DELETE_WORKSPACE)  # 30

MEMBER_PERMISSIONS = int(PermissionEnum.INVITE)  # 4


def has_permission(mask: int, permission: int) -> bool:
    return (int(mask) & int(permission)) != 0
