from tasklane.core.permissions import ALL_PERMISSIONS, PermissionEnum
from tasklane.crud.role import role as crud_role
from tasklane.crud.workspace import workspace_member as crud_workspace_member
from tasklane.services.guard import DenyReasonEnum, membership_guard


def test_owner_may_do_everything(db_session, workspace, owner):
    for flag in PermissionEnum:
        result = membership_guard.authorize(db_session, workspace_id=workspace.id, user_id=owner.id, permission=flag)
        assert result.allowed, flag
        assert result.reason is None

def test_outsider_is_not_a_member(db_session, workspace, user_factory):
    outsider = user_factory("outsider")
    result = membership_guard.authorize(
        db_session, workspace_id=workspace.id, user_id=outsider.id, permission=PermissionEnum.INVITE
    )
    assert not result.allowed
    assert result.reason is DenyReasonEnum.NOT_A_MEMBER
    assert result.message == "Not a member of this workspace"

def test_member_lacking_flag_is_refused(db_session, workspace, member_factory):
    member = member_factory("mia")
    allowed = membership_guard.authorize(
        db_session, workspace_id=workspace.id, user_id=member.id, permission=PermissionEnum.INVITE
    )
    refused = membership_guard.authorize(
        db_session, workspace_id=workspace.id, user_id=member.id, permission=PermissionEnum.EDIT_INFO
    )
    assert allowed.allowed
    assert not refused.allowed
    assert refused.reason is DenyReasonEnum.INSUFFICIENT_PERMISSIONS
    assert refused.message == "Insufficient permissions"

def test_admin_role_passes_admin_action(db_session, workspace, member_factory):
    admin = member_factory("adam", role_name="Admin")
    assert membership_guard.authorize_admin_action(db_session, workspace_id=workspace.id, user_id=admin.id).allowed

def test_full_mask_role_passes_admin_action(db_session, workspace, owner):
    assert membership_guard.authorize_admin_action(db_session, workspace_id=workspace.id, user_id=owner.id).allowed

def test_custom_role_with_full_mask_passes_admin_action(db_session, workspace, user_factory):
    boss = user_factory("boss")
    role = crud_role.create(
        db_session, obj_in={"workspace_id": workspace.id, "name": "Boss", "permissions": ALL_PERMISSIONS}
    )
    crud_workspace_member.create(db_session, obj_in={"workspace_id": workspace.id, "user_id": boss.id, "role_id": role.id})
    assert membership_guard.authorize_admin_action(db_session, workspace_id=workspace.id, user_id=boss.id).allowed

def test_plain_member_fails_admin_action(db_session, workspace, member_factory):
    member = member_factory("mo")
    result = membership_guard.authorize_admin_action(db_session, workspace_id=workspace.id, user_id=member.id)
    assert not result.allowed
    assert result.reason is DenyReasonEnum.ADMIN_ONLY
    assert result.message == "Only the Admin can delete the workspace"

def test_outsider_fails_admin_action_as_non_member(db_session, workspace, user_factory):
    outsider = user_factory("ghost")
    result = membership_guard.authorize_admin_action(db_session, workspace_id=workspace.id, user_id=outsider.id)
    assert result.reason is DenyReasonEnum.NOT_A_MEMBER
