import pytest
from tasklane.core.constants import DEFAULT_ROLE_COLOR
from tasklane.core.exceptions import ProtectedRoleError, RoleConflictError, RoleInUseError
from tasklane.crud.role import role as crud_role
from tasklane.crud.workspace import workspace_member as crud_workspace_member
from tasklane.schemas.role import RoleCreate, RoleUpdate
from tasklane.services.role import role_service


def _role(db_session, workspace, name):
    return crud_role.get_by_name(db_session, workspace_id=workspace.id, name=name)

def test_custom_role_defaults(db_session, workspace):
    role = role_service.create_role(db_session, workspace_id=workspace.id, role_in=RoleCreate(name="Reviewer"))
    assert role.color == DEFAULT_ROLE_COLOR
    assert role.permissions == 0
    assert role.workspace_id == workspace.id

@pytest.mark.parametrize("name", ["Owner", "Admin", "Member", "admin"])
def test_reserved_names_cannot_be_created(db_session, workspace, name):
    with pytest.raises(ProtectedRoleError):
        role_service.create_role(db_session, workspace_id=workspace.id, role_in=RoleCreate(name=name))

def test_duplicate_name_is_refused(db_session, workspace):
    role_service.create_role(db_session, workspace_id=workspace.id, role_in=RoleCreate(name="QA"))
    with pytest.raises(RoleConflictError):
        role_service.create_role(db_session, workspace_id=workspace.id, role_in=RoleCreate(name="QA"))

@pytest.mark.parametrize("name", ["Owner", "Admin", "Member"])
@pytest.mark.parametrize("change", [{"name": "Renamed"}, {"color": "#000000"}, {"permissions": 1}])
def test_default_roles_cannot_be_modified(db_session, workspace, name, change):
    role = _role(db_session, workspace, name)
    with pytest.raises(ProtectedRoleError):
        role_service.update_role(db_session, workspace_id=workspace.id, role_id=role.id, role_in=RoleUpdate(**change))

@pytest.mark.parametrize("name", ["Owner", "Admin", "Member"])
def test_default_roles_cannot_be_deleted(db_session, workspace, name):
    role = _role(db_session, workspace, name)
    with pytest.raises(ProtectedRoleError):
        role_service.delete_role(db_session, workspace_id=workspace.id, role_id=role.id)

def test_custom_role_can_be_edited(db_session, workspace):
    role = role_service.create_role(db_session, workspace_id=workspace.id, role_in=RoleCreate(name="Editor"))
    updated = role_service.update_role(
        db_session, workspace_id=workspace.id, role_id=role.id,
        role_in=RoleUpdate(name="Copy Editor", color="#FF0000", permissions=6),
    )
    assert (updated.name, updated.color, updated.permissions) == ("Copy Editor", "#FF0000", 6)

def test_custom_role_cannot_take_reserved_name(db_session, workspace):
    role = role_service.create_role(db_session, workspace_id=workspace.id, role_in=RoleCreate(name="Helper"))
    with pytest.raises(ProtectedRoleError):
        role_service.update_role(db_session, workspace_id=workspace.id, role_id=role.id, role_in=RoleUpdate(name="Owner"))

def test_role_held_by_member_cannot_be_deleted(db_session, workspace, user_factory):
    role = role_service.create_role(db_session, workspace_id=workspace.id, role_in=RoleCreate(name="Guest"))
    guest = user_factory("guest")
    crud_workspace_member.create(db_session, obj_in={"workspace_id": workspace.id, "user_id": guest.id, "role_id": role.id})

    with pytest.raises(RoleInUseError):
        role_service.delete_role(db_session, workspace_id=workspace.id, role_id=role.id)

def test_unused_custom_role_is_deleted(db_session, workspace):
    role = role_service.create_role(db_session, workspace_id=workspace.id, role_in=RoleCreate(name="Temp"))
    role_service.delete_role(db_session, workspace_id=workspace.id, role_id=role.id)
    assert _role(db_session, workspace, "Temp") is None
