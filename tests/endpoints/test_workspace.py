from datetime import datetime, timedelta, timezone
from tasklane.crud.workspace import workspace_invitation as crud_workspace_invitation
from tests.helpers.asserts import api_call, error_message


def test_create_workspace_makes_creator_owner(client, user_factory, auth_headers):
    founder = user_factory("founder")
    headers = auth_headers(founder)
    r = api_call(client, "POST", "/workspaces/", headers=headers, json={"name": "  Design  ", "join_policy": "apply_to_join"})
    workspace = r.json()["data"]
    assert workspace["name"] == "Design"
    assert workspace["join_policy"] == "apply_to_join"

    r = api_call(client, "GET", f"/workspaces/{workspace['id']}/members", headers=headers)
    [member] = r.json()["data"]
    assert member["user_id"] == founder.id
    assert member["role"]["name"] == "Owner"

    r = api_call(client, "GET", "/workspaces/", headers=headers)
    assert [w["id"] for w in r.json()["data"]] == [workspace["id"]]

def test_update_requires_edit_info(client, workspace, owner, member_factory, auth_headers):
    member = member_factory("viewer")
    r = api_call(client, "PATCH", f"/workspaces/{workspace.id}", headers=auth_headers(member), json={"name": "Hijacked"}, expected_min=403, expected_max=404)
    assert error_message(r) == "Insufficient permissions"

    r = api_call(client, "PATCH", f"/workspaces/{workspace.id}", headers=auth_headers(owner), json={"description": "Core services"})
    assert r.json()["data"]["description"] == "Core services"

def test_outsider_gets_not_a_member(client, workspace, user_factory, auth_headers):
    outsider = user_factory("stranger")
    r = api_call(client, "GET", f"/workspaces/{workspace.id}/members", headers=auth_headers(outsider), expected_min=403, expected_max=404)
    assert error_message(r) == "Not a member of this workspace"

def test_delete_workspace_is_admin_only(client, workspace, owner, member_factory, auth_headers):
    member = member_factory("worker")
    r = api_call(client, "DELETE", f"/workspaces/{workspace.id}", headers=auth_headers(member), expected_min=403, expected_max=404)
    assert error_message(r) == "Only the Admin can delete the workspace"

    r = client.delete(f"/workspaces/{workspace.id}", headers=auth_headers(owner))
    assert r.status_code == 204
    api_call(client, "GET", f"/workspaces/{workspace.id}", headers=auth_headers(owner), expected_min=403, expected_max=404)

def test_add_member_and_change_role(client, workspace, owner, user_factory, auth_headers):
    newcomer = user_factory("newcomer")
    headers = auth_headers(owner)
    r = api_call(client, "POST", f"/workspaces/{workspace.id}/members", headers=headers, json={"user_id": newcomer.id})
    assert r.json()["data"]["role"]["name"] == "Member"

    api_call(client, "POST", f"/workspaces/{workspace.id}/members", headers=headers, json={"user_id": newcomer.id}, expected_min=400, expected_max=401)

    roles = api_call(client, "GET", f"/workspaces/{workspace.id}/roles/", headers=headers).json()["data"]
    admin_role_id = next(role["id"] for role in roles if role["name"] == "Admin")
    r = api_call(client, "PATCH", f"/workspaces/{workspace.id}/members/{newcomer.id}/role", headers=headers, json={"role_id": admin_role_id})
    assert r.json()["data"]["role"]["name"] == "Admin"

    api_call(client, "PATCH", f"/workspaces/{workspace.id}/members/{owner.id}/role", headers=headers, json={"role_id": admin_role_id}, expected_min=400, expected_max=401)

def test_remove_member_rules(client, workspace, owner, member_factory, auth_headers):
    alpha = member_factory("alpha")
    beta = member_factory("beta")

    api_call(client, "DELETE", f"/workspaces/{workspace.id}/members/{beta.id}", headers=auth_headers(alpha), expected_min=403, expected_max=404)
    api_call(client, "DELETE", f"/workspaces/{workspace.id}/members/{owner.id}", headers=auth_headers(owner), expected_min=400, expected_max=401)

    assert client.delete(f"/workspaces/{workspace.id}/members/{alpha.id}", headers=auth_headers(alpha)).status_code == 204
    assert client.delete(f"/workspaces/{workspace.id}/members/{beta.id}", headers=auth_headers(owner)).status_code == 204

    r = api_call(client, "GET", f"/workspaces/{workspace.id}/members", headers=auth_headers(owner))
    assert [m["user_id"] for m in r.json()["data"]] == [owner.id]

def test_invitation_lifecycle(client, db_session, workspace, owner, user_factory, auth_headers):
    headers = auth_headers(owner)
    r = api_call(client, "POST", f"/workspaces/{workspace.id}/invitations", headers=headers, json={"expires_in_days": 3})
    invitation_id = r.json()["data"]["id"]

    api_call(client, "POST", f"/workspaces/{workspace.id}/invitations", headers=headers, json={"expires_in_days": 120}, expected_min=400, expected_max=401)

    guest = user_factory("invitee")
    r = api_call(client, "POST", f"/workspaces/invitations/{invitation_id}/join", headers=auth_headers(guest))
    assert r.json()["data"]["role"]["name"] == "Member"

    api_call(client, "POST", f"/workspaces/invitations/{invitation_id}/join", headers=auth_headers(guest), expected_min=400, expected_max=401)

    r = api_call(client, "GET", f"/workspaces/{workspace.id}/invitations", headers=headers)
    assert [i["id"] for i in r.json()["data"]] == [invitation_id]
    assert client.delete(f"/workspaces/{workspace.id}/invitations/{invitation_id}", headers=headers).status_code == 204

def test_expired_invitation_is_gone(client, db_session, workspace, owner, user_factory, auth_headers):
    invitation = crud_workspace_invitation.create(
        db_session,
        obj_in={
            "workspace_id": workspace.id,
            "created_by_id": owner.id,
            "expires_at": datetime.now(timezone.utc) - timedelta(minutes=1),
        },
    )
    late = user_factory("late")
    api_call(client, "POST", f"/workspaces/invitations/{invitation.id}/join", headers=auth_headers(late), expected_min=410, expected_max=411)
