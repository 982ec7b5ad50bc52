import pytest
from tasklane.schemas.workspace import WorkspaceCreate
from tasklane.services.workspace import workspace_service
from tests.helpers.asserts import api_call


@pytest.fixture
def open_workspace(db_session, owner):
    return workspace_service.create_workspace(
        db_session, workspace_in=WorkspaceCreate(name="Open Source", join_policy="apply_to_join"), user_id=owner.id
    )

def test_invite_only_workspace_refuses_applications(client, workspace, user_factory, auth_headers):
    applicant = user_factory("hopeful")
    r = api_call(client, "POST", f"/workspaces/{workspace.id}/apply", headers=auth_headers(applicant), json={}, expected_min=403, expected_max=404)
    assert r.json()["error"]["message"] == "This workspace is invite-only"

def test_discoverable_workspace_joins_directly(client, db_session, owner, user_factory, auth_headers):
    public = workspace_service.create_workspace(
        db_session, workspace_in=WorkspaceCreate(name="Public", join_policy="discoverable"), user_id=owner.id
    )
    walker = user_factory("walker")
    r = api_call(client, "POST", f"/workspaces/{public.id}/apply", headers=auth_headers(walker), json={})
    data = r.json()["data"]
    assert data["joined"] is True
    assert data["member"]["role"]["name"] == "Member"

def test_apply_then_approve(client, open_workspace, owner, user_factory, auth_headers):
    applicant = user_factory("applicant")
    r = api_call(client, "POST", f"/workspaces/{open_workspace.id}/apply", headers=auth_headers(applicant), json={"message": "I'd like to help"})
    data = r.json()["data"]
    assert data["joined"] is False
    application_id = data["application"]["id"]
    assert data["application"]["status"] == "pending"

    api_call(client, "POST", f"/workspaces/{open_workspace.id}/apply", headers=auth_headers(applicant), json={}, expected_min=400, expected_max=401)

    r = api_call(client, "GET", f"/workspaces/{open_workspace.id}/applications?status_filter=pending", headers=auth_headers(owner))
    assert [a["id"] for a in r.json()["data"]] == [application_id]

    r = api_call(client, "POST", f"/workspaces/{open_workspace.id}/applications/{application_id}", headers=auth_headers(owner), json={"action": "approve"})
    assert r.json()["data"]["status"] == "approved"

    r = api_call(client, "GET", f"/workspaces/{open_workspace.id}/members", headers=auth_headers(applicant))
    assert applicant.id in [m["user_id"] for m in r.json()["data"]]

    api_call(client, "POST", f"/workspaces/{open_workspace.id}/applications/{application_id}", headers=auth_headers(owner), json={"action": "reject"}, expected_min=404, expected_max=405)

def test_reject_leaves_user_outside(client, open_workspace, owner, user_factory, auth_headers):
    applicant = user_factory("rejected")
    r = api_call(client, "POST", f"/workspaces/{open_workspace.id}/apply", headers=auth_headers(applicant), json={})
    application_id = r.json()["data"]["application"]["id"]

    r = api_call(client, "POST", f"/workspaces/{open_workspace.id}/applications/{application_id}", headers=auth_headers(owner), json={"action": "reject"})
    assert r.json()["data"]["status"] == "rejected"
    api_call(client, "GET", f"/workspaces/{open_workspace.id}/members", headers=auth_headers(applicant), expected_min=403, expected_max=404)

def test_plain_member_cannot_manage_applications(client, db_session, open_workspace, user_factory, auth_headers):
    insider = user_factory("insider")
    workspace_service.add_member(db_session, workspace_id=open_workspace.id, user_id=insider.id)
    api_call(client, "GET", f"/workspaces/{open_workspace.id}/applications", headers=auth_headers(insider), expected_min=403, expected_max=404)
