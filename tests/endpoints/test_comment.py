from tests.helpers.asserts import api_call


def test_comment_mentions_notify_users(client, user_factory, auth_headers):
    writer = user_factory("writer")
    reader = user_factory("Reader")
    headers = auth_headers(writer)
    task_id = api_call(client, "POST", "/tasks/", headers=headers, json={"title": "Spec review"}).json()["data"]["id"]

    r = api_call(client, "POST", "/comments/", headers=headers, json={"task_id": task_id, "text": "@reader thoughts? cc @writer"})
    comment = r.json()["data"]
    assert comment["user_id"] == writer.id

    inbox = api_call(client, "GET", "/notifications/", headers=auth_headers(reader)).json()["data"]
    assert [(n["type"], n["comment_id"], n["task_id"]) for n in inbox] == [("mention", comment["id"], task_id)]
    assert api_call(client, "GET", "/notifications/", headers=headers).json()["data"] == []

    r = api_call(client, "GET", f"/comments/?task_id={task_id}", headers=headers)
    assert [c["id"] for c in r.json()["data"]] == [comment["id"]]

def test_comment_on_missing_task(client, user_factory, auth_headers):
    writer = user_factory("lost")
    api_call(client, "POST", "/comments/", headers=auth_headers(writer), json={"task_id": 99999, "text": "hello"}, expected_min=404, expected_max=405)

def test_blank_comment_is_rejected(client, user_factory, auth_headers):
    writer = user_factory("quiet")
    task_id = api_call(client, "POST", "/tasks/", headers=auth_headers(writer), json={"title": "Silence"}).json()["data"]["id"]
    api_call(client, "POST", "/comments/", headers=auth_headers(writer), json={"task_id": task_id, "text": "   "}, expected_min=422, expected_max=423)
