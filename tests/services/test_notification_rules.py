import pytest
from tasklane.core.constants import NotificationTypeEnum, NotificationSeverityEnum, ActivityTypeEnum
from tasklane.crud.comment import comment as crud_comment
from tasklane.crud.notification import notification as crud_notification
from tasklane.crud.task import task as crud_task
from tasklane.services.activity import activity_service
from tasklane.services.mentions import parse_mentions
from tasklane.services.notification_rules import notification_rules


@pytest.fixture
def people(user_factory):
    return {name: user_factory(name) for name in ("alice", "bob", "carol")}

@pytest.fixture
def task(db_session, people):
    task = crud_task.create(db_session, obj_in={"title": "Fix login", "author_user_id": people["carol"].id})
    crud_task.add_assignees(db_session, task_id=task.id, user_ids=[people["alice"].id, people["bob"].id])
    db_session.commit()
    return task

def _inbox(db_session, user):
    return crud_notification.get_for_user(db_session, user_id=user.id)


class TestMentionRule:
    def test_notifies_each_resolved_user_once(self, db_session, people, task):
        author = people["carol"]
        comment = crud_comment.create(
            db_session, obj_in={"task_id": task.id, "user_id": author.id, "text": "@Alice and @BOB, also @alice"}
        )
        created = notification_rules.notify_mentions(
            db_session, comment_id=comment.id, text=comment.text, task_id=task.id, author_user_id=author.id
        )

        assert sorted(n.user_id for n in created) == sorted([people["alice"].id, people["bob"].id])
        for n in created:
            assert n.type is NotificationTypeEnum.MENTION
            assert n.severity is NotificationSeverityEnum.INFO
            assert n.comment_id == comment.id
            assert n.task_id == task.id
            assert n.activity_id is None
            assert n.message == "You were mentioned in a comment"

    def test_author_mentioning_themselves_is_skipped(self, db_session, people, task):
        author = people["carol"]
        comment = crud_comment.create(db_session, obj_in={"task_id": task.id, "user_id": author.id, "text": "note to @carol"})
        created = notification_rules.notify_mentions(
            db_session, comment_id=comment.id, text=comment.text, task_id=task.id, author_user_id=author.id
        )
        assert created == []
        assert _inbox(db_session, author) == []

    def test_unknown_usernames_are_dropped(self, db_session, people, task):
        author = people["carol"]
        comment = crud_comment.create(db_session, obj_in={"task_id": task.id, "user_id": author.id, "text": "@nobody @bob"})
        created = notification_rules.notify_mentions(
            db_session, comment_id=comment.id, text=comment.text, task_id=task.id, author_user_id=author.id
        )
        assert [n.user_id for n in created] == [people["bob"].id]


class TestTaskEditRule:
    def test_every_assignee_but_the_editor_is_notified(self, db_session, people, task):
        editor = people["alice"]
        activity = activity_service.create_activity(
            db_session, task_id=task.id, user_id=editor.id,
            activity_type=ActivityTypeEnum.EDIT_TASK, edit_field="updated the title",
        )
        created = notification_rules.notify_task_edit(
            db_session, task_id=task.id, activity_id=activity.id, editor_user_id=editor.id
        )

        assert [n.user_id for n in created] == [people["bob"].id]
        edited = created[0]
        assert edited.type is NotificationTypeEnum.TASK_EDITED
        assert edited.severity is NotificationSeverityEnum.INFO
        assert edited.activity_id == activity.id
        assert edited.task_id == task.id
        assert _inbox(db_session, editor) == []

    def test_task_without_assignees_notifies_nobody(self, db_session, people):
        bare = crud_task.create(db_session, obj_in={"title": "Orphan", "author_user_id": people["carol"].id})
        activity = activity_service.create_activity(
            db_session, task_id=bare.id, user_id=people["carol"].id, activity_type=ActivityTypeEnum.CREATE_TASK
        )
        assert notification_rules.notify_task_edit(
            db_session, task_id=bare.id, activity_id=activity.id, editor_user_id=people["carol"].id
        ) == []


class TestReassignmentRule:
    def test_added_and_removed_users_get_matching_messages(self, db_session, people, task):
        created = notification_rules.notify_reassignment(
            db_session,
            task_id=task.id,
            added_user_ids=[people["alice"].id],
            removed_user_ids=[people["bob"].id],
            changed_by_user_id=people["carol"].id,
        )
        by_user = {n.user_id: n.message for n in created}
        assert by_user == {people["alice"].id: "assigned", people["bob"].id: "removed"}
        assert all(n.type is NotificationTypeEnum.TASK_REASSIGNED for n in created)
        assert all(n.severity is NotificationSeverityEnum.INFO for n in created)

    def test_changer_is_excluded(self, db_session, people, task):
        changer = people["alice"]
        created = notification_rules.notify_reassignment(
            db_session,
            task_id=task.id,
            added_user_ids=[changer.id, people["bob"].id],
            removed_user_ids=[],
            changed_by_user_id=changer.id,
        )
        assert [n.user_id for n in created] == [people["bob"].id]

    def test_duplicate_ids_produce_one_notification(self, db_session, people, task):
        bob = people["bob"]
        created = notification_rules.notify_reassignment(
            db_session,
            task_id=task.id,
            added_user_ids=[bob.id, bob.id],
            removed_user_ids=[],
            changed_by_user_id=people["carol"].id,
        )
        assert len(created) == 1


CROWD = ("ann", "ben", "cat", "dan", "eve")

@pytest.fixture
def crowd(user_factory):
    return {name: user_factory(name) for name in CROWD}

def _ids(crowd, names):
    return [crowd[name].id for name in names]


class TestActorIsNeverNotified:
    @pytest.mark.parametrize("actor, added, removed", [
        ("ann", ["ann", "ben", "cat"], ["dan"]),
        ("ann", ["ben"], ["ann", "cat", "eve"]),
        ("dan", ["ann", "ben"], ["cat", "eve"]),
        ("eve", ["eve", "eve"], ["eve"]),
        ("cat", ["cat", "ann", "cat", "dan"], ["ben", "ben"]),
        ("ben", [], []),
    ])
    def test_reassignment(self, db_session, crowd, actor, added, removed):
        task = crud_task.create(db_session, obj_in={"title": "Shuffle", "author_user_id": crowd[actor].id})
        created = notification_rules.notify_reassignment(
            db_session,
            task_id=task.id,
            added_user_ids=_ids(crowd, added),
            removed_user_ids=_ids(crowd, removed),
            changed_by_user_id=crowd[actor].id,
        )

        expected = sorted(
            [(crowd[n].id, "assigned") for n in set(added) - {actor}]
            + [(crowd[n].id, "removed") for n in set(removed) - {actor}]
        )
        assert sorted((n.user_id, n.message) for n in created) == expected
        assert _inbox(db_session, crowd[actor]) == []

    @pytest.mark.parametrize("editor, assignees", [
        ("ann", ["ann", "ben", "cat", "dan", "eve"]),
        ("eve", ["ann", "ben"]),
        ("cat", ["cat"]),
        ("dan", ["ben", "dan", "eve"]),
    ])
    def test_task_edit(self, db_session, crowd, editor, assignees):
        task = crud_task.create(db_session, obj_in={"title": "Polish", "author_user_id": crowd[editor].id})
        crud_task.add_assignees(db_session, task_id=task.id, user_ids=_ids(crowd, assignees))
        db_session.commit()
        activity = activity_service.create_activity(
            db_session, task_id=task.id, user_id=crowd[editor].id,
            activity_type=ActivityTypeEnum.EDIT_TASK, edit_field="updated the description",
        )
        created = notification_rules.notify_task_edit(
            db_session, task_id=task.id, activity_id=activity.id, editor_user_id=crowd[editor].id
        )

        assert sorted(n.user_id for n in created) == sorted(_ids(crowd, set(assignees) - {editor}))
        assert _inbox(db_session, crowd[editor]) == []

    @pytest.mark.parametrize("author, text", [
        ("ann", "@ann @Ben @cat"),
        ("ben", "(@BEN) ping @dan, @eve!"),
        ("cat", "@cat @CAT @Cat"),
        ("dan", "@ann:@ben;@cat"),
    ])
    def test_mentions(self, db_session, crowd, author, text):
        task = crud_task.create(db_session, obj_in={"title": "Discuss", "author_user_id": crowd[author].id})
        comment = crud_comment.create(db_session, obj_in={"task_id": task.id, "user_id": crowd[author].id, "text": text})
        created = notification_rules.notify_mentions(
            db_session, comment_id=comment.id, text=text, task_id=task.id, author_user_id=crowd[author].id
        )

        mentioned = {name.lower() for name in parse_mentions(text)}
        assert sorted(n.user_id for n in created) == sorted(_ids(crowd, mentioned - {author}))
        assert _inbox(db_session, crowd[author]) == []
