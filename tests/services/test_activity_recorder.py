import pytest
from tasklane.core.constants import ActivityTypeEnum
from tasklane.core.exceptions import ActivityValidationError
from tasklane.crud.activity import activity as crud_activity
from tasklane.crud.task import task as crud_task
from tasklane.services.activity import activity_service


@pytest.fixture
def task(db_session, user_factory):
    author = user_factory("author")
    return crud_task.create(db_session, obj_in={"title": "Write docs", "author_user_id": author.id})

def test_create_task_activity_needs_nothing_extra(db_session, task):
    activity = activity_service.create_activity(
        db_session, task_id=task.id, user_id=task.author_user_id, activity_type=ActivityTypeEnum.CREATE_TASK
    )
    assert activity.id is not None
    assert activity.activity_type is ActivityTypeEnum.CREATE_TASK

def test_move_activity_keeps_both_statuses(db_session, task):
    activity = activity_service.create_activity(
        db_session,
        task_id=task.id,
        user_id=task.author_user_id,
        activity_type=ActivityTypeEnum.MOVE_TASK,
        previous_status="Input Queue",
        new_status="Review",
    )
    assert (activity.previous_status, activity.new_status) == ("Input Queue", "Review")

@pytest.mark.parametrize("previous_status,new_status", [(None, "Review"), ("Review", None), ("", "Done")])
def test_move_activity_without_both_statuses_is_rejected(db_session, task, previous_status, new_status):
    with pytest.raises(ActivityValidationError):
        activity_service.create_activity(
            db_session,
            task_id=task.id,
            user_id=task.author_user_id,
            activity_type=ActivityTypeEnum.MOVE_TASK,
            previous_status=previous_status,
            new_status=new_status,
        )
    assert crud_activity.get_for_task(db_session, task_id=task.id) == []

@pytest.mark.parametrize("edit_field", [None, "", "   "])
def test_edit_activity_without_description_is_rejected(db_session, task, edit_field):
    with pytest.raises(ActivityValidationError):
        activity_service.create_activity(
            db_session,
            task_id=task.id,
            user_id=task.author_user_id,
            activity_type=ActivityTypeEnum.EDIT_TASK,
            edit_field=edit_field,
        )
    assert crud_activity.get_for_task(db_session, task_id=task.id) == []

def test_feed_is_newest_first(db_session, task):
    first = activity_service.create_activity(
        db_session, task_id=task.id, user_id=task.author_user_id, activity_type=ActivityTypeEnum.CREATE_TASK
    )
    second = activity_service.create_activity(
        db_session, task_id=task.id, user_id=task.author_user_id,
        activity_type=ActivityTypeEnum.EDIT_TASK, edit_field="updated the title",
    )
    feed = activity_service.get_task_activities(db_session, task_id=task.id)
    assert [a.id for a in feed] == [second.id, first.id]
