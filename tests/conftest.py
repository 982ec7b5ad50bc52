import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault("TESTING", "true")

import pytest
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient
from tasklane.core.config import settings
from tasklane.core.database import Base, build_engine
from tasklane.core.security import create_access_token
from tasklane.crud.role import role as crud_role
from tasklane.crud.user import user as crud_user
from tasklane.crud.workspace import workspace_member as crud_workspace_member
from tasklane.schemas.workspace import WorkspaceCreate
from tasklane.services.workspace import workspace_service
from tasklane.utils import deps as deps_utils
import tasklane.models  # noqa: F401
import main

test_db_url = settings.TEST_DATABASE_URL or "sqlite:///./test.db"

@pytest.fixture(scope="session")
def database_engine():
    engine = build_engine(test_db_url)
    yield engine
    engine.dispose()
    if test_db_url.startswith("sqlite") and os.path.exists("./test.db"):
        os.remove("./test.db")

@pytest.fixture(scope="function")
def db_session(database_engine):
    # Services commit, so every test gets freshly created tables
    Base.metadata.drop_all(bind=database_engine)
    Base.metadata.create_all(bind=database_engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=database_engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()

@pytest.fixture(scope="function")
def client(db_session):
    main.app.dependency_overrides[deps_utils.get_db] = lambda: db_session
    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.clear()

@pytest.fixture
def user_factory(db_session):
    def _user_factory(username):
        return crud_user.create(db_session, obj_in={"username": username, "email": f"{username.lower()}@test.com"})
    return _user_factory

@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}
    return _auth_headers

@pytest.fixture
def owner(user_factory):
    return user_factory("owner")

@pytest.fixture
def workspace(db_session, owner):
    return workspace_service.create_workspace(
        db_session, workspace_in=WorkspaceCreate(name="Platform Team"), user_id=owner.id
    )

@pytest.fixture
def member_factory(db_session, workspace, user_factory):
    """Create a user holding the named role in ``workspace``."""
    def _member_factory(username, role_name="Member"):
        new_user = user_factory(username)
        role = crud_role.get_by_name(db_session, workspace_id=workspace.id, name=role_name)
        assert role, f"Role {role_name} missing from workspace {workspace.id}"
        crud_workspace_member.create(
            db_session, obj_in={"workspace_id": workspace.id, "user_id": new_user.id, "role_id": role.id}
        )
        return new_user
    return _member_factory
