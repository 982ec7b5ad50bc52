from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from pydantic import ValidationError
from sqlalchemy.orm import Session
from tasklane.core.database import SessionLocal
from tasklane.core.permissions import PermissionEnum
from tasklane.core.security import decode_access_token
from tasklane.crud.user import user as user_crud
from tasklane.models.user import User
from tasklane.schemas.token import TokenPayload
from tasklane.services.guard import AuthorizationResult, DenyReasonEnum, membership_guard

http_bearer = HTTPBearer()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials = Depends(http_bearer)
) -> User:
    try:
        payload = decode_access_token(credentials.credentials)
        token_data = TokenPayload(**payload)
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )

    if token_data.user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload")

    user = user_crud.get(db, id=token_data.user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )
    request.state.user_id = user.id
    return user

def ensure_authorized(result: AuthorizationResult) -> None:
    """Turn a guard denial into a 403 carrying the reason's message."""
    if not result.allowed:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=result.message)

def require_member():
    """Dependency that checks the current user belongs to the workspace in the path."""
    def _verify_member(
        workspace_id: int,
        db: Session = Depends(get_db),
        user: User = Depends(get_current_user),
    ) -> User:
        if not membership_guard.is_member(db, workspace_id=workspace_id, user_id=user.id):
            ensure_authorized(AuthorizationResult(allowed=False, reason=DenyReasonEnum.NOT_A_MEMBER))
        return user
    return _verify_member

def require_permission(permission: PermissionEnum):
    """Dependency that checks the current user's workspace role carries ``permission``."""
    def _verify_permission(
        workspace_id: int,
        db: Session = Depends(get_db),
        user: User = Depends(get_current_user),
    ) -> User:
        ensure_authorized(
            membership_guard.authorize(db, workspace_id=workspace_id, user_id=user.id, permission=permission)
        )
        return user
    return _verify_permission

def require_admin_action():
    """Dependency for actions reserved to the Admin role or a full-permission role."""
    def _verify_admin(
        workspace_id: int,
        db: Session = Depends(get_db),
        user: User = Depends(get_current_user),
    ) -> User:
        ensure_authorized(membership_guard.authorize_admin_action(db, workspace_id=workspace_id, user_id=user.id))
        return user
    return _verify_admin
