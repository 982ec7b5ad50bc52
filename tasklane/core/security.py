from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt
from tasklane.core.config import settings


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """Mint a bearer token for a user id. Identity itself is verified upstream."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {"sub": str(user_id), "exp": expire}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict:
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
