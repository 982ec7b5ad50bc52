from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional

class UserBase(BaseModel):
    """Base user schema with common fields."""
    username: str
    email: Optional[str] = None

class UserCreate(UserBase):
    """Schema for registering a user coming from the identity provider."""
    cognito_id: Optional[str] = None

    @field_validator("username")
    def username_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("Username cannot be empty")
        return v.strip()

class UserUpdate(BaseModel):
    email: Optional[str] = None

class User(UserBase):
    """Schema for reading a user."""
    id: int
    model_config = ConfigDict(from_attributes=True)

class UserSummary(BaseModel):
    id: int
    username: str
    model_config = ConfigDict(from_attributes=True)
