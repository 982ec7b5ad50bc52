from pydantic import BaseModel, ConfigDict, Field, field_validator

from tasklane.core.constants import DEFAULT_ROLE_COLOR
from tasklane.core.permissions import ALL_PERMISSIONS

class RoleBase(BaseModel):
    """Base schema for a role."""
    name: str
    color: str = DEFAULT_ROLE_COLOR
    permissions: int = Field(0, ge=0, le=ALL_PERMISSIONS)

    @field_validator("name")
    def name_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("Role name cannot be empty")
        return v.strip()

class RoleCreate(RoleBase):
    """Schema for creating a role."""
    pass

class RoleUpdate(BaseModel):
    """Schema for updating a role. Unset fields are left unchanged."""
    name: str | None = None
    color: str | None = None
    permissions: int | None = Field(None, ge=0, le=ALL_PERMISSIONS)

class Role(RoleBase):
    """Schema for reading a role."""
    id: int
    workspace_id: int
    model_config = ConfigDict(from_attributes=True)
