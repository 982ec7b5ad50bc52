from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import Literal, Optional

from tasklane.core.constants import JoinPolicyEnum, ApplicationStatusEnum
from tasklane.schemas.role import Role
from tasklane.schemas.user import UserSummary

class WorkspaceBase(BaseModel):
    name: str
    description: Optional[str] = None
    join_policy: JoinPolicyEnum = JoinPolicyEnum.INVITE_ONLY

    @field_validator("name")
    def name_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("Workspace name cannot be empty")
        return v.strip()

class WorkspaceCreate(WorkspaceBase):
    pass

class WorkspaceUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    join_policy: Optional[JoinPolicyEnum] = None

class Workspace(WorkspaceBase):
    id: int
    created_by_id: int
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)

class WorkspaceMember(BaseModel):
    id: int
    user_id: int
    workspace_id: int
    role_id: int
    user: Optional[UserSummary] = None
    role: Optional[Role] = None
    model_config = ConfigDict(from_attributes=True)

class WorkspaceMemberAdd(BaseModel):
    user_id: int

class MemberRoleUpdate(BaseModel):
    role_id: int

class InvitationCreate(BaseModel):
    expires_in_days: Optional[int] = None

class Invitation(BaseModel):
    id: str
    workspace_id: int
    created_by_id: int
    expires_at: datetime
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)

class ApplicationCreate(BaseModel):
    message: Optional[str] = Field(None, max_length=1000)

class Application(BaseModel):
    id: int
    workspace_id: int
    user_id: int
    message: Optional[str] = None
    status: ApplicationStatusEnum
    created_at: Optional[datetime] = None
    user: Optional[UserSummary] = None
    model_config = ConfigDict(from_attributes=True)

class ApplicationResolve(BaseModel):
    action: Literal["approve", "reject"]

class JoinResult(BaseModel):
    joined: bool
    member: Optional[WorkspaceMember] = None
    application: Optional[Application] = None
