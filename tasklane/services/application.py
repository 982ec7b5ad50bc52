from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from typing import List, Optional
import logging

from tasklane.core.constants import ApplicationStatusEnum, JoinPolicyEnum
from tasklane.core.exceptions import MembershipError
from tasklane.crud.workspace import (
    workspace_member as crud_workspace_member,
    workspace_application as crud_workspace_application,
)
from tasklane.models.workspace import WorkspaceApplication
from tasklane.schemas.workspace import (
    Application as ApplicationSchema, ApplicationCreate, JoinResult, WorkspaceMember as WorkspaceMemberSchema
)
from tasklane.services.workspace import workspace_service

logger = logging.getLogger(__name__)

class ApplicationService:
    def apply(self, db: Session, *, workspace_id: int, user_id: int, application_in: ApplicationCreate) -> JoinResult:
        """
        Ask to join a workspace. What happens depends on its join policy:
        invite-only refuses, apply-to-join files a pending application and
        discoverable workspaces add the user straight away.
        """
        workspace = workspace_service.get_workspace(db, workspace_id=workspace_id)
        if crud_workspace_member.get_membership(db, workspace_id=workspace_id, user_id=user_id):
            raise MembershipError("You are already a member of this workspace")

        if workspace.join_policy == JoinPolicyEnum.INVITE_ONLY:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="This workspace is invite-only")

        if workspace.join_policy == JoinPolicyEnum.DISCOVERABLE:
            member = workspace_service.add_member(db, workspace_id=workspace_id, user_id=user_id)
            return JoinResult(joined=True, member=WorkspaceMemberSchema.model_validate(member))

        if crud_workspace_application.get_pending_for_user(db, workspace_id=workspace_id, user_id=user_id):
            raise MembershipError("You already have a pending application for this workspace")

        application = crud_workspace_application.create(
            db,
            obj_in={
                "workspace_id": workspace_id,
                "user_id": user_id,
                "message": application_in.message,
                "status": ApplicationStatusEnum.PENDING,
            },
        )
        logger.info(f"User {user_id} applied to workspace {workspace_id} (application {application.id})")
        return JoinResult(joined=False, application=ApplicationSchema.model_validate(application))

    def get_applications(self, db: Session, *, workspace_id: int, status_filter: Optional[ApplicationStatusEnum] = None) -> List[WorkspaceApplication]:
        return crud_workspace_application.get_for_workspace(db, workspace_id=workspace_id, status=status_filter)

    def resolve(self, db: Session, *, workspace_id: int, application_id: int, action: str) -> WorkspaceApplication:
        application = crud_workspace_application.get_pending(db, workspace_id=workspace_id, application_id=application_id)
        if not application:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pending application not found")

        if action == "reject":
            application = crud_workspace_application.update(
                db, db_obj=application, obj_in={"status": ApplicationStatusEnum.REJECTED}
            )
            logger.info(f"Rejected application {application_id} to workspace {workspace_id}")
            return application

        # Approval flips the status and adds the membership together
        try:
            crud_workspace_application.update(
                db, db_obj=application, obj_in={"status": ApplicationStatusEnum.APPROVED}, commit=False
            )
            workspace_service.add_member(db, workspace_id=workspace_id, user_id=application.user_id, commit=False)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(application)
        logger.info(f"Approved application {application_id}; user {application.user_id} joined workspace {workspace_id}")
        return application

application_service = ApplicationService()
