from sqlalchemy.orm import Session, joinedload
from typing import List, Optional

from tasklane.core.constants import ApplicationStatusEnum
from tasklane.crud.base import CRUDBase
from tasklane.models.workspace import Workspace, WorkspaceMember, WorkspaceApplication, WorkspaceInvitation
from tasklane.schemas.workspace import WorkspaceCreate, WorkspaceUpdate

class CRUDWorkspace(CRUDBase[Workspace, WorkspaceCreate, WorkspaceUpdate]):
    def get_for_user(self, db: Session, *, user_id: int) -> List[Workspace]:
        return (
            db.query(Workspace)
            .join(WorkspaceMember, WorkspaceMember.workspace_id == Workspace.id)
            .filter(WorkspaceMember.user_id == user_id)
            .order_by(Workspace.id)
            .all()
        )


class CRUDWorkspaceMember(CRUDBase[WorkspaceMember, WorkspaceCreate, WorkspaceUpdate]):
    def get_membership(self, db: Session, *, workspace_id: int, user_id: int) -> Optional[WorkspaceMember]:
        return (
            db.query(WorkspaceMember)
            .options(joinedload(WorkspaceMember.role))
            .filter(WorkspaceMember.workspace_id == workspace_id, WorkspaceMember.user_id == user_id)
            .first()
        )

    def get_for_workspace(self, db: Session, *, workspace_id: int) -> List[WorkspaceMember]:
        return (
            db.query(WorkspaceMember)
            .options(joinedload(WorkspaceMember.user), joinedload(WorkspaceMember.role))
            .filter(WorkspaceMember.workspace_id == workspace_id)
            .order_by(WorkspaceMember.id)
            .all()
        )


class CRUDWorkspaceApplication(CRUDBase[WorkspaceApplication, WorkspaceCreate, WorkspaceUpdate]):
    def get_for_workspace(self, db: Session, *, workspace_id: int, status: Optional[ApplicationStatusEnum] = None) -> List[WorkspaceApplication]:
        query = (
            db.query(WorkspaceApplication)
            .options(joinedload(WorkspaceApplication.user))
            .filter(WorkspaceApplication.workspace_id == workspace_id)
        )
        if status is not None:
            query = query.filter(WorkspaceApplication.status == status)
        return query.order_by(WorkspaceApplication.created_at.desc(), WorkspaceApplication.id.desc()).all()

    def get_pending(self, db: Session, *, workspace_id: int, application_id: int) -> Optional[WorkspaceApplication]:
        return db.query(WorkspaceApplication).filter(
            WorkspaceApplication.id == application_id,
            WorkspaceApplication.workspace_id == workspace_id,
            WorkspaceApplication.status == ApplicationStatusEnum.PENDING,
        ).first()

    def get_pending_for_user(self, db: Session, *, workspace_id: int, user_id: int) -> Optional[WorkspaceApplication]:
        return db.query(WorkspaceApplication).filter(
            WorkspaceApplication.workspace_id == workspace_id,
            WorkspaceApplication.user_id == user_id,
            WorkspaceApplication.status == ApplicationStatusEnum.PENDING,
        ).first()


class CRUDWorkspaceInvitation(CRUDBase[WorkspaceInvitation, WorkspaceCreate, WorkspaceUpdate]):
    def get_for_workspace(self, db: Session, *, workspace_id: int) -> List[WorkspaceInvitation]:
        return (
            db.query(WorkspaceInvitation)
            .filter(WorkspaceInvitation.workspace_id == workspace_id)
            .order_by(WorkspaceInvitation.created_at.desc())
            .all()
        )

workspace = CRUDWorkspace(Workspace)
workspace_member = CRUDWorkspaceMember(WorkspaceMember)
workspace_application = CRUDWorkspaceApplication(WorkspaceApplication)
workspace_invitation = CRUDWorkspaceInvitation(WorkspaceInvitation)
