from tasklane.models.user import User
from tasklane.models.workspace import Workspace, WorkspaceMember, WorkspaceApplication, WorkspaceInvitation
from tasklane.models.role import Role
from tasklane.models.task import Task, TaskAssignment
from tasklane.models.comment import Comment
from tasklane.models.activity import Activity
from tasklane.models.notification import Notification
