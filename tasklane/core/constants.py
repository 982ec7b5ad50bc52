from enum import Enum


DEFAULT_ROLE_COLOR = "#6B7280"

class DefaultRoleEnum(str, Enum):
    OWNER = "Owner"
    ADMIN = "Admin"
    MEMBER = "Member"

RESERVED_ROLE_NAMES = frozenset(role.value for role in DefaultRoleEnum)

class NotificationTypeEnum(str, Enum):
    MENTION = "mention"
    NEAR_OVERDUE = "near_overdue"
    OVERDUE = "overdue"
    TASK_EDITED = "task_edited"
    TASK_REASSIGNED = "task_reassigned"

class NotificationSeverityEnum(str, Enum):
    INFO = "info"
    MEDIUM = "medium"
    CRITICAL = "critical"

class ActivityTypeEnum(str, Enum):
    CREATE_TASK = "create_task"
    MOVE_TASK = "move_task"
    EDIT_TASK = "edit_task"

class TaskStatusEnum(str, Enum):
    INPUT_QUEUE = "Input Queue"
    WORK_IN_PROGRESS = "Work In Progress"
    REVIEW = "Review"
    DONE = "Done"

class JoinPolicyEnum(str, Enum):
    INVITE_ONLY = "invite_only"
    APPLY_TO_JOIN = "apply_to_join"
    DISCOVERABLE = "discoverable"

class ApplicationStatusEnum(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

# Integer codes used in storage. Only tasklane.models.types reads these.
NOTIFICATION_TYPE_CODES = {
    NotificationTypeEnum.MENTION: 0,
    NotificationTypeEnum.NEAR_OVERDUE: 1,
    NotificationTypeEnum.OVERDUE: 2,
    NotificationTypeEnum.TASK_EDITED: 3,
    NotificationTypeEnum.TASK_REASSIGNED: 4,
}

NOTIFICATION_SEVERITY_CODES = {
    NotificationSeverityEnum.INFO: 0,
    NotificationSeverityEnum.MEDIUM: 1,
    NotificationSeverityEnum.CRITICAL: 2,
}

ACTIVITY_TYPE_CODES = {
    ActivityTypeEnum.CREATE_TASK: 0,
    ActivityTypeEnum.MOVE_TASK: 1,
    ActivityTypeEnum.EDIT_TASK: 2,
}

TASK_STATUS_CODES = {
    TaskStatusEnum.INPUT_QUEUE: 0,
    TaskStatusEnum.WORK_IN_PROGRESS: 1,
    TaskStatusEnum.REVIEW: 2,
    TaskStatusEnum.DONE: 3,
}

JOIN_POLICY_CODES = {
    JoinPolicyEnum.INVITE_ONLY: 0,
    JoinPolicyEnum.APPLY_TO_JOIN: 1,
    JoinPolicyEnum.DISCOVERABLE: 2,
}

APPLICATION_STATUS_CODES = {
    ApplicationStatusEnum.PENDING: 0,
    ApplicationStatusEnum.APPROVED: 1,
    ApplicationStatusEnum.REJECTED: 2,
}
