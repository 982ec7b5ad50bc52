class TasklaneError(Exception):
    """Base class for domain errors the API maps to 4xx responses."""
    status_code = 400
    code = "BAD_REQUEST"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ActivityValidationError(TasklaneError):
    code = "INVALID_ACTIVITY"


class ProtectedRoleError(TasklaneError):
    code = "PROTECTED_ROLE"


class RoleConflictError(TasklaneError):
    code = "ROLE_CONFLICT"


class RoleInUseError(TasklaneError):
    code = "ROLE_IN_USE"


class MembershipError(TasklaneError):
    code = "MEMBERSHIP_ERROR"
