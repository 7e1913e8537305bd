"""
Error taxonomy shared by every task protocol.

Each error carries the status code and machine-readable code that both the
REST and GraphQL layers render, so a failure looks the same whichever
protocol reported it.
"""


class TaskError(Exception):
    status_code = 500
    code = "TASK_ERROR"
    default_message = "task operation failed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class TaskValidationError(TaskError):
    """Client supplied invalid input (e.g. a blank title)."""
    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "title required"


class TaskNotFound(TaskError):
    """No live task matches the identifier, or the identifier is malformed."""
    status_code = 404
    code = "NOT_FOUND"
    default_message = "not found"


class StoreUnavailable(TaskError):
    """The backing database failed. Never masked, never retried here."""
    status_code = 500
    code = "STORE_UNAVAILABLE"
    default_message = "store unavailable"
