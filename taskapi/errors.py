"""Error taxonomy shared by the database layer and the HTTP handlers."""

from fastapi import HTTPException, status


class TaskApiError(HTTPException):
    """Base error. ``detail`` is safe to show to clients, ``cause`` may not be."""

    error_code = "STORE_ERROR"
    retryable = False

    def __init__(self, status_code, detail, cause=None):
        super().__init__(status_code=status_code, detail=detail)
        self.cause = cause


class ValidationFailed(TaskApiError):
    error_code = "VALIDATION_ERROR"

    def __init__(self, detail="Request is invalid", cause=None):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail, cause)


class TaskNotFound(TaskApiError):
    error_code = "NOT_FOUND"

    def __init__(self, task_id, cause=None):
        super().__init__(status.HTTP_404_NOT_FOUND, f"Task {task_id} does not exist", cause)
        self.task_id = task_id


class Conflict(TaskApiError):
    error_code = "CONFLICT"

    def __init__(self, detail="Request conflicts with stored data", cause=None):
        super().__init__(status.HTTP_409_CONFLICT, detail, cause)


class StoreUnavailable(TaskApiError):
    error_code = "STORE_UNAVAILABLE"
    retryable = True

    def __init__(self, detail="Database is temporarily unavailable", cause=None):
        super().__init__(status.HTTP_503_SERVICE_UNAVAILABLE, detail, cause)


class StoreError(TaskApiError):
    def __init__(self, detail="Database operation failed", cause=None):
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, detail, cause)
