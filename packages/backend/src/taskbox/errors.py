"""Outcome taxonomy for task operations.

Each failure a request can end in is one exception class. The HTTP layer
turns any TaskboxError into a JSON error response with the class's
status code, so handlers never build error responses by hand.
"""

from typing import Optional


class TaskboxError(Exception):
    """Base class for every request-terminating failure."""

    status_code = 500
    detail = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class Unauthenticated(TaskboxError):
    """Missing/malformed bearer header, or the identity provider said no."""

    status_code = 401
    detail = "Authentication required"


class InvalidInput(TaskboxError):
    status_code = 400
    detail = "Invalid payload"


class NotFound(TaskboxError):
    status_code = 404
    detail = "Task not found"


class Forbidden(TaskboxError):
    """The task exists but belongs to another identity."""

    status_code = 403
    detail = "Task belongs to another user"


class StoreError(TaskboxError):
    """Unexpected persistence failure.

    The message given here is for logs only; the public detail stays generic.
    """

    status_code = 500

    def __init__(self, message: Optional[str] = None):
        super().__init__()
        self.args = (message or self.detail,)
