"""
Error Taxonomy Module

Application errors carry the HTTP status they translate to. Handlers in
``app.main`` turn them into the ``{"success": false, "message": ...}``
envelope that every endpoint uses on failure.
"""


class AppError(Exception):
    status_code = 500
    default_message = "Server Error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequest(AppError):
    """A required field is missing or malformed."""
    status_code = 400
    default_message = "Invalid request"


class PermissionDenied(AppError):
    status_code = 403
    default_message = "Access Denied"


class NotFound(AppError):
    """An id in the path or body does not match a stored row."""
    status_code = 404
    default_message = "Not found"


class ServerError(AppError):
    status_code = 500
