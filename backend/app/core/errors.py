# app/core/errors.py
"""
Application error taxonomy.

Every failure path in the services raises one of these. The API layer maps them
to HTTP responses (see app.api.error_handlers); services never build responses.

    AppError
    ├── ValidationError (400)
    │   └── WeakPassword
    ├── Unauthenticated (401)
    ├── InvalidCredentials (401)
    ├── NotFound (404)
    ├── Conflict (409)
    │   ├── UsernameTaken
    │   ├── EmailTaken
    │   └── SelfFollowRejected
    └── Internal (500)
"""
from typing import Optional


class AppError(Exception):
    """
    Base class for errors that carry a stable error code.

    Attributes:
        code: Machine-readable error code returned to clients (e.g. "USERNAME_EXISTS")
        message: Human-readable message, safe to show to the caller
        field: Request field the error is attributed to, if any
    """
    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    message: str = "Internal Server Error"
    field: Optional[str] = None

    def __init__(self, message: Optional[str] = None, *, code: Optional[str] = None, field: Optional[str] = None):
        if message is not None:
            self.message = message
        if code is not None:
            self.code = code
        if field is not None:
            self.field = field
        super().__init__(self.message)

    def to_dict(self) -> dict:
        error = {"code": self.code, "message": self.message}
        if self.field:
            error["field"] = self.field
        return {"success": False, "error": error}


class ValidationError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"
    message = "Invalid data"


class WeakPassword(ValidationError):
    code = "WEAK_PASSWORD"
    message = (
        "Password must be 8-100 characters and contain at least one lowercase letter, "
        "one uppercase letter, one number, and one special character"
    )
    field = "password"


class Unauthenticated(AppError):
    status_code = 401
    code = "AUTH_REQUIRED"
    message = "Unauthorized"


class InvalidCredentials(AppError):
    status_code = 401
    code = "AUTH_INVALID_CREDENTIALS"
    message = "Incorrect email or password"


class NotFound(AppError):
    status_code = 404
    code = "USER_NOT_FOUND"
    message = "User not found"


class Conflict(AppError):
    status_code = 409
    code = "CONFLICT"
    message = "Conflict"


class UsernameTaken(Conflict):
    code = "USERNAME_EXISTS"
    message = "Username already exists"
    field = "username"


class EmailTaken(Conflict):
    code = "EMAIL_EXISTS"
    message = "Email already registered"
    field = "email"


class SelfFollowRejected(Conflict):
    code = "SELF_FOLLOW"
    message = "You can't follow/unfollow yourself"


class Internal(AppError):
    """Unexpected failure; the catch-all handler answers with this envelope."""
