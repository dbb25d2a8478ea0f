# app/schemas/user.py
"""
Pydantic schemas for account and social-graph endpoints.

Field-level validation (lengths, username/email/link formats, confirmation
fields) happens here, before any service is called. Password composition is
checked by the account service, which reports WeakPassword.
"""
import re
from dataclasses import dataclass, field
from typing import Any, Optional, Type

from pydantic import BaseModel, EmailStr, Field, HttpUrl, TypeAdapter, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from app.core.security import PASSWORD_MAX_LENGTH, PASSWORD_MIN_LENGTH

USERNAME_RE = re.compile(r"^[A-Za-z0-9_]+$")
_http_url = TypeAdapter(HttpUrl)


def _check_username(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Username is required")
    if len(value) > 30:
        raise ValueError("Username cannot exceed 30 characters")
    if not USERNAME_RE.match(value):
        raise ValueError("Username can only contain letters, numbers, and underscores")
    return value


def _check_full_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Full name is required")
    if len(value) > 100:
        raise ValueError("Full name cannot exceed 100 characters")
    return value


def _check_link(value: str) -> str:
    value = value.strip()
    if value:
        try:
            _http_url.validate_python(value)
        except PydanticValidationError:
            raise ValueError("Invalid URL format")
    return value


# ========== Input models ==========
class RegisterIn(BaseModel):
    """Request model for account registration (signup)."""
    username: str
    fullName: str
    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
    confirmPassword: str

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return _check_username(v)

    @field_validator("fullName")
    @classmethod
    def validate_full_name(cls, v: str) -> str:
        return _check_full_name(v)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirmPassword:
            raise ValueError("Passwords don't match")
        return self


class LoginIn(BaseModel):
    """Request model for login. Credentials are email + password."""
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()


class ProfileUpdateIn(BaseModel):
    """
    Request model for profile updates.
    All fields are optional - only provided fields will be updated.
    """
    fullName: Optional[str] = None
    username: Optional[str] = None
    bio: Optional[str] = Field(default=None, max_length=500)
    link: Optional[str] = None

    @field_validator("fullName")
    @classmethod
    def validate_full_name(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _check_full_name(v)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _check_username(v)

    @field_validator("bio")
    @classmethod
    def strip_bio(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else v.strip()

    @field_validator("link")
    @classmethod
    def validate_link(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _check_link(v)


class EmailUpdateIn(BaseModel):
    """Request model for changing the account email."""
    email: EmailStr

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()


class PasswordUpdateIn(BaseModel):
    """Request model for changing the password of the logged-in user."""
    currentPassword: str = Field(min_length=1)
    newPassword: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
    confirmNewPassword: str

    @model_validator(mode="after")
    def passwords_match(self):
        if self.newPassword != self.confirmNewPassword:
            raise ValueError("New passwords don't match")
        return self


# ========== Output models ==========
class UserPublic(BaseModel):
    """
    User view returned by the API and carried in the auth context.
    Never contains the password hash.
    """
    id: str
    username: str
    fullName: str
    email: str
    bio: str = ""
    link: str = ""
    avatar: Optional[str] = None
    coverImg: Optional[str] = None
    followers: list[str] = []  # IDs of users following this user
    following: list[str] = []  # IDs of users this user follows
    createdAt: Optional[str] = None


class FollowResultOut(BaseModel):
    """Response body of the follow/unfollow toggle."""
    message: str
    isFollowing: bool
    followersCount: int  # Target's follower count after the toggle
    followingCount: int  # Caller's following count after the toggle


# ========== Validation as a plain function ==========
@dataclass
class ValidationResult:
    """Outcome of validate_payload: either `data` or field-attributed `errors`."""
    success: bool
    data: Optional[BaseModel] = None
    errors: list[dict] = field(default_factory=list)


def field_errors(errors: list[dict]) -> list[dict]:
    """
    Convert pydantic error dicts to [{"field": "a.b", "message": "..."}].
    Model-level errors (e.g. password confirmation) get an empty field.
    Request locations added by FastAPI ("body", "query", ...) are dropped.
    """
    out = []
    for e in errors:
        loc = [str(part) for part in e.get("loc", ()) if part not in ("body", "query", "path")]
        message = e.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        out.append({"field": ".".join(loc), "message": message})
    return out


def validate_payload(model: Type[BaseModel], data: Any) -> ValidationResult:
    """
    Validate `data` against `model` without raising.

    Returns:
        ValidationResult(success=True, data=<model instance>) on success,
        ValidationResult(success=False, errors=[{field, message}, ...]) otherwise
    """
    try:
        return ValidationResult(success=True, data=model.model_validate(data))
    except PydanticValidationError as exc:
        return ValidationResult(success=False, errors=field_errors(exc.errors()))
