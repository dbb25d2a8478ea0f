# app/core/security.py
"""
Security module for authentication.
Handles password hashing, the password strength policy, and session token
(JWT) creation/validation.

Session tokens are stateless: validity is purely a function of the signature
and the expiry. There is no server-side revocation list, so a leaked token
stays usable until it expires (at most SESSION_TOKEN_LIFETIME). Logging out
only clears the client's cookie.
"""
import re
import datetime as dt
from typing import Optional

import jwt  # PyJWT
from passlib.context import CryptContext

from app.config import settings

# Password hashing context
# Argon2 is a modern, salted, memory-hard password hashing algorithm
pwd_context = CryptContext(
    schemes=["argon2"],  # Use Argon2 for password hashing
    deprecated="auto",   # Automatically handle deprecated schemes
)

# Session token lifetime (also used as the cookie max-age)
SESSION_TOKEN_LIFETIME = dt.timedelta(days=15)
SESSION_TOKEN_MAX_AGE = int(SESSION_TOKEN_LIFETIME.total_seconds())

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 100


class InvalidToken(Exception):
    """Raised when a session token is malformed, badly signed or expired."""


def hash_password(plain: str) -> str:
    """
    Hash a plain text password using Argon2.

    Args:
        plain: Plain text password to hash

    Returns:
        Hashed password string (safe to store in database)
    """
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """
    Verify a plain text password against a hashed password.
    The comparison is constant-time (done by the argon2 backend).

    Returns:
        True if password matches, False otherwise (including unparseable hashes)
    """
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        return False


def is_strong_password(password: str) -> bool:
    """
    Password strength policy: 8-100 characters with at least one lowercase
    letter, one uppercase letter, one digit and one special character.
    """
    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        return False
    return all((
        re.search(r"[a-z]", password),
        re.search(r"[A-Z]", password),
        re.search(r"\d", password),
        re.search(r"[^A-Za-z0-9]", password),
    ))


def create_access_token(user_id: str, now: Optional[dt.datetime] = None) -> str:
    """
    Create a signed session token for a user.

    Args:
        user_id: Unique user identifier (UUID string)
        now: Issue time, defaults to the current UTC time

    Returns:
        Encoded JWT token string

    Token payload includes:
        - sub: Subject (user ID)
        - iat: Issued at timestamp
        - exp: Expiration timestamp (iat + 15 days)
    """
    issued_at = now or dt.datetime.now(dt.timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + SESSION_TOKEN_LIFETIME,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_alg)


def decode_access_token(token: str) -> str:
    """
    Validate a session token and return the user ID it was issued for.

    Raises:
        InvalidToken: If the token is malformed, the signature does not
            validate, a required claim is missing, or the token has expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_alg],
            options={"require": ["sub", "exp", "iat"]},
        )
    except jwt.PyJWTError as exc:
        raise InvalidToken(str(exc)) from exc
    return payload["sub"]
