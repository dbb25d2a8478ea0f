"""
Auth Gate

Turns a session token into an authenticated context, or rejects the call.
Token extraction from the request (header / cookie) lives in app.api.v1.deps;
this module only verifies and resolves. It never writes to the store.
"""
import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from app.core.errors import Unauthenticated
from app.core.security import InvalidToken, decode_access_token
from app.models.user import User
from app.schemas.user import UserPublic
from app.services.accounts import public_view

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthContext:
    """
    The caller's resolved identity.
    Produced only by resolve_session; `user` is the public view (no password hash).
    """
    user_id: uuid.UUID
    user: UserPublic

    @property
    def username(self) -> str:
        return self.user.username


async def resolve_session(token: Optional[str]) -> AuthContext:
    """
    Verify a session token and load the user it was issued for.

    Raises:
    - Unauthenticated(AUTH_REQUIRED): no token
    - Unauthenticated(AUTH_INVALID_TOKEN): bad signature, malformed or expired
    - Unauthenticated(AUTH_USER_NOT_FOUND): user deleted since the token was issued
    """
    if not token:
        raise Unauthenticated("Unauthorized: No Token Provided", code="AUTH_REQUIRED")

    try:
        user_id = uuid.UUID(decode_access_token(token))
    except (InvalidToken, ValueError):
        logger.info("[auth] rejected token %s...", token[:8])
        raise Unauthenticated("Unauthorized: Invalid Token", code="AUTH_INVALID_TOKEN")

    user = await User.get_or_none(id=user_id)
    if user is None:
        raise Unauthenticated("User not found", code="AUTH_USER_NOT_FOUND")
    return AuthContext(user_id=user.id, user=await public_view(user))
