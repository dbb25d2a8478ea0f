"""
Account Service

Registration, login, and credential / profile changes.

Uniqueness of username and email is enforced by the database. The existence
checks below only produce friendlier errors in the common case; the
IntegrityError mapping is what makes two concurrent registrations with the same
username end in exactly one success and one UsernameTaken.

Argon2 hashing is CPU-bound, so it runs in Starlette's threadpool instead of
blocking the event loop. Passwords and hashes are never logged.
"""
import logging
from typing import Optional, Tuple

from starlette.concurrency import run_in_threadpool
from tortoise.exceptions import IntegrityError

from app.core.errors import EmailTaken, InvalidCredentials, NotFound, UsernameTaken, WeakPassword
from app.core.security import create_access_token, hash_password, is_strong_password, verify_password
from app.models.user import User
from app.schemas.user import UserPublic
from app.services.social_graph import followers_of, following_of

logger = logging.getLogger(__name__)


async def _raise_if_taken(username: Optional[str] = None, email: Optional[str] = None, exclude_id=None) -> None:
    if username is not None:
        qs = User.filter(username=username)
        if exclude_id is not None:
            qs = qs.exclude(id=exclude_id)
        if await qs.exists():
            raise UsernameTaken()
    if email is not None:
        qs = User.filter(email=email)
        if exclude_id is not None:
            qs = qs.exclude(id=exclude_id)
        if await qs.exists():
            raise EmailTaken()


async def get_user(user_id) -> User:
    user = await User.get_or_none(id=user_id)
    if user is None:
        raise NotFound()
    return user


async def get_by_username(username: str) -> User:
    user = await User.get_or_none(username=username)
    if user is None:
        raise NotFound(f"User {username} not found")
    return user


async def register(username: str, full_name: str, email: str, password: str) -> User:
    """
    Create a new account.

    Raises:
    - WeakPassword: password fails the strength policy
    - UsernameTaken / EmailTaken: uniqueness would be violated
    """
    email = email.strip().lower()
    if not is_strong_password(password):
        raise WeakPassword()
    await _raise_if_taken(username=username, email=email)

    password_hash = await run_in_threadpool(hash_password, password)
    try:
        user = await User.create(
            username=username,
            full_name=full_name,
            email=email,
            password_hash=password_hash,
        )
    except IntegrityError:
        # Lost a race with a concurrent registration.
        await _raise_if_taken(username=username, email=email)
        raise
    logger.info("[accounts] registered user id=%s username=%s", user.id, user.username)
    return user


async def authenticate(email: str, password: str) -> Tuple[User, str]:
    """
    Check email + password and issue a session token.

    Raises:
    - InvalidCredentials: unknown email or wrong password (indistinguishable)
    """
    user = await User.get_or_none(email=email.strip().lower())
    if user is None or not await run_in_threadpool(verify_password, password, user.password_hash):
        logger.info("[accounts] failed login for email=%s", email)
        raise InvalidCredentials()
    return user, create_access_token(str(user.id))


async def change_password(user_id, current_password: str, new_password: str) -> None:
    """
    Replace the password after re-verifying the current one.

    Raises:
    - InvalidCredentials: current password is wrong (stored hash untouched)
    - WeakPassword: new password fails the strength policy
    """
    user = await get_user(user_id)
    if not await run_in_threadpool(verify_password, current_password, user.password_hash):
        raise InvalidCredentials("Current password is incorrect", field="currentPassword")
    if not is_strong_password(new_password):
        raise WeakPassword(field="newPassword")
    user.password_hash = await run_in_threadpool(hash_password, new_password)
    await user.save()
    logger.info("[accounts] password changed for user id=%s", user.id)


async def update_profile(
    user_id,
    full_name: Optional[str] = None,
    username: Optional[str] = None,
    bio: Optional[str] = None,
    link: Optional[str] = None,
) -> User:
    """Update only the provided profile fields."""
    user = await get_user(user_id)
    if username is not None and username != user.username:
        await _raise_if_taken(username=username, exclude_id=user.id)
        user.username = username
    if full_name is not None:
        user.full_name = full_name
    if bio is not None:
        user.bio = bio
    if link is not None:
        user.link = link
    try:
        await user.save()
    except IntegrityError:
        await _raise_if_taken(username=user.username, exclude_id=user.id)
        raise
    return user


async def update_email(user_id, email: str) -> User:
    user = await get_user(user_id)
    email = email.strip().lower()
    if email == user.email:
        return user
    await _raise_if_taken(email=email, exclude_id=user.id)
    user.email = email
    try:
        await user.save()
    except IntegrityError:
        await _raise_if_taken(email=email, exclude_id=user.id)
        raise
    return user


async def public_view(user: User) -> UserPublic:
    """Build the API view of a user (no password hash) with follower/following IDs."""
    return UserPublic(
        id=str(user.id),
        username=user.username,
        fullName=user.full_name,
        email=user.email,
        bio=user.bio,
        link=user.link,
        avatar=user.avatar,
        coverImg=user.cover_img,
        followers=await followers_of(user.id),
        following=await following_of(user.id),
        createdAt=user.created_at.isoformat() if user.created_at else None,
    )
