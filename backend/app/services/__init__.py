"""
Services Module

Business logic behind the API routers:
- Accounts: registration, login, password / profile changes
- Auth Gate: session token -> authenticated context
- Social Graph: follow / unfollow toggling and suggestions
- Notifications: best-effort notification sink
"""

from .accounts import (
    authenticate,
    change_password,
    public_view,
    register,
    update_email,
    update_profile,
)
from .auth_gate import AuthContext, resolve_session
from .notifications import NotificationSink
from .social_graph import FollowResult, SocialGraph

__all__ = [
    # Accounts
    "authenticate",
    "change_password",
    "public_view",
    "register",
    "update_email",
    "update_profile",
    # Auth gate
    "AuthContext",
    "resolve_session",
    # Graph
    "FollowResult",
    "SocialGraph",
    # Notifications
    "NotificationSink",
]
