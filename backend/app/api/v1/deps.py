from fastapi import Depends, Header, Request, Response
from app.config import settings
from app.core.security import SESSION_TOKEN_MAX_AGE
from app.services.auth_gate import AuthContext, resolve_session
from app.services.notifications import NotificationSink
from app.services.social_graph import SocialGraph

async def get_auth_context(
    request: Request,
    authorization: str | None = Header(default=None),
) -> AuthContext:
    """
    FastAPI dependency to get the authenticated caller.

    This dependency extracts the session token from either:
    1. Authorization header (Bearer token) - preferred method
    2. HttpOnly cookie (named by settings.session_cookie_name, "jwt" by default)

    and hands it to the auth gate.

    Returns:
        AuthContext: The caller's id and public user view

    Raises:
        Unauthenticated (401): AUTH_REQUIRED / AUTH_INVALID_TOKEN / AUTH_USER_NOT_FOUND

    Usage:
        @router.get("/protected")
        async def protected_route(ctx: AuthContext = Depends(get_auth_context)):
            return {"user_id": str(ctx.user_id)}
    """
    token = None
    # 1) Prioritize Authorization: Bearer xxx
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1].strip()
    # 2) Secondly HttpOnly Cookie
    if not token:
        token = request.cookies.get(settings.session_cookie_name)
    return await resolve_session(token)

def get_notification_sink() -> NotificationSink:
    return NotificationSink()

def get_social_graph(notifications: NotificationSink = Depends(get_notification_sink)) -> SocialGraph:
    """
    FastAPI dependency building the graph engine with its notification sink.
    Tests override get_notification_sink / get_social_graph via app.dependency_overrides.
    """
    return SocialGraph(notifications)

def set_session_cookie(response: Response, token: str) -> None:
    """Attach the session token as an HttpOnly cookie that lives as long as the token."""
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=SESSION_TOKEN_MAX_AGE,
        httponly=True,
        samesite="strict",
        secure=settings.is_production,
    )

def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        settings.session_cookie_name,
        httponly=True,
        samesite="strict",
        secure=settings.is_production,
    )
