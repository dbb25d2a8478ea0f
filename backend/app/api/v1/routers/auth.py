# app/api/v1/routers/auth.py
from fastapi import APIRouter, Depends, Response, status
from app.api.v1.deps import clear_session_cookie, get_auth_context, set_session_cookie
from app.core.security import create_access_token
from app.schemas.user import LoginIn, RegisterIn
from app.services import accounts
from app.services.auth_gate import AuthContext

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(body: RegisterIn, response: Response):
    """
    Register a new user account and log it in.

    Username and email must be unique; the password must pass the strength
    policy. On success the session token is set as an HttpOnly cookie and also
    returned in the body.

    Returns:
        dict: success + data with:
            - user: public user view (followers/following empty)
            - accessToken: session token string

    Error codes:
        - VALIDATION_ERROR (400): malformed fields
        - WEAK_PASSWORD (400): password too weak
        - USERNAME_EXISTS / EMAIL_EXISTS (409): already taken
    """
    user = await accounts.register(body.username, body.fullName, body.email, body.password)
    token = create_access_token(str(user.id))
    set_session_cookie(response, token)
    view = await accounts.public_view(user)
    return {"success": True, "data": {"user": view.model_dump(), "accessToken": token}}

@router.post("/login")
async def login(body: LoginIn, response: Response):
    """
    Authenticate with email + password and create a session token.

    The token is returned in the response body and also set as an HttpOnly
    cookie for browser-based clients.

    Raises:
        InvalidCredentials (401): AUTH_INVALID_CREDENTIALS
    """
    user, token = await accounts.authenticate(body.email, body.password)
    set_session_cookie(response, token)
    view = await accounts.public_view(user)
    return {"success": True, "data": {"user": view.model_dump(), "accessToken": token}}

@router.get("/me")
async def me(ctx: AuthContext = Depends(get_auth_context)):
    """
    Get current authenticated user information.

    Raises:
        Unauthenticated (401): If user is not authenticated
    """
    return {"success": True, "data": ctx.user.model_dump()}

@router.post("/logout")
async def logout(response: Response):
    """
    Log out by clearing the session cookie.

    Note:
        Session tokens are stateless: the token itself stays valid until it
        expires (15 days after issuance). There is no revocation list.
    """
    clear_session_cookie(response)
    return {"success": True}
