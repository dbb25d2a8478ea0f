# app/api/v1/routers/users.py
from fastapi import APIRouter, Depends, Response, status
from app.api.v1.deps import get_auth_context, get_social_graph
from app.config import settings
from app.schemas.user import EmailUpdateIn, FollowResultOut, PasswordUpdateIn, ProfileUpdateIn
from app.services import accounts
from app.services.auth_gate import AuthContext
from app.services.social_graph import SocialGraph

router = APIRouter(prefix="/users", tags=["users"])

@router.get("/profile/{username}", dependencies=[Depends(get_auth_context)])
async def get_user_profile(username: str):
    """
    Get a user's public profile by username.

    Raises:
        NotFound (404): USER_NOT_FOUND
    """
    user = await accounts.get_by_username(username)
    view = await accounts.public_view(user)
    return {"success": True, "data": view.model_dump()}

@router.get("/suggested")
async def get_suggested_users(
    ctx: AuthContext = Depends(get_auth_context),
    graph: SocialGraph = Depends(get_social_graph),
):
    """
    Who-to-follow suggestions for the caller.

    Never includes the caller or anyone the caller already follows. Returns at
    most settings.suggestion_result_size users, possibly fewer.
    """
    users = await graph.suggest(
        ctx.user_id,
        pool_size=settings.suggestion_pool_size,
        result_size=settings.suggestion_result_size,
    )
    items = [(await accounts.public_view(u)).model_dump() for u in users]
    return {"success": True, "data": items}

@router.post("/follow/{user_id}")
async def follow_unfollow_user(
    user_id: str,
    response: Response,
    ctx: AuthContext = Depends(get_auth_context),
    graph: SocialGraph = Depends(get_social_graph),
):
    """
    Toggle following `user_id`.

    Returns 201 when the call created a follow and 200 when it removed one.
    Counts are taken after the change: followersCount is the target's,
    followingCount is the caller's.

    Raises:
        NotFound (404): USER_NOT_FOUND
        SelfFollowRejected (409): SELF_FOLLOW
    """
    result = await graph.toggle_follow(ctx.user_id, user_id)
    if result.is_following:
        response.status_code = status.HTTP_201_CREATED
        message = f"Now following {result.target_username}"
    else:
        message = f"Unfollowed {result.target_username}"
    out = FollowResultOut(
        message=message,
        isFollowing=result.is_following,
        followersCount=result.followers_count,
        followingCount=result.following_count,
    )
    return {"success": True, "data": out.model_dump()}

@router.patch("/profile")
async def update_profile(body: ProfileUpdateIn, ctx: AuthContext = Depends(get_auth_context)):
    """
    Update basic profile info. Only provided fields are changed.

    Raises:
        UsernameTaken (409): USERNAME_EXISTS
    """
    user = await accounts.update_profile(
        ctx.user_id,
        full_name=body.fullName,
        username=body.username,
        bio=body.bio,
        link=body.link,
    )
    view = await accounts.public_view(user)
    return {"success": True, "data": view.model_dump()}

@router.patch("/email")
async def update_email(body: EmailUpdateIn, ctx: AuthContext = Depends(get_auth_context)):
    """
    Change the account email (stored lowercase).

    Raises:
        EmailTaken (409): EMAIL_EXISTS
    """
    user = await accounts.update_email(ctx.user_id, body.email)
    view = await accounts.public_view(user)
    return {"success": True, "data": view.model_dump()}

@router.patch("/password")
async def update_password(body: PasswordUpdateIn, ctx: AuthContext = Depends(get_auth_context)):
    """
    Change the caller's password. Requires the current password.

    Raises:
        InvalidCredentials (401): current password is wrong
        WeakPassword (400): new password fails the strength policy
    """
    await accounts.change_password(ctx.user_id, body.currentPassword, body.newPassword)
    return {"success": True, "data": {"message": "Password updated successfully"}}
