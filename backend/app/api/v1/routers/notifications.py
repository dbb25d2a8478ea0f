# app/api/v1/routers/notifications.py
from fastapi import APIRouter, Depends, Query
from app.api.v1.deps import get_auth_context, get_notification_sink
from app.schemas.notification import NotificationListOut
from app.services.auth_gate import AuthContext
from app.services.notifications import NotificationSink

router = APIRouter(prefix="/notifications", tags=["notifications"])

@router.get("", response_model=dict)
async def list_notifications(
    ctx: AuthContext = Depends(get_auth_context),
    sink: NotificationSink = Depends(get_notification_sink),
    offset: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
):
    """
    Notifications received by the caller, newest first. Read-only.
    """
    rows, total = await sink.list_for(ctx.user_id, offset=offset, limit=limit)
    items = [{
        "id": str(n.id),
        "type": n.type.value,
        "fromUserId": str(n.from_user_id),
        "fromUsername": n.from_user.username,
        "read": n.read,
        "createdAt": n.created_at.isoformat(),
    } for n in rows]
    out = NotificationListOut(items=items, offset=offset, limit=limit, total=total)
    return {"success": True, "data": out.model_dump()}
