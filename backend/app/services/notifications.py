"""
Notification Sink

Append-only store of directed events between users ("A followed B").

Delivery is best-effort: `emit` never raises. A failed insert is logged and
the event is dropped (at-most-once, may lose). Callers such as SocialGraph
rely on this so that a notification failure can never undo the relationship
change that triggered it.
"""
import logging
from typing import List, Optional, Tuple

from app.models.notification import Notification, NotificationType

logger = logging.getLogger(__name__)


class NotificationSink:
    """Writes and lists Notification rows."""

    async def emit(
        self,
        from_user_id,
        to_user_id,
        kind: NotificationType = NotificationType.FOLLOW,
    ) -> Optional[Notification]:
        """
        Record a notification.

        Returns:
        - The created Notification, or None if the write failed
        """
        try:
            return await Notification.create(
                from_user_id=from_user_id,
                to_user_id=to_user_id,
                type=kind,
            )
        except Exception:
            logger.exception(
                "[notifications] dropped %s notification from=%s to=%s",
                kind.value, from_user_id, to_user_id,
            )
            return None

    async def list_for(self, user_id, offset: int = 0, limit: int = 50) -> Tuple[List[Notification], int]:
        """
        Notifications received by a user, newest first.

        Returns:
        - (page of notifications with from_user prefetched, total count)
        """
        qs = Notification.filter(to_user_id=user_id)
        total = await qs.count()
        rows = await qs.order_by("-created_at").offset(offset).limit(limit).prefetch_related("from_user")
        return rows, total
