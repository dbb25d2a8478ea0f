# app/models/notification.py
import uuid
from enum import Enum
from tortoise import fields, models

class NotificationType(str, Enum):
    FOLLOW = "follow"
    LIKE = "like"

class Notification(models.Model):
    """
    Directed event between two users ("from_user followed to_user").
    - Created only by NotificationSink
    - Never updated afterwards (read-state toggling is not implemented)
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    from_user = fields.ForeignKeyField(
        "models.User", related_name="sent_notifications", on_delete=fields.CASCADE
    )
    to_user = fields.ForeignKeyField(
        "models.User", related_name="notifications", on_delete=fields.CASCADE
    )
    type = fields.CharEnumField(NotificationType, max_length=16)
    read = fields.BooleanField(default=False)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "notifications"
