# app/schemas/notification.py
"""
Pydantic schemas for notification endpoints.
"""
from pydantic import BaseModel
from typing import List

class NotificationOut(BaseModel):
    """
    A single notification as seen by its recipient.
    """
    id: str  # Notification unique identifier
    type: str  # "follow" or "like"
    fromUserId: str  # User who triggered the event
    fromUsername: str
    read: bool  # Always false for now, read-state is not managed yet
    createdAt: str  # ISO timestamp

class NotificationListOut(BaseModel):
    """
    Paginated notification list.
    """
    items: List[NotificationOut]
    offset: int
    limit: int
    total: int
