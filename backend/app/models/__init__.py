# app/models/__init__.py
"""
Database models module initialization.
Exports all database models for convenient imports throughout the application.

Models exported:
- User: User account (identity) and profile model
- Follow: Follow relation (follower -> followee), source of truth for the social graph
- Notification: Directed notification events (follow, like)
"""
from .user import User
from .follow import Follow
from .notification import Notification, NotificationType
