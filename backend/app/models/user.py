# app/models/user.py
"""
Database model for users.
Represents a registered identity: login credentials and profile fields.

Follower / following sets are not stored on the user row. They are derived
from the Follow relation table (see app.models.follow), so the two sides of a
relationship can never disagree.
"""
import uuid
from tortoise import fields, models

class User(models.Model):
    """
    User database model.

    Relationships:
    - Has many outgoing Follow rows (related_name="following_links": users this user follows)
    - Has many incoming Follow rows (related_name="follower_links": users following this user)
    - Has many Notifications sent/received

    Security:
    - Password is stored as an argon2 hash (never store plain text passwords)
    - Username and email are unique; uniqueness is enforced by the database
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Primary key: unique user identifier
    username = fields.CharField(
        max_length=30,
        unique=True,
        index=True
    )  # Login handle (letters, digits, underscore)
    full_name = fields.CharField(max_length=100)
    email = fields.CharField(max_length=256, unique=True, index=True)  # Always stored lowercase
    password_hash = fields.CharField(max_length=255)  # Hashed password, never null
    bio = fields.CharField(max_length=500, default="")
    link = fields.CharField(max_length=512, default="")
    avatar = fields.CharField(max_length=512, null=True)  # Reference to uploaded avatar image
    cover_img = fields.CharField(max_length=512, null=True)  # Reference to uploaded cover image
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"  # Database table name

    def __str__(self) -> str:
        return self.username
