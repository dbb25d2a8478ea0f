# app/models/follow.py
"""
Database model for the follow relation.
One row means "follower follows followee". A row is simultaneously the
followee's follower entry and the follower's following entry, so
B in A.following <=> A in B.followers holds by construction.
"""
from tortoise import fields, models

class Follow(models.Model):
    """
    Directed follow edge between two users.

    - (follower, followee) is unique: the constraint is what makes concurrent
      "follow" calls for the same pair insert at most one row
    - follower != followee is enforced by SocialGraph before any insert
    """
    id = fields.IntField(pk=True)
    follower = fields.ForeignKeyField(
        "models.User",
        related_name="following_links",
        on_delete=fields.CASCADE,
    )  # The user doing the following
    followee = fields.ForeignKeyField(
        "models.User",
        related_name="follower_links",
        on_delete=fields.CASCADE,
    )  # The user being followed
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "follows"
        unique_together = (("follower", "followee"),)
