"""
Social Graph Engine

Follow / unfollow state transitions and who-to-follow suggestions.

The graph is stored as one row per directed edge in the `follows` table
(app.models.follow.Follow). A user's followers and following are both read
from that table, so the two sides of a relationship always agree and counts
are derived rather than stored.

Concurrency:
- follow   = INSERT of the (follower, followee) row. The unique constraint makes
             it a compare-and-swap: of two concurrent follows, one inserts and
             the other gets IntegrityError and reports the already-following state.
- unfollow = DELETE of that row, a single conditional statement.
Both are single-statement writes, so a crash or a cancelled request cannot
leave a half-applied relationship.

Notifications are emitted after a successful insert only, through the
NotificationSink, which never raises. A lost notification does not undo the follow.
"""
import logging
import random
import uuid
from dataclasses import dataclass
from typing import List, Optional, Tuple

from tortoise.exceptions import IntegrityError

from app.core.errors import NotFound, SelfFollowRejected
from app.models.follow import Follow
from app.models.notification import NotificationType
from app.models.user import User
from app.services.notifications import NotificationSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FollowResult:
    """Outcome of toggle_follow. Counts are read after the mutation."""
    is_following: bool
    followers_count: int  # target's followers
    following_count: int  # actor's following
    target_username: str


def _parse_id(user_id) -> uuid.UUID:
    if isinstance(user_id, uuid.UUID):
        return user_id
    try:
        return uuid.UUID(str(user_id))
    except ValueError:
        raise NotFound() from None


def _edge(follower_id, followee_id):
    return Follow.filter(follower_id=follower_id, followee_id=followee_id)


async def followers_of(user_id) -> List[str]:
    """IDs of users following `user_id`."""
    rows = await Follow.filter(followee_id=user_id).order_by("created_at").values_list("follower_id", flat=True)
    return [str(r) for r in rows]


async def following_of(user_id) -> List[str]:
    """IDs of users `user_id` follows."""
    rows = await Follow.filter(follower_id=user_id).order_by("created_at").values_list("followee_id", flat=True)
    return [str(r) for r in rows]


async def follow_counts(user_id) -> Tuple[int, int]:
    """(followers, following) counts for a user."""
    followers = await Follow.filter(followee_id=user_id).count()
    following = await Follow.filter(follower_id=user_id).count()
    return followers, following


async def _candidate_id_at(actor_id, position: int):
    """ID of the user at `position` in id order, skipping `actor_id`. None past the end."""
    rows = await User.exclude(id=actor_id).order_by("id").offset(position).limit(1).values_list("id", flat=True)
    return rows[0] if rows else None


class SocialGraph:
    """
    Mutates and queries the follow graph.

    Parameters:
    - notifications: sink receiving "follow" events
    - rng: random source for suggestions (inject a seeded Random in tests)
    """

    def __init__(self, notifications: NotificationSink, rng: Optional[random.Random] = None):
        self.notifications = notifications
        self._rng = rng or random.SystemRandom()

    async def _get_user(self, user_id) -> User:
        user = await User.get_or_none(id=_parse_id(user_id))
        if user is None:
            raise NotFound()
        return user

    async def toggle_follow(self, actor_id, target_id) -> FollowResult:
        """
        Follow `target_id` if the actor does not follow them yet, otherwise unfollow.

        Raises:
        - NotFound: actor or target does not exist
        - SelfFollowRejected: actor_id == target_id (nothing is written)
        """
        actor = await self._get_user(actor_id)
        target = await self._get_user(target_id)
        if actor.id == target.id:
            raise SelfFollowRejected()

        created = False
        if await _edge(actor.id, target.id).exists():
            removed = await _edge(actor.id, target.id).delete()
            if not removed:
                logger.info("[graph] %s -> %s already unfollowed by a concurrent request", actor.id, target.id)
            is_following = False
        else:
            try:
                await Follow.create(follower_id=actor.id, followee_id=target.id)
                created = True
            except IntegrityError:
                # Unique (follower, followee) violated: a concurrent follow won.
                if not await _edge(actor.id, target.id).exists():
                    if not await User.filter(id=target.id).exists():
                        raise NotFound()
                    raise
                logger.info("[graph] %s -> %s already followed by a concurrent request", actor.id, target.id)
            is_following = True

        followers_count = await Follow.filter(followee_id=target.id).count()
        following_count = await Follow.filter(follower_id=actor.id).count()

        if created:
            await self.notifications.emit(actor.id, target.id, NotificationType.FOLLOW)

        logger.info(
            "[graph] %s %s %s (followers=%d following=%d)",
            actor.username, "followed" if is_following else "unfollowed",
            target.username, followers_count, following_count,
        )
        return FollowResult(
            is_following=is_following,
            followers_count=followers_count,
            following_count=following_count,
            target_username=target.username,
        )

    async def suggest(self, actor_id, pool_size: int = 10, result_size: int = 4) -> List[User]:
        """
        Who-to-follow suggestions.

        Samples up to `pool_size` positions uniformly at random among the other
        users and looks each one up individually, so only the pool is loaded. Then it
        drops the ones the actor already follows, and returns at most
        `result_size` of the rest in sample order. May return fewer.
        """
        actor = await self._get_user(actor_id)
        total = await User.exclude(id=actor.id).count()
        positions = self._rng.sample(range(total), min(pool_size, total))
        pool = []
        for position in positions:
            uid = await _candidate_id_at(actor.id, position)
            # Rows deleted since the count shift positions off the end.
            if uid is not None and uid not in pool:
                pool.append(uid)

        already_following = set(await following_of(actor.id))
        picked = [uid for uid in pool if str(uid) not in already_following][:result_size]
        if not picked:
            return []

        by_id = {str(u.id): u for u in await User.filter(id__in=picked)}
        return [by_id[str(uid)] for uid in picked if str(uid) in by_id]
