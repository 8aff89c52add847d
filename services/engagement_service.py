# services/engagement_service.py
"""
Likes and follows.

Both toggles run as one transaction: existence check, insert or delete,
recount from the join table, commit. Counts are always recomputed with
COUNT(*) rather than incremented, so a drifted counter heals on the next
toggle.
"""
from dataclasses import dataclass
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from models.engagementModels import VideoLike, Follow
from models.userModels import Users
from models.videoModels import Video, PrivacySetting
from functions.errors import NotFound, InvalidOperation
import logging

logger = logging.getLogger(__name__)


@dataclass
class LikeToggleResult:
    liked: bool
    like_count: int


@dataclass
class FollowToggleResult:
    following: bool
    follower_count: int


# ---------------- LIKES ----------------
def count_likes(db: Session, video_id: int) -> int:
    return db.query(func.count(VideoLike.id)).filter(VideoLike.video_id == video_id).scalar() or 0


def sync_like_count(db: Session, video_id: int) -> int:
    """Recompute like_count from video_likes and store it. Does not commit."""
    like_count = count_likes(db, video_id)
    db.query(Video).filter(Video.id == video_id).update(
        {Video.like_count: like_count}, synchronize_session=False
    )
    return like_count


def insert_like(db: Session, user_id: int, video_id: int) -> bool:
    """
    Insert the (user, video) like row.
    Returns False when the unique constraint says it already exists; the
    transaction is rolled back in that case and the caller starts a new one.
    """
    db.add(VideoLike(user_id=user_id, video_id=video_id))
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        logger.debug("Like user=%s video=%s already recorded", user_id, video_id)
        return False
    return True


def toggle_like(db: Session, user_id: int, video_id: int) -> LikeToggleResult:
    video_exists = db.query(Video.id).filter(Video.id == video_id).first()
    if not video_exists:
        raise NotFound("Video not found")

    existing = db.query(VideoLike.id).filter(
        VideoLike.user_id == user_id, VideoLike.video_id == video_id
    ).first()

    if existing:
        # bulk delete: a concurrent unlike that got here first leaves 0 rows, not an error
        db.query(VideoLike).filter(
            VideoLike.user_id == user_id, VideoLike.video_id == video_id
        ).delete(synchronize_session=False)
        liked = False
    else:
        insert_like(db, user_id, video_id)
        # either we inserted it or a duplicate request did
        liked = True

    like_count = sync_like_count(db, video_id)
    db.commit()

    logger.info("User %s %s video %s (likes=%s)", user_id, "liked" if liked else "unliked", video_id, like_count)
    return LikeToggleResult(liked=liked, like_count=like_count)


def user_liked(db: Session, user_id: int, video_id: int) -> bool:
    return db.query(VideoLike.id).filter(
        VideoLike.user_id == user_id, VideoLike.video_id == video_id
    ).first() is not None


# ---------------- FOLLOWS ----------------
def count_followers(db: Session, user_id: int) -> int:
    return db.query(func.count(Follow.id)).filter(Follow.following_id == user_id).scalar() or 0


def is_following(db: Session, follower_id: int, following_id: int) -> bool:
    return db.query(Follow.id).filter(
        Follow.follower_id == follower_id, Follow.following_id == following_id
    ).first() is not None


def insert_follow(db: Session, follower_id: int, following_id: int) -> bool:
    """Insert the follow row; False if it already exists (transaction rolled back)."""
    db.add(Follow(follower_id=follower_id, following_id=following_id))
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        logger.debug("Follow %s -> %s already recorded", follower_id, following_id)
        return False
    return True


def toggle_follow(db: Session, follower_id: int, following_id: int) -> FollowToggleResult:
    if follower_id == following_id:
        raise InvalidOperation("Cannot follow yourself")

    target = db.query(Users.id).filter(Users.id == following_id).first()
    if not target:
        raise NotFound("User not found")

    if is_following(db, follower_id, following_id):
        db.query(Follow).filter(
            Follow.follower_id == follower_id, Follow.following_id == following_id
        ).delete(synchronize_session=False)
        following = False
    else:
        insert_follow(db, follower_id, following_id)
        following = True

    follower_count = count_followers(db, following_id)
    db.commit()

    logger.info("User %s %s user %s (followers=%s)", follower_id,
                "followed" if following else "unfollowed", following_id, follower_count)
    return FollowToggleResult(following=following, follower_count=follower_count)


def list_following(db: Session, user_id: int):
    """Users that user_id follows, most recent follow first."""
    rows = (
        db.query(Users, Follow.created_at)
        .join(Follow, Follow.following_id == Users.id)
        .filter(Follow.follower_id == user_id)
        .order_by(Follow.created_at.desc(), Follow.id.desc())
        .all()
    )
    return [
        {
            "id": user.id,
            "username": user.username,
            "display_name": user.display_name,
            "profile_image": user.profile_image,
            "followed_at": followed_at,
        }
        for user, followed_at in rows
    ]


def list_subscriptions(db: Session, user_id: int):
    """Creators user_id follows, with each creator's count of public videos."""
    public_counts = (
        select(Video.creator_id, func.count(Video.id).label("video_count"))
        .where(Video.privacy == PrivacySetting.PUBLIC)
        .group_by(Video.creator_id)
        .subquery()
    )
    rows = (
        db.query(Users, Follow.created_at, public_counts.c.video_count)
        .join(Follow, Follow.following_id == Users.id)
        .outerjoin(public_counts, public_counts.c.creator_id == Users.id)
        .filter(Follow.follower_id == user_id)
        .order_by(Follow.created_at.desc(), Follow.id.desc())
        .all()
    )
    return [
        {
            "id": user.id,
            "username": user.username,
            "display_name": user.display_name,
            "profile_image": user.profile_image,
            "subscribed_at": subscribed_at,
            "video_count": video_count or 0,
        }
        for user, subscribed_at, video_count in rows
    ]


def list_subscribers(db: Session, user_id: int):
    """Users following user_id, most recent first."""
    rows = (
        db.query(Users, Follow.created_at)
        .join(Follow, Follow.follower_id == Users.id)
        .filter(Follow.following_id == user_id)
        .order_by(Follow.created_at.desc(), Follow.id.desc())
        .all()
    )
    return [
        {
            "id": user.id,
            "username": user.username,
            "display_name": user.display_name,
            "profile_image": user.profile_image,
            "subscribed_at": subscribed_at,
        }
        for user, subscribed_at in rows
    ]
