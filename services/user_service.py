# services/user_service.py
from datetime import datetime
from sqlalchemy import func
from sqlalchemy.orm import Session
from models.userModels import Users
from models.videoModels import Video, PrivacySetting
from schemas.auth.schemas import SessionUser
from schemas.auth.returnLoginSchema import ProfileUser
from schemas.users import PublicProfile, UpdateProfileRequest
from services import engagement_service
from functions.errors import NotFound, Forbidden
import logging

logger = logging.getLogger(__name__)


def get_user_or_404(db: Session, user_id: int) -> Users:
    user = db.query(Users).filter(Users.id == user_id).first()
    if not user:
        raise NotFound("User not found")
    return user


def get_own_profile(db: Session, current_user: SessionUser) -> ProfileUser:
    user = get_user_or_404(db, current_user.id)
    video_count = db.query(func.count(Video.id)).filter(Video.creator_id == user.id).scalar() or 0
    return ProfileUser(
        id=user.id,
        username=user.username,
        email=user.email,
        role=user.role,
        display_name=user.display_name,
        bio=user.bio,
        profile_image=user.profile_image,
        created_at=user.created_at,
        follower_count=engagement_service.count_followers(db, user.id),
        video_count=video_count,
    )


def get_public_profile(db: Session, user_id: int) -> PublicProfile:
    user = get_user_or_404(db, user_id)
    video_count = db.query(func.count(Video.id)).filter(
        Video.creator_id == user.id, Video.privacy == PrivacySetting.PUBLIC
    ).scalar() or 0
    return PublicProfile(
        id=user.id,
        username=user.username,
        display_name=user.display_name,
        bio=user.bio,
        role=user.role,
        join_date=user.created_at,
        video_count=video_count,
        subscriber_count=engagement_service.count_followers(db, user.id),
    )


def require_self(current_user: SessionUser, user_id: int) -> None:
    if current_user.id != user_id:
        raise Forbidden("Access denied")


def update_profile(db: Session, current_user: SessionUser, user_id: int,
                   changes: UpdateProfileRequest) -> Users:
    require_self(current_user, user_id)
    user = get_user_or_404(db, user_id)

    # Only fields the client actually sent are touched; a blank value keeps the old one
    for field, value in changes.model_dump(exclude_unset=True, exclude_none=True).items():
        if value.strip():
            setattr(user, field, value)
    user.updated_at = datetime.utcnow()

    db.commit()
    db.refresh(user)
    logger.info("User %s updated profile", user.id)
    return user
