# services/catalog_service.py
from math import ceil
from typing import Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from models.videoModels import Video, PrivacySetting
from models.userModels import Users
from models.engagementModels import VideoLike
from schemas.auth.schemas import SessionUser
from schemas.videos import VideoSummary, VideoDetail, Pagination, VideoUploadForm
from services import engagement_service
from functions import VideoSaver
from functions.errors import NotFound, Forbidden, Unauthenticated
import logging

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 50


def check_visibility(privacy: PrivacySetting, creator_id: int,
                     viewer_id: Optional[int], follows_creator: bool) -> None:
    """
    Raise unless the viewer may see a video with this privacy setting.
    Subscriber-only videos are visible to their owner and the owner's followers.
    """
    if privacy != PrivacySetting.SUBSCRIBER_ONLY:
        return
    if viewer_id is None:
        raise Unauthenticated("Authentication required to view this video")
    if viewer_id != creator_id and not follows_creator:
        raise Forbidden("This video is only available to subscribers")


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def get_public_videos(db: Session, viewer: Optional[SessionUser], page: int = 1,
                      limit: int = DEFAULT_PAGE_SIZE, search: Optional[str] = None):
    """Public videos, newest first, optionally filtered by a search term."""
    page = max(page, 1)
    limit = min(max(limit, 1), MAX_PAGE_SIZE)

    query = (
        db.query(Video, Users.username, Users.display_name)
        .join(Users, Video.creator_id == Users.id)
        .filter(Video.privacy == PrivacySetting.PUBLIC)
    )

    if search and search.strip():
        pattern = f"%{_escape_like(search.strip())}%"
        query = query.filter(
            or_(
                Video.title.ilike(pattern, escape="\\"),
                Video.description.ilike(pattern, escape="\\"),
                Users.username.ilike(pattern, escape="\\"),
            )
        )

    total = query.count()
    rows = (
        query.order_by(Video.upload_date.desc(), Video.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    liked_ids = set()
    if viewer and rows:
        liked_ids = {
            video_id for (video_id,) in db.query(VideoLike.video_id).filter(
                VideoLike.user_id == viewer.id,
                VideoLike.video_id.in_([video.id for video, _, _ in rows]),
            )
        }

    videos = [
        VideoSummary(
            id=video.id,
            title=video.title,
            description=video.description,
            filename=video.filename,
            upload_date=video.upload_date,
            view_count=video.view_count,
            like_count=video.like_count,
            tags=video.tags,
            creator_id=video.creator_id,
            creator_username=username,
            creator_name=display_name,
            user_liked=(video.id in liked_ids) if viewer else None,
        )
        for video, username, display_name in rows
    ]

    return {
        "videos": videos,
        "pagination": Pagination(page=page, limit=limit, total=total,
                                 total_pages=ceil(total / limit) if total else 0),
    }


def get_video(db: Session, viewer: Optional[SessionUser], video_id: int) -> VideoDetail:
    row = (
        db.query(Video, Users.username, Users.display_name)
        .join(Users, Video.creator_id == Users.id)
        .filter(Video.id == video_id)
        .first()
    )
    if not row:
        raise NotFound("Video not found")
    video, username, display_name = row

    viewer_id = viewer.id if viewer else None
    follows_creator = bool(viewer) and engagement_service.is_following(db, viewer.id, video.creator_id)
    check_visibility(video.privacy, video.creator_id, viewer_id, follows_creator)

    # the owner watching their own video does not count as a view
    if viewer_id != video.creator_id:
        db.query(Video).filter(Video.id == video_id).update(
            {Video.view_count: Video.view_count + 1}, synchronize_session=False
        )
        db.commit()
        db.refresh(video)

    return VideoDetail(
        id=video.id,
        title=video.title,
        description=video.description,
        filename=video.filename,
        file_size=video.file_size,
        privacy=video.privacy,
        upload_date=video.upload_date,
        view_count=video.view_count,
        like_count=video.like_count,
        tags=video.tags,
        creator_id=video.creator_id,
        creator_username=username,
        creator_name=display_name,
        creator_followers=engagement_service.count_followers(db, video.creator_id),
        user_liked=engagement_service.user_liked(db, viewer.id, video.id) if viewer else None,
        user_following=follows_creator if viewer else None,
    )


def list_my_videos(db: Session, creator: SessionUser):
    return (
        db.query(Video)
        .filter(Video.creator_id == creator.id)
        .order_by(Video.upload_date.desc(), Video.id.desc())
        .all()
    )


def upload_video(db: Session, creator: SessionUser, fileobj, original_name: str,
                 content_type: str, form: VideoUploadForm) -> Video:
    filename, size = VideoSaver.save_video(fileobj, original_name, content_type)

    video = Video(
        creator_id=creator.id,
        title=form.title,
        description=form.description,
        filename=filename,
        file_size=size,
        privacy=form.privacy,
        tags=form.tags,
    )
    try:
        db.add(video)
        db.commit()
    except Exception:
        db.rollback()
        VideoSaver.delete_video_file(filename)
        raise
    db.refresh(video)

    logger.info("Creator %s uploaded video %s (%s bytes)", creator.id, video.id, size)
    return video


def delete_video(db: Session, user: SessionUser, video_id: int) -> None:
    video = db.query(Video).filter(Video.id == video_id).first()
    if not video:
        raise NotFound("Video not found")
    if video.creator_id != user.id:
        raise Forbidden("Not authorized to delete this video")

    filename = video.filename
    db.query(VideoLike).filter(VideoLike.video_id == video_id).delete(synchronize_session=False)
    db.delete(video)
    db.commit()

    VideoSaver.delete_video_file(filename)
    logger.info("Creator %s deleted video %s", user.id, video_id)
