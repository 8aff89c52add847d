# routes/videos.py
from fastapi import APIRouter, UploadFile, File, Form, Query, status
from typing import Optional
from db.connection import db_dependency
from db.VerifyToken import optional_user_dependency, creator_dependency
from models.videoModels import PrivacySetting
from schemas.schemas import MessageResponse
from schemas.videos import (
    VideoListResponse, VideoDetailResponse, MyVideosResponse,
    UploadResponse, VideoUploadForm
)
from services import catalog_service

router = APIRouter(prefix="/videos", tags=["Videos"])


@router.get("", response_model=VideoListResponse)
def list_public_videos(
    db: db_dependency,
    viewer: optional_user_dependency,
    page: int = Query(1, ge=1),
    limit: int = Query(catalog_service.DEFAULT_PAGE_SIZE, ge=1, le=catalog_service.MAX_PAGE_SIZE),
    search: Optional[str] = Query(None, max_length=200),
):
    """Public videos, newest first. `search` matches title, description or creator username."""
    return catalog_service.get_public_videos(db, viewer, page=page, limit=limit, search=search)


@router.get("/my", response_model=MyVideosResponse)
def list_my_videos(db: db_dependency, creator: creator_dependency):
    return {"videos": catalog_service.list_my_videos(db, creator)}


@router.get("/{video_id}", response_model=VideoDetailResponse)
def get_video(video_id: int, db: db_dependency, viewer: optional_user_dependency):
    return {"video": catalog_service.get_video(db, viewer, video_id)}


@router.post("", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
def upload_video(
    db: db_dependency,
    creator: creator_dependency,
    video: UploadFile = File(...),
    title: str = Form(..., min_length=1, max_length=200),
    description: Optional[str] = Form(None, max_length=2000),
    privacy: PrivacySetting = Form(PrivacySetting.PUBLIC),
    tags: Optional[str] = Form(None, max_length=500),
):
    form = VideoUploadForm(
        title=title.strip(),
        description=description.strip() if description else None,
        privacy=privacy,
        tags=tags.strip() if tags else None,
    )
    new_video = catalog_service.upload_video(
        db, creator, video.file, video.filename, video.content_type, form
    )
    return {
        "message": "Video uploaded successfully",
        "video_id": new_video.id,
        "video": new_video,
    }


@router.delete("/{video_id}", response_model=MessageResponse)
def delete_video(video_id: int, db: db_dependency, creator: creator_dependency):
    catalog_service.delete_video(db, creator, video_id)
    return {"message": "Video deleted successfully"}
