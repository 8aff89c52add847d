from pydantic import Field
from typing import List, Optional
from datetime import datetime
from models.videoModels import PrivacySetting
from schemas.schemas import CamelModel


class VideoSummary(CamelModel):
    """Row of the public listing."""
    id: int
    title: str
    description: Optional[str] = None
    filename: str
    upload_date: datetime
    view_count: int
    like_count: int
    tags: Optional[str] = None
    creator_id: int
    creator_username: str
    creator_name: Optional[str] = None
    # only present for authenticated requests
    user_liked: Optional[bool] = None


class VideoDetail(VideoSummary):
    privacy: PrivacySetting
    file_size: Optional[int] = None
    creator_followers: int = 0
    user_following: Optional[bool] = None


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class VideoListResponse(CamelModel):
    videos: List[VideoSummary]
    pagination: Pagination


class VideoDetailResponse(CamelModel):
    video: VideoDetail


class MyVideo(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    filename: str
    privacy: PrivacySetting
    upload_date: datetime
    view_count: int
    like_count: int


class MyVideosResponse(CamelModel):
    videos: List[MyVideo]


class UploadedVideo(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    filename: str
    privacy: PrivacySetting
    tags: Optional[str] = None
    upload_date: datetime


class UploadResponse(CamelModel):
    message: str
    video_id: int
    video: UploadedVideo


class VideoUploadForm(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    privacy: PrivacySetting = PrivacySetting.PUBLIC
    tags: Optional[str] = Field(None, max_length=500)
