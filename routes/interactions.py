# routes/interactions.py
from fastapi import APIRouter
from db.connection import db_dependency
from db.VerifyToken import user_dependency
from schemas.interactions import LikeToggleResponse, FollowToggleResponse, FollowingResponse
from services import engagement_service

router = APIRouter(prefix="/interactions", tags=["Interactions"])


@router.post("/like/{video_id}", response_model=LikeToggleResponse)
def toggle_like(video_id: int, db: db_dependency, user: user_dependency):
    """Like the video, or remove the like if it is already there."""
    result = engagement_service.toggle_like(db, user.id, video_id)
    return LikeToggleResponse(liked=result.liked, like_count=result.like_count)


@router.post("/follow/{user_id}", response_model=FollowToggleResponse)
def toggle_follow(user_id: int, db: db_dependency, user: user_dependency):
    """Follow the user, or unfollow if already following."""
    result = engagement_service.toggle_follow(db, user.id, user_id)
    return FollowToggleResponse(following=result.following, follower_count=result.follower_count)


@router.get("/following", response_model=FollowingResponse)
def get_following(db: db_dependency, user: user_dependency):
    return {"following": engagement_service.list_following(db, user.id)}
