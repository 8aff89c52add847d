# routes/users.py
from fastapi import APIRouter
from db.connection import db_dependency
from db.VerifyToken import user_dependency
from schemas.users import (
    PublicProfile, UpdateProfileRequest, UpdateProfileResponse,
    SubscribeResponse, SubscriptionsResponse, SubscribersResponse
)
from services import engagement_service, user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/{user_id}", response_model=PublicProfile)
def get_user_profile(user_id: int, db: db_dependency):
    return user_service.get_public_profile(db, user_id)


@router.put("/{user_id}", response_model=UpdateProfileResponse)
def update_user_profile(user_id: int, changes: UpdateProfileRequest,
                        db: db_dependency, current_user: user_dependency):
    """
    Update display name and/or bio. Users may only edit their own profile.
    """
    user = user_service.update_profile(db, current_user, user_id, changes)
    return {"message": "Profile updated successfully", "user": user}


@router.post("/{creator_id}/subscribe", response_model=SubscribeResponse)
def subscribe(creator_id: int, db: db_dependency, current_user: user_dependency):
    # Subscribing is following under another name
    result = engagement_service.toggle_follow(db, current_user.id, creator_id)
    return SubscribeResponse(
        subscribed=result.following,
        message="Subscribed successfully" if result.following else "Unsubscribed successfully",
        subscriber_count=result.follower_count,
    )


@router.get("/{user_id}/subscriptions", response_model=SubscriptionsResponse)
def get_subscriptions(user_id: int, db: db_dependency, current_user: user_dependency):
    user_service.require_self(current_user, user_id)
    return {"subscriptions": engagement_service.list_subscriptions(db, user_id)}


@router.get("/{user_id}/subscribers", response_model=SubscribersResponse)
def get_subscribers(user_id: int, db: db_dependency, current_user: user_dependency):
    user_service.require_self(current_user, user_id)
    return {"subscribers": engagement_service.list_subscribers(db, user_id)}
