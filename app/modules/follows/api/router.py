from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import get_current_user
from app.modules.follows.schemas.follow import FollowResult
from app.modules.follows.services.follow import get_followers, get_following, get_friends, toggle_follow
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import UserListResponse
from app.modules.user_management.services.user import build_profile

router = APIRouter()

@router.put("/{user_id}/follow", response_model=FollowResult)
def follow_user(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Follow a user, or unfollow if already following"""
    follower, following = toggle_follow(db, current_user.id, user_id)
    return FollowResult(user=build_profile(db, follower), is_following=following)

@router.get("/{user_id}/followers", response_model=UserListResponse)
def read_followers(user_id: str, db: Session = Depends(get_db)) -> Any:
    return UserListResponse(users=get_followers(db, user_id))

@router.get("/{user_id}/following", response_model=UserListResponse)
def read_following(user_id: str, db: Session = Depends(get_db)) -> Any:
    return UserListResponse(users=get_following(db, user_id))

@router.get("/{user_id}/friends", response_model=UserListResponse)
def read_friends(user_id: str, db: Session = Depends(get_db)) -> Any:
    """Users who follow each other with ``user_id``"""
    return UserListResponse(users=get_friends(db, user_id))
