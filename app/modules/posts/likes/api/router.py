from typing import Any

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import get_current_principal
from app.modules.auth.schemas.auth import Principal
from app.modules.posts.likes.schemas.like import LikeResult
from app.modules.posts.likes.services.like import toggle_like, unlike

router = APIRouter()

@router.post("", response_model=LikeResult)
def toggle_post_like(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to like or unlike"),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    """Like the post, or remove the like if already given"""
    liked, like_count = toggle_like(db, post_id, principal)
    return LikeResult(
        message="Post liked" if liked else "Post unliked",
        liked=liked,
        like_count=like_count,
    )

@router.delete("", response_model=LikeResult)
def remove_post_like(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to unlike"),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    """Remove the caller's like; a no-op when there is none"""
    like_count = unlike(db, post_id, principal)
    return LikeResult(message="Post unliked", liked=False, like_count=like_count)
