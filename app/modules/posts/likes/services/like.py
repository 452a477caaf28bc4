from typing import Tuple
import logging

from sqlalchemy import func, insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.modules.auth.schemas.auth import Principal
from app.modules.posts.likes.models.like import PostLike
from app.modules.posts.services.post import get_visible_post

logger = logging.getLogger(__name__)

def count_likes(db: Session, post_id: str) -> int:
    return db.query(func.count(PostLike.user_id)).filter(PostLike.post_id == post_id).scalar() or 0

def _remove_like(db: Session, post_id: str, user_id: str) -> int:
    return db.query(PostLike).filter(
        PostLike.post_id == post_id,
        PostLike.user_id == user_id,
    ).delete(synchronize_session=False)

def _insert_like(db: Session, post_id: str, user_id: str) -> None:
    db.execute(insert(PostLike).values(post_id=post_id, user_id=user_id))

def toggle_like(db: Session, post_id: str, principal: Principal) -> Tuple[bool, int]:
    """
    Flip the caller's like on a visible post.

    Each branch is a single conditional statement, so two concurrent toggles
    by the same user can never leave a duplicate like behind. Returns the new
    liked state and the like count read back after the write.
    """
    post = get_visible_post(db, post_id)

    if _remove_like(db, post.id, principal.id):
        liked = False
    else:
        try:
            _insert_like(db, post.id, principal.id)
            liked = True
        except IntegrityError:
            # Another request inserted the same like first; this toggle undoes it
            db.rollback()
            _remove_like(db, post.id, principal.id)
            liked = False
    db.commit()

    like_count = count_likes(db, post.id)
    logger.info(f"User {principal.id} {'liked' if liked else 'unliked'} post {post.id} ({like_count} likes)")
    return liked, like_count

def unlike(db: Session, post_id: str, principal: Principal) -> int:
    """Remove the caller's like if present; returns the like count"""
    post = get_visible_post(db, post_id)
    removed = _remove_like(db, post.id, principal.id)
    db.commit()
    if not removed:
        logger.info(f"User {principal.id} had not liked post {post.id}")
    return count_likes(db, post.id)
