from typing import List, Tuple
import logging

from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import BadRequestError
from app.modules.follows.models.follow import Follow
from app.modules.user_management.models.user import User
from app.modules.user_management.services.user import get_user_or_404, get_users_by_ids

logger = logging.getLogger(__name__)

def _remove_edge(db: Session, follower_id: str, followee_id: str) -> int:
    return db.query(Follow).filter(
        Follow.follower_id == follower_id,
        Follow.followee_id == followee_id,
    ).delete(synchronize_session=False)

def toggle_follow(db: Session, follower_id: str, followee_id: str) -> Tuple[User, bool]:
    """
    Follow ``followee_id`` if not yet followed, otherwise unfollow.
    Returns the follower and the new following state.
    """
    if follower_id == followee_id:
        raise BadRequestError("Cannot follow yourself")
    follower = get_user_or_404(db, follower_id)
    get_user_or_404(db, followee_id)

    if _remove_edge(db, follower_id, followee_id):
        following = False
    else:
        try:
            db.execute(insert(Follow).values(follower_id=follower_id, followee_id=followee_id))
            following = True
        except IntegrityError:
            # A concurrent request created the edge first; this toggle undoes it
            db.rollback()
            _remove_edge(db, follower_id, followee_id)
            following = False
    db.commit()
    db.refresh(follower)

    logger.info(f"User {follower_id} {'followed' if following else 'unfollowed'} {followee_id}")
    return follower, following

def get_followers(db: Session, user_id: str) -> List[User]:
    get_user_or_404(db, user_id)
    ids = [row[0] for row in db.query(Follow.follower_id).filter(Follow.followee_id == user_id).all()]
    return get_users_by_ids(db, ids)

def get_following(db: Session, user_id: str) -> List[User]:
    get_user_or_404(db, user_id)
    ids = [row[0] for row in db.query(Follow.followee_id).filter(Follow.follower_id == user_id).all()]
    return get_users_by_ids(db, ids)

def get_friends(db: Session, user_id: str) -> List[User]:
    """Users followed by ``user_id`` who follow back"""
    get_user_or_404(db, user_id)
    following = {row[0] for row in db.query(Follow.followee_id).filter(Follow.follower_id == user_id).all()}
    followers = {row[0] for row in db.query(Follow.follower_id).filter(Follow.followee_id == user_id).all()}
    return get_users_by_ids(db, following & followers)
