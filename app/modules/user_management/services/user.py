from typing import Dict, Iterable, List, Optional
import logging

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.db.filters import contains
from app.modules.auth.schemas.auth import TokenPayload
from app.modules.follows.models.follow import Follow
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import AuthorSummary, UserProfile, UserUpdate

logger = logging.getLogger("app")

def get_user(db: Session, user_id: str) -> Optional[User]:
    """Get user by ID"""
    return db.query(User).filter(User.id == user_id).first()

def get_user_or_404(db: Session, user_id: str) -> User:
    user = get_user(db, user_id)
    if not user:
        raise NotFoundError("User")
    return user

def get_or_create_user(db: Session, token_data: TokenPayload) -> Optional[User]:
    """Resolve the user behind a token, provisioning it on first sight"""
    user = get_user(db, token_data.sub)
    if user:
        return user
    if not token_data.name:
        return None

    logger.info(f"Provisioning user {token_data.sub} from token claims")
    user = User(
        id=token_data.sub,
        name=token_data.name,
        email=token_data.email,
        avatar=token_data.picture,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a first-login race for this id, or the email belongs to another user
        db.rollback()
        logger.warning(f"Could not provision user {token_data.sub}, re-reading")
        return get_user(db, token_data.sub)
    db.refresh(user)
    return user

def get_users_by_ids(db: Session, user_ids: Iterable[str]) -> List[User]:
    ids = list(set(user_ids))
    if not ids:
        return []
    return db.query(User).filter(User.id.in_(ids)).order_by(User.name).all()

def get_author_summaries(db: Session, user_ids: Iterable[str]) -> Dict[str, AuthorSummary]:
    """Map user ids to their public summary; ids with no user are left out"""
    return {
        user.id: AuthorSummary(id=user.id, name=user.name, avatar=user.avatar)
        for user in get_users_by_ids(db, user_ids)
    }

def build_profile(db: Session, user: User) -> UserProfile:
    follower_count = db.query(func.count(Follow.follower_id)).filter(Follow.followee_id == user.id).scalar() or 0
    following_count = db.query(func.count(Follow.followee_id)).filter(Follow.follower_id == user.id).scalar() or 0
    return UserProfile(
        id=user.id,
        email=user.email,
        name=user.name,
        avatar=user.avatar,
        bio=user.bio,
        created_at=user.created_at,
        updated_at=user.updated_at,
        follower_count=follower_count,
        following_count=following_count,
    )

def update_user(db: Session, user_id: str, user_in: UserUpdate) -> User:
    """Update profile fields; empty values leave the field unchanged"""
    db_user = get_user_or_404(db, user_id)

    update_data = {
        field: value
        for field, value in user_in.model_dump(exclude_unset=True).items()
        if value
    }
    for field, value in update_data.items():
        setattr(db_user, field, value)

    db.commit()
    db.refresh(db_user)
    logger.info(f"Updated profile of user {user_id}: {sorted(update_data)}")
    return db_user

def search_users(db: Session, q: str, limit: int = 10) -> List[User]:
    """Users whose name or email contains ``q``"""
    term = q.strip()
    return (
        db.query(User)
        .filter(or_(contains(User.name, term), contains(User.email, term)))
        .order_by(User.name)
        .limit(limit)
        .all()
    )
