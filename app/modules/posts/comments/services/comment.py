from typing import List, Optional
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.errors import ForbiddenError, NotFoundError
from app.core.ids import new_id
from app.modules.auth.schemas.auth import Principal
from app.modules.posts.comments.models.comment import Comment
from app.modules.posts.comments.schemas.comment import CommentCreate
from app.modules.posts.services.post import get_visible_post

logger = logging.getLogger(__name__)

def get_comment(db: Session, post_id: str, comment_id: str) -> Optional[Comment]:
    """Get a comment by ID, only if it belongs to the post"""
    return (
        db.query(Comment)
        .filter(Comment.id == comment_id, Comment.post_id == post_id)
        .first()
    )

def count_comments(db: Session, post_id: str) -> int:
    return db.query(func.count(Comment.id)).filter(Comment.post_id == post_id).scalar() or 0

def list_comments(db: Session, post_id: str) -> List[Comment]:
    """Comments of a visible post, oldest first"""
    post = get_visible_post(db, post_id)
    return list(post.comments)

def add_comment(db: Session, post_id: str, comment_in: CommentCreate, principal: Principal) -> Comment:
    """Append a comment to a visible post"""
    post = get_visible_post(db, post_id)

    comment = Comment(
        id=new_id(),
        post_id=post.id,
        content=comment_in.content,
        author=principal.name,
        author_id=principal.id,
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)

    logger.info(f"User {principal.id} commented on post {post.id}")
    return comment

def remove_comment(db: Session, post_id: str, comment_id: str, principal: Principal) -> int:
    """
    Delete a comment. The comment author and the post author may both do this.
    Returns the post's comment count after removal.
    """
    post = get_visible_post(db, post_id)
    comment = get_comment(db, post.id, comment_id)
    if not comment:
        raise NotFoundError("Comment")

    if principal.id not in (comment.author_id, post.author_id):
        raise ForbiddenError("Forbidden: You can only delete your own comments or comments on your posts")

    db.delete(comment)
    db.commit()

    logger.info(f"User {principal.id} deleted comment {comment_id} from post {post.id}")
    return count_comments(db, post.id)
