from typing import Any

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import get_current_principal
from app.modules.auth.schemas.auth import Principal
from app.modules.posts.comments.schemas.comment import (
    CommentCreate, CommentDeleteResponse, CommentList, CommentResponse
)
from app.modules.posts.comments.services.comment import add_comment, list_comments, remove_comment
from app.modules.posts.services.post import serialize_comment
from app.modules.user_management.services.user import get_author_summaries

router = APIRouter()

@router.get("", response_model=CommentList)
def read_comments(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to get comments for"),
) -> Any:
    """Get comments of a post in the order they were written"""
    comments = list_comments(db, post_id)
    authors = get_author_summaries(db, list({comment.author_id for comment in comments}))
    return CommentList(comments=[serialize_comment(comment, authors) for comment in comments])

@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def create_comment(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to comment on"),
    comment_in: CommentCreate,
    principal: Principal = Depends(get_current_principal),
) -> Any:
    """Create new comment on a post"""
    comment = add_comment(db, post_id, comment_in, principal)
    authors = get_author_summaries(db, [comment.author_id])
    return CommentResponse(message="Comment added successfully", comment=serialize_comment(comment, authors))

@router.delete("/{comment_id}", response_model=CommentDeleteResponse)
def delete_comment(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post"),
    comment_id: str = Path(..., description="The ID of the comment to delete"),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    """Delete a comment; allowed for the comment author and the post author"""
    comment_count = remove_comment(db, post_id, comment_id, principal)
    return CommentDeleteResponse(message="Comment deleted successfully", comment_count=comment_count)
