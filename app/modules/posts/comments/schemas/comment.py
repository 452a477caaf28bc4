from typing import Annotated, List, Optional
from datetime import datetime

from pydantic import StringConstraints

from app.core.schemas import APIModel
from app.modules.user_management.schemas.user import AuthorSummary

class CommentCreate(APIModel):
    content: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=1000)]

class Comment(APIModel):
    """Comment model returned to client"""
    id: str
    content: str
    author: str
    author_id: str
    author_profile: Optional[AuthorSummary] = None
    created_at: datetime

class CommentResponse(APIModel):
    message: str
    comment: Comment

class CommentList(APIModel):
    comments: List[Comment]

class CommentDeleteResponse(APIModel):
    message: str
    comment_count: int
