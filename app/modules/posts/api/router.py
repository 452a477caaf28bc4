from typing import Any, Optional
import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.errors import BadRequestError
from app.db.session import get_db
from app.deps import get_current_principal
from app.modules.auth.schemas.auth import Principal
from app.modules.posts.schemas.post import (
    PostCreate, PostDeleteResponse, PostList, PostMutationResponse, PostPage,
    PostResponse, PostUpdate, TrendingPostList,
)
from app.modules.posts.services.post import (
    create_post, get_visible_post, serialize_posts, serialize_single, soft_delete_post, update_post
)
from app.modules.posts.services.ranking import (
    DEFAULT_TIMEFRAME, PostFilter, get_trending_posts, list_posts, search_posts
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="")

MAX_PAGE_SIZE = 100

@router.get("", response_model=PostPage)
def read_posts(
    db: Session = Depends(get_db),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
    category: Optional[str] = None,
    author: Optional[str] = None,
    search: Optional[str] = None,
) -> Any:
    """
    Retrieve visible posts, newest first.
    """
    post_filter = PostFilter(category=category, author=author, search=(search or "").strip() or None)
    posts, pagination = list_posts(db, post_filter, page=page, limit=limit)
    return PostPage(posts=serialize_posts(db, posts), pagination=pagination)

@router.get("/trending", response_model=TrendingPostList)
def read_trending_posts(
    db: Session = Depends(get_db),
    limit: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
    timeframe: str = DEFAULT_TIMEFRAME,
) -> Any:
    """
    Posts from the last day, week or month ranked by engagement.
    Unknown timeframes use the weekly window.
    """
    return TrendingPostList(posts=get_trending_posts(db, limit=limit, timeframe=timeframe))

@router.get("/search", response_model=PostList)
def search(
    db: Session = Depends(get_db),
    q: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
    category: Optional[str] = None,
    author: Optional[str] = None,
) -> Any:
    """
    Case-insensitive substring search over title, content and tags.
    """
    if not q or not q.strip():
        raise BadRequestError("Search query is required")
    posts = search_posts(db, q.strip(), PostFilter(category=category, author=author), page=page, limit=limit)
    return PostList(posts=serialize_posts(db, posts))

@router.get("/user/{user_id}", response_model=PostPage)
def read_user_posts(
    *,
    db: Session = Depends(get_db),
    user_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
) -> Any:
    """
    Get the visible posts of one author.
    """
    posts, pagination = list_posts(db, PostFilter(author_id=user_id), page=page, limit=limit)
    return PostPage(posts=serialize_posts(db, posts), pagination=pagination)

@router.get("/{post_id}", response_model=PostResponse)
def read_post_by_id(
    *,
    db: Session = Depends(get_db),
    post_id: str,
) -> Any:
    """
    Get post by ID.
    """
    post = get_visible_post(db, post_id)
    return PostResponse(post=serialize_single(db, post))

@router.post("", response_model=PostMutationResponse, status_code=status.HTTP_201_CREATED)
def create_new_post(
    *,
    db: Session = Depends(get_db),
    post_in: PostCreate,
    principal: Principal = Depends(get_current_principal),
) -> Any:
    """
    Create new post. The image may be a URL or inline base64 image data.
    """
    post = create_post(db, post_in, principal)
    return PostMutationResponse(message="Post created successfully", post=serialize_single(db, post))

@router.put("/{post_id}", response_model=PostMutationResponse)
def update_post_by_id(
    *,
    db: Session = Depends(get_db),
    post_id: str,
    post_in: PostUpdate,
    principal: Principal = Depends(get_current_principal),
) -> Any:
    """
    Update a post.
    """
    post = update_post(db, post_id, post_in, principal)
    return PostMutationResponse(message="Post updated successfully", post=serialize_single(db, post))

@router.delete("/{post_id}", response_model=PostDeleteResponse)
def delete_post_by_id(
    *,
    db: Session = Depends(get_db),
    post_id: str,
    principal: Principal = Depends(get_current_principal),
) -> Any:
    """
    Soft delete a post. It disappears from every read path but the row stays.
    """
    post = soft_delete_post(db, post_id, principal)
    return PostDeleteResponse(message="Post deleted successfully", post_id=post.id)
