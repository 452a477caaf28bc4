from typing import Dict, Iterable, List, Optional
import logging

from sqlalchemy.orm import Session

from app.core.errors import ForbiddenError, MediaUploadError, NotFoundError
from app.core.ids import ensure_valid_id, new_id
from app.core.storage import media_storage
from app.modules.auth.schemas.auth import Principal
from app.modules.posts.comments.schemas.comment import Comment as CommentSchema
from app.modules.posts.models.post import Post, PostTag
from app.modules.posts.schemas.post import Post as PostSchema, PostCreate, PostUpdate
from app.modules.user_management.schemas.user import AuthorSummary
from app.modules.user_management.services.user import get_author_summaries

logger = logging.getLogger(__name__)

RECIPE_TYPE_CATEGORIES = ("recipe", "technique")

def visible(query):
    """Restrict a Post query to what readers may see"""
    return query.filter(Post.is_published.is_(True), Post.is_deleted.is_(False))

def get_visible_post(db: Session, post_id: str) -> Post:
    """Get a published, non-deleted post or raise NotFoundError"""
    post_id = ensure_valid_id(post_id)
    post = visible(db.query(Post).filter(Post.id == post_id)).first()
    if not post:
        raise NotFoundError("Post")
    return post

def get_live_post(db: Session, post_id: str) -> Post:
    """Get a non-deleted post regardless of publication state"""
    post_id = ensure_valid_id(post_id)
    post = db.query(Post).filter(Post.id == post_id, Post.is_deleted.is_(False)).first()
    if not post:
        raise NotFoundError("Post")
    return post

def ensure_owner(post: Post, principal: Principal, action: str) -> None:
    if post.author_id != principal.id:
        raise ForbiddenError(f"Forbidden: You can only {action} your own posts")

def default_type(category: str) -> str:
    return "recipe" if category in RECIPE_TYPE_CATEGORIES else "story"

def resolve_image(image: Optional[str], current: Optional[str] = None) -> Optional[str]:
    """
    Turn the image field of a draft into a stored URL.

    Inline data is uploaded first. When that upload fails the request still
    succeeds: a new post gets no image and an updated post keeps ``current``,
    its previous image, rather than clearing it or reporting the error.
    """
    if not image:
        return current
    if image.startswith("data:image"):
        try:
            return media_storage.upload_data_url(image, prefix="posts")
        except MediaUploadError as e:
            logger.warning(f"Image upload failed, keeping previous image: {e.message}")
            return current
    if image.startswith(("http://", "https://")):
        return image
    logger.warning("Ignoring image value that is neither a URL nor inline image data")
    return current

def _tag_rows(tags: Iterable[str]) -> List[PostTag]:
    return [PostTag(position=position, name=name) for position, name in enumerate(tags)]

def create_post(db: Session, post_in: PostCreate, principal: Principal) -> Post:
    """Create new post"""
    logger.info(f"Creating post for author ID: {principal.id}")
    post = Post(
        id=new_id(),
        title=post_in.title,
        content=post_in.content,
        image=resolve_image(post_in.image),
        category=post_in.category,
        type=post_in.type or default_type(post_in.category),
        cuisine=post_in.cuisine,
        author=principal.name,
        author_id=principal.id,
    )
    post.tags = _tag_rows(post_in.tags)
    db.add(post)
    db.commit()
    db.refresh(post)
    return post

def update_post(db: Session, post_id: str, post_in: PostUpdate, principal: Principal) -> Post:
    """
    Update a post owned by the caller.
    Title, content, category and tags are replaced; image, cuisine and type
    keep their previous value when omitted.
    """
    post = get_live_post(db, post_id)
    ensure_owner(post, principal, "update")

    logger.info(f"Updating post with ID: {post.id}")
    post.title = post_in.title
    post.content = post_in.content
    post.category = post_in.category
    post.image = resolve_image(post_in.image, current=post.image)
    post.type = post_in.type or post.type
    post.cuisine = post_in.cuisine or post.cuisine
    post.tags = _tag_rows(post_in.tags)

    db.commit()
    db.refresh(post)
    return post

def soft_delete_post(db: Session, post_id: str, principal: Principal) -> Post:
    """Hide a post from every read path; the row is kept"""
    post = get_live_post(db, post_id)
    ensure_owner(post, principal, "delete")

    logger.info(f"Soft deleting post with ID: {post.id}")
    post.is_deleted = True
    db.commit()
    return post

def serialize_comment(comment, authors: Dict[str, AuthorSummary]) -> CommentSchema:
    return CommentSchema(
        id=comment.id,
        content=comment.content,
        author=comment.author,
        author_id=comment.author_id,
        author_profile=authors.get(comment.author_id),
        created_at=comment.created_at,
    )

def serialize_post(post: Post, authors: Dict[str, AuthorSummary], schema=PostSchema, **extra) -> PostSchema:
    """Create a post schema object from a post model"""
    return schema(
        id=post.id,
        title=post.title,
        content=post.content,
        image=post.image,
        tags=[tag.name for tag in post.tags],
        category=post.category,
        type=post.type,
        cuisine=post.cuisine,
        author=post.author,
        author_id=post.author_id,
        author_profile=authors.get(post.author_id),
        likes=[like.user_id for like in post.likes],
        like_count=len(post.likes),
        comments=[serialize_comment(comment, authors) for comment in post.comments],
        comment_count=len(post.comments),
        is_published=post.is_published,
        created_at=post.created_at,
        updated_at=post.updated_at,
        **extra,
    )

def collect_author_ids(posts: Iterable[Post]) -> List[str]:
    ids = set()
    for post in posts:
        ids.add(post.author_id)
        ids.update(comment.author_id for comment in post.comments)
    return list(ids)

def serialize_posts(db: Session, posts: List[Post]) -> List[PostSchema]:
    authors = get_author_summaries(db, collect_author_ids(posts))
    return [serialize_post(post, authors) for post in posts]

def serialize_single(db: Session, post: Post) -> PostSchema:
    return serialize_posts(db, [post])[0]
