from typing import Annotated, List, Literal, Optional
from datetime import datetime

from pydantic import Field, StringConstraints

from app.core.schemas import APIModel
from app.modules.posts.comments.schemas.comment import Comment
from app.modules.user_management.schemas.user import AuthorSummary

PostCategory = Literal["recipe", "cooking-tip", "restaurant-review", "food-story", "technique"]
PostType = Literal["recipe", "story"]
Timeframe = Literal["day", "week", "month"]

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=200)]
Content = Annotated[str, StringConstraints(strip_whitespace=True, min_length=10, max_length=10000)]
Tag = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]
Cuisine = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]

class PostCreate(APIModel):
    """Body of POST /posts and PUT /posts/{id}"""
    title: Title
    content: Content
    category: PostCategory
    tags: List[Tag] = Field(default_factory=list, max_length=10)
    type: Optional[PostType] = None
    cuisine: Optional[Cuisine] = None
    # Either an http(s) URL or a data:image/...;base64 payload
    image: Optional[str] = None

class PostUpdate(PostCreate):
    pass

class Post(APIModel):
    """Post model returned to client"""
    id: str
    title: str
    content: str
    image: Optional[str] = None
    tags: List[str] = []
    category: str
    type: str
    cuisine: Optional[str] = None
    author: str
    author_id: str
    author_profile: Optional[AuthorSummary] = None
    likes: List[str] = []
    like_count: int = 0
    comments: List[Comment] = []
    comment_count: int = 0
    is_published: bool
    created_at: datetime
    updated_at: datetime

class TrendingPost(Post):
    score: int

class Pagination(APIModel):
    current: int
    total: int
    has_more: bool
    total_posts: int

class PostPage(APIModel):
    posts: List[Post]
    pagination: Pagination

class PostList(APIModel):
    posts: List[Post]

class TrendingPostList(APIModel):
    posts: List[TrendingPost]

class PostResponse(APIModel):
    post: Post

class PostMutationResponse(APIModel):
    message: str
    post: Post

class PostDeleteResponse(APIModel):
    message: str
    post_id: str
