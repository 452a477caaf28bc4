from typing import List

from app.core.schemas import APIModel
from app.modules.posts.schemas.post import Post
from app.modules.user_management.schemas.user import User

class FeedResponse(APIModel):
    posts: List[Post]

class UserSearchResponse(APIModel):
    users: List[User]

class CommunityStats(APIModel):
    total_users: int
    total_posts: int
    total_likes: int
