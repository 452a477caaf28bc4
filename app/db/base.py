# Import all models here so create_all sees every table
from app.db.session import Base

from app.modules.user_management.models.user import User
from app.modules.follows.models.follow import Follow
from app.modules.posts.models.post import Post, PostTag
from app.modules.posts.likes.models.like import PostLike
from app.modules.posts.comments.models.comment import Comment
from app.modules.recipes.models.recipe import Recipe
