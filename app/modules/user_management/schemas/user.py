from typing import List, Optional
from datetime import datetime

from pydantic import Field

from app.core.schemas import APIModel

class AuthorSummary(APIModel):
    """The public slice of a user rendered next to posts and comments"""
    id: str
    name: str
    avatar: Optional[str] = None

class UserBase(APIModel):
    name: str
    avatar: Optional[str] = None
    bio: Optional[str] = None

class UserUpdate(APIModel):
    name: Optional[str] = Field(None, max_length=100)
    avatar: Optional[str] = None
    bio: Optional[str] = Field(None, max_length=500)

class User(UserBase):
    """User model returned to client"""
    id: str
    email: Optional[str] = None
    created_at: datetime
    updated_at: datetime

class UserProfile(User):
    """User model with follow graph counts"""
    follower_count: int = 0
    following_count: int = 0

class UserResponse(APIModel):
    user: UserProfile

class UserListResponse(APIModel):
    users: List[User]
