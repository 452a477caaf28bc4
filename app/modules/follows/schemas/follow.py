from app.core.schemas import APIModel
from app.modules.user_management.schemas.user import UserProfile

class FollowResult(APIModel):
    """The follower after a toggle, and whether the edge now exists"""
    user: UserProfile
    is_following: bool
