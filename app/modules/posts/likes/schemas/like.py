from app.core.schemas import APIModel

class LikeResult(APIModel):
    """Outcome of a like toggle"""
    message: str
    liked: bool
    like_count: int
