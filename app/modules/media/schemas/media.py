from typing import List, Optional

from app.core.schemas import APIModel
from app.modules.user_management.schemas.user import User

class UploadResult(APIModel):
    success: bool = True
    image_url: str
    key: Optional[str] = None

class ProfileImageResult(UploadResult):
    user: User

class DeleteResult(APIModel):
    success: bool = True
    message: str

class UploadedImage(APIModel):
    original_name: Optional[str] = None
    image_url: str
    key: Optional[str] = None

class MultiUploadResult(APIModel):
    success: bool = True
    images: List[UploadedImage]
    message: str
