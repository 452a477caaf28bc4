from typing import Any, List, Optional
import logging

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from app.core.errors import BadRequestError
from app.core.storage import media_storage
from app.db.session import get_db
from app.deps import get_current_user
from app.modules.media.schemas.media import (
    DeleteResult, MultiUploadResult, ProfileImageResult, UploadedImage, UploadResult,
)
from app.modules.media.service import MediaService
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import UserUpdate
from app.modules.user_management.services.user import update_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["media"])

MAX_IMAGES_PER_UPLOAD = 5

def get_media_service():
    return MediaService(media_storage)

@router.post("/upload/image", response_model=UploadResult)
async def upload_image(
    image: UploadFile = File(...),
    media_service: MediaService = Depends(get_media_service),
) -> Any:
    """Store an image and return its public URL"""
    url = await media_service.upload_image(image, prefix="posts")
    return UploadResult(image_url=url, key=media_storage.key_from_url(url))

@router.post("/upload/images", response_model=MultiUploadResult)
async def upload_images(
    images: Optional[List[UploadFile]] = File(None),
    media_service: MediaService = Depends(get_media_service),
) -> Any:
    """Store up to five images in one request"""
    if not images:
        raise BadRequestError("No image files provided")
    if len(images) > MAX_IMAGES_PER_UPLOAD:
        raise BadRequestError(f"At most {MAX_IMAGES_PER_UPLOAD} images can be uploaded at once")

    stored = await media_service.upload_images(images, prefix="posts")
    return MultiUploadResult(
        images=[
            UploadedImage(original_name=file.filename, image_url=url, key=media_storage.key_from_url(url))
            for file, url in stored
        ],
        message=f"{len(stored)} images uploaded successfully",
    )

@router.post("/upload/profile-image", response_model=ProfileImageResult)
async def upload_profile_image(
    image: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    media_service: MediaService = Depends(get_media_service),
) -> Any:
    """Store a profile picture and make it the caller's avatar"""
    url = await media_service.upload_image(image, prefix="profiles")
    user = update_user(db, current_user.id, UserUpdate(avatar=url))
    logger.info(f"Updated avatar of user {user.id}")
    return ProfileImageResult(image_url=url, key=media_storage.key_from_url(url), user=user)

@router.delete("/upload/image/{key:path}", response_model=DeleteResult)
def delete_image(
    key: str,
    current_user: User = Depends(get_current_user),
    media_service: MediaService = Depends(get_media_service),
) -> Any:
    logger.info(f"User {current_user.id} deleting image {key}")
    media_service.delete_media(key)
    return DeleteResult(message="Image deleted successfully")

@router.delete("/upload/profile-image/{key:path}", response_model=DeleteResult)
def delete_profile_image(
    key: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    media_service: MediaService = Depends(get_media_service),
) -> Any:
    """Delete a stored profile picture, clearing the caller's avatar if it was this one"""
    if not key.startswith("profiles/"):
        raise BadRequestError("Not a profile image")

    media_service.delete_media(key)
    if current_user.avatar and media_storage.key_from_url(current_user.avatar) == key:
        current_user.avatar = None
        db.commit()
        logger.info(f"Cleared avatar of user {current_user.id}")
    return DeleteResult(message="Profile image deleted successfully")

@router.get("/media/{key:path}")
def serve_media(key: str, media_service: MediaService = Depends(get_media_service)):
    return media_service.get_media(key)
