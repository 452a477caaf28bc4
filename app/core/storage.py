import base64
import binascii
import mimetypes
import os
import re
import uuid
import logging
from typing import Optional, Tuple

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import UploadFile, status

from .config import settings
from .errors import MediaUploadError

logger = logging.getLogger(__name__)

DATA_URL_PATTERN = re.compile(r"^data:(image/[a-zA-Z0-9.+-]+);base64,(.*)$", re.DOTALL)

class MediaStorage:
    """Handles file storage on an S3-compatible bucket, with a local-disk fallback"""

    def __init__(self):
        """Initialize the S3 client with settings from config"""
        self.client = None
        self.bucket = settings.MEDIA_BUCKET_NAME
        self.public_url = settings.MEDIA_PUBLIC_URL.rstrip("/")
        self.base_url = settings.BASE_URL.rstrip("/")

        logger.info("Initializing MediaStorage with configuration:")
        logger.info(f"  Bucket: {self.bucket}")
        logger.info(f"  Public URL: {self.public_url or 'Not set'}")
        logger.info(f"  Endpoint: {settings.MEDIA_ENDPOINT or 'Not set'}")

        if all([settings.MEDIA_ENDPOINT, settings.MEDIA_ACCESS_KEY_ID, settings.MEDIA_SECRET_ACCESS_KEY]):
            try:
                self.client = boto3.client(
                    "s3",
                    endpoint_url=settings.MEDIA_ENDPOINT,
                    aws_access_key_id=settings.MEDIA_ACCESS_KEY_ID,
                    aws_secret_access_key=settings.MEDIA_SECRET_ACCESS_KEY,
                )
                logger.info("MediaStorage S3 client initialized successfully")
            except (BotoCoreError, ValueError) as e:
                logger.error(f"Failed to create S3 client: {str(e)}")
                logger.warning("Object storage will not be available, using local disk")
        else:
            missing = []
            if not settings.MEDIA_ENDPOINT:
                missing.append("MEDIA_ENDPOINT")
            if not settings.MEDIA_ACCESS_KEY_ID:
                missing.append("MEDIA_ACCESS_KEY_ID")
            if not settings.MEDIA_SECRET_ACCESS_KEY:
                missing.append("MEDIA_SECRET_ACCESS_KEY")
            logger.warning(f"Object storage not configured - missing: {', '.join(missing)}")

    def media_url(self, key: str) -> str:
        """Public URL for a stored key"""
        if self.client and self.public_url:
            return f"{self.public_url}/{key}"
        return f"{self.base_url}{settings.API_PREFIX}/media/{key}"

    def key_from_url(self, url: str) -> Optional[str]:
        proxy_prefix = f"{self.base_url}{settings.API_PREFIX}/media/"
        if self.public_url and url.startswith(f"{self.public_url}/"):
            return url[len(self.public_url) + 1:]
        if url.startswith(proxy_prefix):
            return url[len(proxy_prefix):]
        return None

    def local_path(self, key: str) -> str:
        root = os.path.abspath(settings.UPLOAD_DIRECTORY)
        path = os.path.abspath(os.path.join(root, key))
        if os.path.commonpath([root, path]) != root:
            raise MediaUploadError("Invalid media path", status.HTTP_400_BAD_REQUEST)
        return path

    def upload_bytes(self, content: bytes, content_type: str, prefix: str = "posts") -> str:
        """Store ``content`` and return its public URL"""
        extension = mimetypes.guess_extension(content_type) or ""
        key = f"{prefix}/{uuid.uuid4().hex}{extension}"

        if not self.client:
            local_path = self.local_path(key)
            try:
                os.makedirs(os.path.dirname(local_path), exist_ok=True)
                with open(local_path, "wb") as out_file:
                    out_file.write(content)
            except OSError as e:
                logger.error(f"[UPLOAD] Failed to save file locally: {str(e)}")
                raise MediaUploadError("Failed to store media")
            logger.info(f"[UPLOAD] Saved {len(content)} bytes locally at {local_path}")
            return self.media_url(key)

        logger.info(f"[UPLOAD] Uploading {len(content)} bytes to bucket '{self.bucket}' with key '{key}'")
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=content_type or "application/octet-stream",
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"[UPLOAD] Failed to upload to object storage: {str(e)}")
            raise MediaUploadError("Failed to upload media")
        return self.media_url(key)

    def validate_image(self, content: bytes, content_type: Optional[str]) -> None:
        if content_type not in settings.ALLOWED_IMAGE_TYPES:
            raise MediaUploadError(
                "Invalid file type. Only JPEG, PNG, GIF, and WebP images are allowed.",
                status.HTTP_400_BAD_REQUEST,
            )
        if len(content) > settings.MAX_UPLOAD_SIZE:
            raise MediaUploadError(
                "File size too large. Maximum size is 5MB.",
                status.HTTP_400_BAD_REQUEST,
            )

    async def upload_file(self, file: UploadFile, prefix: str = "posts") -> str:
        """Validate an uploaded image and store it"""
        logger.info(f"[UPLOAD] Received file: {file.filename} (prefix: {prefix})")
        content = await file.read()
        self.validate_image(content, file.content_type)
        return self.upload_bytes(content, file.content_type, prefix)

    def decode_data_url(self, data_url: str) -> Tuple[bytes, str]:
        match = DATA_URL_PATTERN.match(data_url)
        if not match:
            raise MediaUploadError("Malformed image data", status.HTTP_400_BAD_REQUEST)
        content_type, payload = match.groups()
        try:
            content = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError):
            raise MediaUploadError("Malformed image data", status.HTTP_400_BAD_REQUEST)
        if not content:
            raise MediaUploadError("Empty image data", status.HTTP_400_BAD_REQUEST)
        return content, content_type

    def upload_data_url(self, data_url: str, prefix: str = "posts") -> str:
        """Store an inline ``data:image/...;base64,`` payload"""
        content, content_type = self.decode_data_url(data_url)
        self.validate_image(content, content_type)
        return self.upload_bytes(content, content_type, prefix)

    def delete_file(self, key: str) -> bool:
        """Delete a stored object by key"""
        if not self.client:
            path = self.local_path(key)
            if not os.path.exists(path):
                return False
            os.remove(path)
            logger.info(f"Deleted local media file {path}")
            return True

        try:
            logger.info(f"Deleting file with key '{key}' from bucket '{self.bucket}'")
            self.client.delete_object(Bucket=self.bucket, Key=key)
            return True
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to delete from object storage: {str(e)}")
            return False

# Global instance for app-wide usage
media_storage = MediaStorage()
