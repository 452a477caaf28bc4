from typing import List, Optional, Tuple
import logging
import mimetypes
import os

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import UploadFile
from starlette.responses import Response, StreamingResponse

from app.core.errors import NotFoundError, SavorSyncError
from app.core.storage import MediaStorage

logger = logging.getLogger(__name__)

CACHE_HEADERS = {"Cache-Control": "public, max-age=86400"}

class MediaService:
    def __init__(self, storage: MediaStorage):
        self.storage = storage

    def _from_bucket(self, key: str) -> Optional[Response]:
        try:
            logger.info(f"Attempting to retrieve file {key} from object storage")
            obj = self.storage.client.get_object(Bucket=self.storage.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            logger.warning(f"Failed to retrieve file {key} from object storage: {str(e)}. Falling back to local storage.")
            return None
        return StreamingResponse(
            obj["Body"].iter_chunks(),
            media_type=obj.get("ContentType") or "application/octet-stream",
            headers=CACHE_HEADERS,
        )

    def get_media(self, key: str) -> Response:
        """Get media from object storage with local storage fallback"""
        if self.storage.client:
            response = self._from_bucket(key)
            if response is not None:
                return response

        file_path = self.storage.local_path(key)
        if not os.path.isfile(file_path):
            logger.error(f"File {key} not found in local storage")
            raise NotFoundError("File")

        content_type = mimetypes.guess_type(file_path)[0] or "application/octet-stream"
        with open(file_path, "rb") as f:
            content = f.read()

        logger.info(f"Successfully retrieved file {key} from local storage")
        return Response(
            content=content,
            media_type=content_type,
            headers={
                **CACHE_HEADERS,
                "Content-Disposition": f"inline; filename={os.path.basename(file_path)}",
            },
        )

    async def upload_image(self, file: UploadFile, prefix: str = "posts") -> str:
        return await self.storage.upload_file(file, prefix)

    def delete_media(self, key: str) -> None:
        if not self.storage.delete_file(key):
            raise NotFoundError("Image")

    async def upload_images(self, files: List[UploadFile], prefix: str = "posts") -> List[Tuple[UploadFile, str]]:
        """Store every file or none of them"""
        stored = []
        try:
            for file in files:
                url = await self.storage.upload_file(file, prefix)
                stored.append((file, url))
        except SavorSyncError:
            for _, url in stored:
                key = self.storage.key_from_url(url)
                if key:
                    self.storage.delete_file(key)
            logger.warning(f"Batch upload failed after {len(stored)} of {len(files)} files; removed stored files")
            raise
        return stored
