"""
Cloudinary Storage Backend

Archives uploaded problem images on Cloudinary using the "image"
resource type, so every archived photo gets a CDN URL.

Setup:
------
   STORAGE_BACKEND=cloudinary
   CLOUDINARY_CLOUD_NAME=your-cloud-name
   CLOUDINARY_API_KEY=your-api-key
   CLOUDINARY_API_SECRET=your-api-secret
   CLOUDINARY_FOLDER=saarthi_problems   (optional)
"""

import io
import logging
from datetime import datetime, timezone
from typing import Optional

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader

from saarthi.storage.base import StorageBackend, StoredFile, StorageError

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "image"


class CloudinaryStorage(StorageBackend):
    """
    Cloudinary image storage.

    Storage paths become public_ids under ``folder``:
    "problems/<user>/<uuid>_photo.png" is stored as
    "saarthi_problems/problems/<user>/<uuid>_photo".
    """

    keeps_files = True

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        folder: str = "saarthi_problems",
    ):
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True
        )

        self.folder = folder

        logger.info(f"CloudinaryStorage initialized (cloud: {cloud_name}, folder: {folder})")

    def _build_public_id(self, path: str) -> str:
        # Cloudinary keeps the format separately for images
        stem = path.rsplit(".", 1)[0] if "." in path.rsplit("/", 1)[-1] else path
        public_id = f"{self.folder}/{stem}" if self.folder else stem

        while "//" in public_id:
            public_id = public_id.replace("//", "/")

        return public_id

    async def save(
        self,
        file_content: bytes,
        destination_path: str,
        content_type: Optional[str] = None,
    ) -> StoredFile:
        public_id = self._build_public_id(destination_path)

        try:
            result = cloudinary.uploader.upload(
                io.BytesIO(file_content),
                public_id=public_id,
                resource_type=RESOURCE_TYPE,
                overwrite=True,
            )
        except cloudinary.exceptions.Error as e:
            logger.error(f"Cloudinary upload failed for {destination_path}: {e}")
            raise StorageError(f"Failed to upload image to Cloudinary: {e}")

        size = result.get("bytes", len(file_content))
        url = result.get("secure_url")
        logger.info(f"Image uploaded to Cloudinary: {public_id} ({size} bytes, url: {url})")

        return StoredFile(
            path=destination_path,
            size=size,
            content_type=content_type or "application/octet-stream",
            stored_at=datetime.now(timezone.utc),
            url=url,
            checksum=result.get("etag"),
        )

    async def delete(self, path: str) -> bool:
        public_id = self._build_public_id(path)

        try:
            result = cloudinary.uploader.destroy(public_id, resource_type=RESOURCE_TYPE)
        except cloudinary.exceptions.Error as e:
            logger.error(f"Failed to delete image from Cloudinary: {e}")
            raise StorageError(f"Failed to delete file: {e}")

        deleted = result.get("result") == "ok"
        if deleted:
            logger.info(f"Image deleted from Cloudinary: {path}")
        return deleted
