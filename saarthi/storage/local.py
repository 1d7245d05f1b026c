"""
Local Filesystem Storage Backend

Stores files under a base directory on the local machine:

{base_path}/
└── problems/
    └── {user_id}/
        └── {uuid}_{filename}

Used for development; files here are scratch copies removed once the
request that wrote them is done.
"""

import hashlib
import logging
import aiofiles
import aiofiles.os
from pathlib import Path
from datetime import datetime, timezone
from typing import Optional

from saarthi.storage.base import StorageBackend, StoredFile, StorageError

logger = logging.getLogger(__name__)


class LocalStorage(StorageBackend):
    """
    Local filesystem storage implementation.

    Uses async file I/O to avoid blocking the event loop.

    Attributes:
        base_path: Root directory for all file storage
    """

    keeps_files = False

    def __init__(self, base_path: str):
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

        logger.info(f"LocalStorage initialized at: {self.base_path.absolute()}")

    def _get_full_path(self, relative_path: str) -> Path:
        """
        Resolve ``relative_path`` under base_path.

        Raises:
            StorageError: If the path would escape base_path
        """
        resolved = (self.base_path / relative_path).resolve()

        try:
            resolved.relative_to(self.base_path.resolve())
        except ValueError:
            logger.warning(f"Path traversal attempt detected: {relative_path}")
            raise StorageError(f"Invalid path: {relative_path}")

        return resolved

    async def save(
        self,
        file_content: bytes,
        destination_path: str,
        content_type: Optional[str] = None
    ) -> StoredFile:
        try:
            full_path = self._get_full_path(destination_path)
            full_path.parent.mkdir(parents=True, exist_ok=True)

            async with aiofiles.open(full_path, 'wb') as f:
                await f.write(file_content)

            checksum = hashlib.md5(file_content).hexdigest()
            logger.info(f"File saved: {destination_path} ({len(file_content)} bytes)")

            return StoredFile(
                path=destination_path,
                size=len(file_content),
                content_type=content_type or "application/octet-stream",
                stored_at=datetime.now(timezone.utc),
                checksum=checksum
            )

        except OSError as e:
            # OSError covers disk full, permission denied, read-only fs
            logger.error(f"Failed to save file {destination_path}: {e}")
            raise StorageError(f"Failed to save file: {e}")

    async def delete(self, path: str) -> bool:
        full_path = self._get_full_path(path)

        if not full_path.exists():
            logger.debug(f"File already doesn't exist: {path}")
            return False

        try:
            await aiofiles.os.remove(full_path)
            logger.info(f"File deleted: {path}")
            return True
        except OSError as e:
            logger.error(f"Failed to delete file {path}: {e}")
            raise StorageError(f"Failed to delete file: {e}")
