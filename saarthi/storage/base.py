"""
Storage Backend Abstract Base Class

Interface every storage backend implements. Services hold a
``StorageBackend`` and never care which concrete one it is.
"""
from abc import ABC, abstractmethod
from typing import Optional
from dataclasses import dataclass
from datetime import datetime


@dataclass
class StoredFile:
    """
    Metadata about a stored file.

    Attributes:
        path: The storage path where file was saved
        size: File size in bytes
        content_type: MIME type of the file
        stored_at: When the file was stored
        url: Public URL, for backends that have one
        checksum: Optional hash for integrity verification
    """
    path: str
    size: int
    content_type: str
    stored_at: datetime
    url: Optional[str] = None
    checksum: Optional[str] = None


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageBackend(ABC):
    """
    Abstract base class for file storage backends.

    ``keeps_files`` tells callers whether uploads are meant to stay:
    local copies are scratch space and removed after the request,
    remote copies are the archive.
    """

    keeps_files: bool = False

    @abstractmethod
    async def save(
        self,
        file_content: bytes,
        destination_path: str,
        content_type: Optional[str] = None
    ) -> StoredFile:
        """
        Save file content to storage.

        Raises:
            StorageError: If the file cannot be saved
        """
        pass

    @abstractmethod
    async def delete(self, path: str) -> bool:
        """
        Delete a file. Returns False (no error) if it didn't exist.
        """
        pass

    async def close(self) -> None:
        """Release held resources. Called on shutdown."""
        return None
