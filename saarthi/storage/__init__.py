"""
Storage Module

File storage behind one interface. The active backend is chosen by
the STORAGE_BACKEND setting:

- "local": scratch directory, files removed after each request
- "cloudinary": uploaded problem images are archived on Cloudinary
"""

from typing import Optional

from saarthi.storage.base import (
    StorageBackend,
    StoredFile,
    StorageError,
)
from saarthi.storage.local import LocalStorage
from saarthi.core.config import settings

_storage_instance: Optional[StorageBackend] = None


def get_storage() -> StorageBackend:
    """Return the configured storage backend (created once, then reused)."""
    global _storage_instance

    if _storage_instance is None:
        _storage_instance = _create_storage_backend()

    return _storage_instance


def _create_storage_backend() -> StorageBackend:
    backend = settings.STORAGE_BACKEND.lower()

    if backend == "local":
        return LocalStorage(base_path=settings.UPLOAD_DIR)

    elif backend == "cloudinary":
        if not settings.cloudinary_configured:
            raise ValueError(
                "STORAGE_BACKEND=cloudinary requires CLOUDINARY_CLOUD_NAME, "
                "CLOUDINARY_API_KEY and CLOUDINARY_API_SECRET"
            )
        from saarthi.storage.cloudinary_storage import CloudinaryStorage
        return CloudinaryStorage(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            folder=settings.CLOUDINARY_FOLDER,
        )

    else:
        raise ValueError(
            f"Unknown storage backend: {backend}. "
            f"Valid options: local, cloudinary"
        )


async def close_storage() -> None:
    """Close the active backend, if one was created. Called on shutdown."""
    global _storage_instance
    if _storage_instance is not None:
        await _storage_instance.close()
        _storage_instance = None


def reset_storage() -> None:
    """Forget the current backend; the next get_storage() builds a new one."""
    global _storage_instance
    _storage_instance = None


__all__ = [
    "get_storage",
    "close_storage",
    "reset_storage",
    "StorageBackend",
    "StoredFile",
    "StorageError",
    "LocalStorage",
]
