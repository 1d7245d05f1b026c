"""
File Utilities

Helper functions for handling uploaded problem images.
Always assume user input is malicious!
"""

import os
import re
import uuid
import logging
from dataclasses import dataclass
from typing import Optional

import filetype

logger = logging.getLogger(__name__)


class ImageValidationError(ValueError):
    """Upload rejected before it reaches Gemini or storage."""

    def __init__(self, message: str, too_large: bool = False):
        super().__init__(message)
        self.too_large = too_large


@dataclass(frozen=True)
class ValidatedImage:
    filename: str
    content: bytes
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.content)


# ============================================================
# MIME TYPE DETECTION
# ============================================================
def detect_mime_type(file_content: bytes) -> str:
    """
    Detect the actual MIME type of a file by reading its magic bytes.

    Uses the pure-Python ``filetype`` library so no system
    dependencies (libmagic) are needed on cloud platforms.
    """
    kind = filetype.guess(file_content)

    if kind is not None:
        logger.debug(f"Detected MIME type: {kind.mime}")
        return kind.mime

    return "application/octet-stream"


# ============================================================
# FILENAME HANDLING
# ============================================================

def sanitize_filename(filename: Optional[str]) -> str:
    """
    Remove dangerous characters from a filename.
    """
    # Remove path components (user might include full path)
    filename = os.path.basename(filename or "")

    filename = filename.replace("\x00", "")

    # Keep letters, digits, underscore, hyphen and dot
    filename = re.sub(r'[^\w\-.]', '_', filename)
    filename = re.sub(r'_+', '_', filename)
    filename = filename.strip('_.')

    if len(filename) > 200:
        name, ext = os.path.splitext(filename)
        filename = name[:200 - len(ext)] + ext

    if not filename:
        filename = "unnamed_file"

    return filename


def generate_storage_path(user_id, original_filename: Optional[str]) -> str:
    """problems/<user_id>/<uuid>_<sanitized name>"""
    return f"problems/{user_id}/{uuid.uuid4().hex}_{sanitize_filename(original_filename)}"


# ============================================================
# VALIDATION
# ============================================================

def validate_image(
    content: bytes,
    filename: Optional[str],
    max_size_bytes: int,
) -> ValidatedImage:
    """
    Check an uploaded problem image.

    The MIME type comes from the bytes, never from the client.

    Raises:
        ImageValidationError: empty, too large, or not an image
    """
    if not content:
        raise ImageValidationError("No image file uploaded")

    if len(content) > max_size_bytes:
        raise ImageValidationError(
            f"Image size ({len(content) / 1024 / 1024:.1f} MB) exceeds maximum "
            f"({max_size_bytes // (1024 * 1024)} MB)",
            too_large=True,
        )

    mime_type = detect_mime_type(content)
    if not mime_type.startswith("image/"):
        logger.warning(f"Rejected upload {filename!r}: detected {mime_type}")
        raise ImageValidationError("Uploaded file is not a supported image")

    return ValidatedImage(
        filename=sanitize_filename(filename),
        content=content,
        mime_type=mime_type,
    )
