"""
Problem Service

Solves a problem from an uploaded photo:

1. VALIDATE  - size limit, magic-byte MIME detection (image/* only)
2. ARCHIVE   - optional copy in storage (ARCHIVE_UPLOADS)
3. SOLVE     - image + instruction prompt sent to Gemini
4. CLEANUP   - local scratch copies are removed even when step 3 fails
"""

import logging
from typing import Optional
from uuid import UUID

from saarthi.ai.llm import InlineImage, ResilientGenerationClient
from saarthi.ai.prompts import build_image_problem_prompt
from saarthi.storage import StorageBackend, StorageError
from saarthi.utils.file_utils import generate_storage_path, validate_image

logger = logging.getLogger(__name__)


class ProblemService:

    def __init__(
        self,
        generator: ResilientGenerationClient,
        storage: Optional[StorageBackend] = None,
        max_size_bytes: int = 10 * 1024 * 1024,
        archive: bool = False,
    ):
        self.generator = generator
        self.storage = storage
        self.max_size_bytes = max_size_bytes
        self.archive = archive and storage is not None

    async def solve_image(
        self,
        content: bytes,
        filename: Optional[str],
        user_id: UUID,
    ) -> str:
        """
        Returns the model's step-by-step solution.

        Raises:
            ImageValidationError: the upload is empty, too large or not an image
            GenerationError: Gemini call failed
        """
        image = validate_image(content, filename, self.max_size_bytes)
        logger.info(
            f"Solving image problem for user {user_id}: "
            f"{image.filename} ({image.mime_type}, {image.size} bytes)"
        )

        stored_path = await self._archive(image.content, image.filename, image.mime_type, user_id)

        try:
            return await self.generator.generate(
                build_image_problem_prompt(),
                image=InlineImage(data=image.content, mime_type=image.mime_type),
            )
        finally:
            if stored_path and not self.storage.keeps_files:
                await self._discard(stored_path)

    async def _archive(
        self,
        content: bytes,
        filename: str,
        mime_type: str,
        user_id: UUID,
    ) -> Optional[str]:
        """Store a copy when archiving is on. Storage failures never block solving."""
        if not self.archive:
            return None

        path = generate_storage_path(user_id, filename)
        try:
            stored = await self.storage.save(content, path, content_type=mime_type)
        except StorageError as e:
            logger.warning(f"Could not archive problem image {path}: {e}")
            return None

        return stored.path

    async def _discard(self, path: str) -> None:
        try:
            await self.storage.delete(path)
        except StorageError as e:
            logger.warning(f"Could not remove scratch copy {path}: {e}")
