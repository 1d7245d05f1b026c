"""
Problem Image Endpoint

- POST /form  - Solve the problem shown in an uploaded photo
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile, status

from saarthi.api.deps import get_current_user, get_generator, get_archive_storage
from saarthi.api.errors import error_response, generation_failure
from saarthi.ai.llm import GenerationError, ResilientGenerationClient
from saarthi.core.config import settings
from saarthi.models.user import User
from saarthi.schemas.study import TextResult, ErrorEnvelope
from saarthi.services.problem_service import ProblemService
from saarthi.storage import StorageBackend
from saarthi.utils.file_utils import ImageValidationError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Problem Solving"])

IMAGE_FAILURE_MESSAGE = "An error occurred while processing your image. Please try again."


def get_problem_service(
    generator: ResilientGenerationClient = Depends(get_generator),
    storage: Optional[StorageBackend] = Depends(get_archive_storage),
) -> ProblemService:
    return ProblemService(
        generator,
        storage=storage,
        max_size_bytes=settings.MAX_IMAGE_SIZE_BYTES,
        archive=storage is not None,
    )


@router.post(
    "/form",
    response_model=TextResult,
    summary="Solve a problem from a photo",
    responses={
        400: {"model": ErrorEnvelope, "description": "Missing or non-image upload"},
        413: {"model": ErrorEnvelope, "description": "Image too large"},
        503: {"model": ErrorEnvelope, "description": "AI service overloaded"},
        500: {"model": ErrorEnvelope, "description": "Generation failed"},
    },
)
async def solve_problem_image(
    image: Optional[UploadFile] = File(None, description="Photo of the problem"),
    current_user: User = Depends(get_current_user),
    service: ProblemService = Depends(get_problem_service),
):
    if image is None:
        return error_response(status.HTTP_400_BAD_REQUEST, "No image file uploaded")

    content = await image.read()
    logger.info(f"File received: {image.filename or 'unnamed file'}")

    try:
        result = await service.solve_image(content, image.filename, current_user.id)
    except ImageValidationError as e:
        code = (
            status.HTTP_413_REQUEST_ENTITY_TOO_LARGE if e.too_large
            else status.HTTP_400_BAD_REQUEST
        )
        return error_response(code, str(e))
    except GenerationError as e:
        logger.error(f"Error in /form: {e}")
        return generation_failure(e, IMAGE_FAILURE_MESSAGE)

    return TextResult(result=result)
