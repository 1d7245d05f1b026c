from typing import Optional

from fastapi import HTTPException, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import logging

from saarthi.db.database import get_db
from saarthi.models import User
from saarthi.services.auth_service import AuthService
from saarthi.ai.llm import ResilientGenerationClient, get_generation_client
from saarthi.core.config import settings
from saarthi.storage import StorageBackend, get_storage

logger = logging.getLogger(__name__)

# Security scheme for Swagger UI
security = HTTPBearer()

# =====================================================
# Get Current user
# =====================================================
async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Dependency that validates JWT token and returns current user.

    Raises:
        HTTPException 401: If token is invalid or the user is inactive
    """
    auth_service = AuthService(db)

    try:
        return await auth_service.get_current_user(credentials.credentials)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"}
        )


# =====================================================
# AI / storage collaborators
# =====================================================
def get_generator() -> ResilientGenerationClient:
    """
    The shared Gemini client.

    Raises:
        HTTPException 503: GEMINI_API_KEY is not configured
    """
    try:
        return get_generation_client()
    except ValueError as e:
        logger.error(f"Generation client unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="AI service is not configured"
        )


def get_archive_storage() -> Optional[StorageBackend]:
    """
    Storage for archived problem images, or None when archiving is off.

    A backend that cannot be built (missing Cloudinary credentials,
    read-only upload directory) disables archiving instead of failing
    the request.
    """
    if not settings.ARCHIVE_UPLOADS:
        return None

    try:
        return get_storage()
    except (ValueError, OSError) as e:
        logger.warning(f"Archiving disabled, storage unavailable: {e}")
        return None
