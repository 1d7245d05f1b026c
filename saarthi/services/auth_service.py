from sqlalchemy.ext.asyncio import AsyncSession
from datetime import datetime, timezone
from uuid import UUID

from saarthi.models import User
from saarthi.repositories.user_repo import UserRepository
from saarthi.schemas.auth import (
    UserRegister,
    UserLogin,
    TokenResponse,
    TokenRefreshResponse,
    UserResponse,
    ProfileResponse,
)
from saarthi.core.security import (
    verify_password,
    create_access_token,
    create_refresh_token,
    verify_refresh_token,
    verify_token,
)

from saarthi.core.config import settings


class AuthService:
    """
    Service class for authentication operations.

    Every failure is raised as ``ValueError`` with a message safe to show
    to the client; routes turn it into 400/401.
    """
    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_repo = UserRepository(db)

    # ============================================================
    # User Registration
    # ============================================================
    async def register(self, user_data: UserRegister) -> TokenResponse:
        """
        Register a new user (and their empty profile).

        Raises:
            ValueError: If username or email is already taken
        """
        if await self.user_repo.exists_with(user_data.username, user_data.email):
            raise ValueError("A user with this username or email already exists")

        user = await self.user_repo.create_user(user_data)

        return self._create_token_response(user)

    # ============================================================
    # User Login
    # ============================================================
    async def login(self, login_data: UserLogin) -> TokenResponse:
        """
        Authenticate user and return tokens.

        Raises:
            ValueError: If credentials are invalid
        """
        user = await self.user_repo.get_by_username(login_data.username)

        if not user or not verify_password(login_data.password, user.password_hash):
            raise ValueError("Invalid username or password")

        if not user.is_active:
            raise ValueError("This account has been deactivated")

        user.last_login = datetime.now(timezone.utc)
        await self.db.commit()
        await self.db.refresh(user)

        return self._create_token_response(user)

    # ============================================================
    # Token Refresh
    # ============================================================
    async def refresh_token(self, refresh_token: str) -> TokenRefreshResponse:
        user_id = verify_refresh_token(refresh_token)

        if not user_id:
            raise ValueError("Invalid or expired refresh token")

        user = await self.user_repo.get_by_id(_as_uuid(user_id))

        if not user or not user.is_active:
            raise ValueError("User not found or inactive")

        return TokenRefreshResponse(
            access_token=create_access_token(subject=str(user.id)),
            token_type="bearer",
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
        )

    # ============================================================
    # Get Current User
    # ============================================================
    async def get_current_user(self, token: str) -> User:
        """
        Get user from access token.

        Raises:
            ValueError: If token is invalid or the user is gone/inactive
        """
        payload = verify_token(token)

        if not payload:
            raise ValueError("Invalid or expired token")

        user = await self.user_repo.get_by_id(_as_uuid(payload.get("sub")))

        if not user:
            raise ValueError("User not found")

        if not user.is_active:
            raise ValueError("User account is deactivated")

        return user

    async def get_profile(self, user: User) -> ProfileResponse:
        profile = await self.user_repo.get_profile(user.id)
        if not profile:
            raise ValueError("Profile not found")
        return ProfileResponse(
            user_id=str(user.id),
            gender=profile.gender,
            bio=profile.bio,
        )

    # ============================================================
    # Helper Methods
    # ============================================================
    def _create_token_response(self, user: User) -> TokenResponse:
        return TokenResponse(
            access_token=create_access_token(subject=str(user.id)),
            refresh_token=create_refresh_token(subject=str(user.id)),
            token_type="bearer",
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            user=to_user_response(user),
        )


def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        username=user.username,
        email=user.email,
        phone=user.phone,
        is_active=user.is_active,
        created_at=user.created_at,
        last_login=user.last_login,
    )


def _as_uuid(value) -> UUID:
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        raise ValueError("Invalid token subject")
