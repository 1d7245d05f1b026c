from datetime import datetime, timezone, timedelta
from typing import Any, Union, Optional, Dict
import uuid

from jose import JWTError, jwt

# Use bcrypt directly to avoid passlib/bcrypt version conflicts
import bcrypt

from saarthi.core.config import settings


# =====================================================
# Password Hashing
# =====================================================
class PasswordContext:
    """Minimal bcrypt wrapper (hash / verify)."""

    @staticmethod
    def hash(password: str) -> str:
        return bcrypt.hashpw(
            password.encode("utf-8"),
            bcrypt.gensalt()
        ).decode("utf-8")

    @staticmethod
    def verify(plain_password: str, hashed_password: str) -> bool:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            hashed_password.encode("utf-8")
        )


pwd_context = PasswordContext()


# =====================================================
# Token Type Constants
# =====================================================
TOKEN_TYPE_ACCESS = "access"
TOKEN_TYPE_REFRESH = "refresh"


# =====================================================
# JWT Creation
# =====================================================
def _encode_token(subject: Union[str, Any], token_type: str, expire: datetime) -> str:
    now = datetime.now(timezone.utc)
    to_encode = {
        "exp": expire,
        "sub": str(subject),
        "type": token_type,
        "iat": now,
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def create_access_token(
    subject: Union[str, Any],
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create a short-lived access token for ``subject`` (a user id)."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(timezone.utc) + expires_delta
    return _encode_token(subject, TOKEN_TYPE_ACCESS, expire)


def create_refresh_token(
    subject: Union[str, Any],
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create a long-lived refresh token for ``subject``."""
    if expires_delta is None:
        expires_delta = timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    expire = datetime.now(timezone.utc) + expires_delta
    return _encode_token(subject, TOKEN_TYPE_REFRESH, expire)


# =====================================================
# Token Verification
# =====================================================
def verify_token(
    token: str,
    token_type: str = TOKEN_TYPE_ACCESS
) -> Optional[Dict[str, Any]]:
    """
    Decode a JWT and return its payload, or None when the token is
    malformed, expired, or of the wrong type.
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        return None

    if payload.get("type") != token_type:
        return None

    return payload


def verify_refresh_token(token: str) -> Optional[str]:
    """Verify a refresh token and return its subject."""
    payload = verify_token(token, TOKEN_TYPE_REFRESH)
    return payload.get("sub") if payload else None


# =====================================================
# Password Utilities
# =====================================================
def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not plain_password or not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    if not password:
        raise ValueError("Password cannot be empty")
    return pwd_context.hash(password)
