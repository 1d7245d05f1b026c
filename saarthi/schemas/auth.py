from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
import re


# ============================================================
# Request Schemas (What client sends)
# ============================================================

class UserRegister(BaseModel):
    """Schema for user registration request"""

    username: str = Field(
        min_length=3,
        max_length=50,
        description="Username used to log in"
    )
    email: EmailStr
    phone: Optional[str] = Field(
        None,
        max_length=20,
        description="Optional phone number"
    )
    password: str = Field(
        min_length=8,
        max_length=100,
        description="Password must be 8-100 characters"
    )

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip()
        if not re.fullmatch(r"[A-Za-z0-9_.-]+", v):
            raise ValueError("Username may only contain letters, digits, '_', '.' and '-'")
        return v

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        """
        Validate password meets strength requirements.

        Requirements:
        - At least 8 characters (already checked by min_length)
        - At least one letter
        - At least one digit
        """
        if not re.search(r"[A-Za-z]", v):
            raise ValueError("Password must contain at least one letter")
        if not re.search(r"\d", v):
            raise ValueError("Password must contain at least one digit")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "username": "aarav",
                "email": "aarav@school.edu",
                "phone": "9876543210",
                "password": "StudyHard42"
            }
        }


class UserLogin(BaseModel):
    """Schema for user login request"""

    username: str
    password: str

    class Config:
        json_schema_extra = {
            "example": {
                "username": "aarav",
                "password": "StudyHard42"
            }
        }


class RefreshTokenRequest(BaseModel):
    refresh_token: str


# ============================================================
# Response Schemas (What server sends back)
# ============================================================

class UserResponse(BaseModel):
    """Schema for user data in responses (NO password!)"""

    id: str
    username: str
    email: str
    phone: Optional[str] = None
    is_active: bool
    created_at: datetime
    last_login: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfileResponse(BaseModel):
    user_id: str
    gender: str
    bio: str


class TokenResponse(BaseModel):
    """Schema for authentication token response"""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int  # Seconds until access token expires
    user: UserResponse


class TokenRefreshResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class ErrorResponse(BaseModel):
    """Schema for error responses"""

    detail: str
