from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
import secrets


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables or .env.

    Built once at import time; collaborators (database engine, Gemini
    client, storage backend) read their values from here when they are
    constructed instead of reaching into the environment themselves.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"  # Ignore extra fields in .env file
    )

    # -------------------------
    # Database
    # -------------------------
    # postgresql+asyncpg://... in deployment, sqlite+aiosqlite for local runs
    DATABASE_URL: str = "sqlite+aiosqlite:///./saarthi.db"

    # -------------------------
    # Security / Auth
    # -------------------------
    SECRET_KEY: str = Field(default_factory=lambda: secrets.token_urlsafe(32))
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # -------------------------
    # Application
    # -------------------------
    PROJECT_NAME: str = "Saarthi API"
    API_V1_PREFIX: str = "/api/v1"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    SQLALCHEMY_ECHO: bool = False

    # -------------------------
    # File Storage
    # -------------------------
    STORAGE_BACKEND: str = Field(
        default="local",
        description="Storage backend: 'local' or 'cloudinary'"
    )
    UPLOAD_DIR: str = Field(
        default="storage/uploads",
        description="Directory for uploaded files (local storage)"
    )
    ARCHIVE_UPLOADS: bool = Field(
        default=False,
        description="Keep a copy of uploaded problem images in storage"
    )
    MAX_IMAGE_SIZE_MB: int = Field(
        default=10,
        ge=1,
        le=50,
        description="Maximum problem image size in megabytes"
    )

    @property
    def MAX_IMAGE_SIZE_BYTES(self) -> int:
        return self.MAX_IMAGE_SIZE_MB * 1024 * 1024

    CLOUDINARY_CLOUD_NAME: Optional[str] = None
    CLOUDINARY_API_KEY: Optional[str] = None
    CLOUDINARY_API_SECRET: Optional[str] = None
    CLOUDINARY_FOLDER: str = "saarthi_problems"

    # =========================================================
    # LLM Configuration (Google Gemini)
    # =========================================================
    # Get your API key at: https://aistudio.google.com/apikey
    # =========================================================

    GEMINI_API_KEY: Optional[str] = Field(
        default=None,
        description="Google Gemini API key"
    )

    GEMINI_MODEL: str = Field(
        default="gemini-1.5-flash",
        description="Gemini model used for every feature"
    )

    LLM_MAX_TOKENS: int = Field(
        default=4096,
        ge=100,
        le=8192,
        description="Maximum tokens in LLM response"
    )

    LLM_TEMPERATURE: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="LLM temperature for response generation"
    )

    # Overload handling for generation calls
    GENERATION_MAX_ATTEMPTS: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts per generation call when Gemini is overloaded"
    )
    GENERATION_BACKOFF_SECONDS: float = Field(
        default=2.0,
        ge=0.0,
        description="Backoff unit; retry n waits n * this many seconds"
    )

    # -------------------------
    # Quiz
    # -------------------------
    QUIZ_HISTORY_LIMIT: int = Field(
        default=10,
        ge=1,
        le=50,
        description="Default number of quiz results returned by history"
    )

    @field_validator("ALGORITHM")
    def validate_algorithm(cls, v):
        if not v or not isinstance(v, str):
            raise ValueError("ALGORITHM must be a non-empty string.")
        return v

    @field_validator("STORAGE_BACKEND")
    def validate_storage_backend(cls, v):
        """Ensure storage backend is a valid option."""
        allowed = {"local", "cloudinary"}
        if v not in allowed:
            raise ValueError(f"STORAGE_BACKEND must be one of: {allowed}")
        return v

    @property
    def secret_key_is_ephemeral(self) -> bool:
        """True when SECRET_KEY was generated at startup rather than configured."""
        return "SECRET_KEY" not in self.model_fields_set

    @property
    def cloudinary_configured(self) -> bool:
        return bool(
            self.CLOUDINARY_CLOUD_NAME
            and self.CLOUDINARY_API_KEY
            and self.CLOUDINARY_API_SECRET
        )


settings = Settings()
