"""
Studio Configuration

Provider keys, model names, limits and dashboard users, read from the
environment or a local .env file.
"""

from typing import List, Optional
from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Studio settings; field names match the environment variables."""

    # Gemini (API_KEY kept for existing deployments)
    GEMINI_API_KEY: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY"),
    )
    GEMINI_URL_MODEL: str = "gemini-2.5-pro"
    GEMINI_TEXT_MODEL: str = "gemini-2.5-flash"

    # OpenAI
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_AUDIT_MODEL: str = "gpt-4o"
    OPENAI_CHAT_MODEL: str = "gpt-4o-mini"

    # Assistant
    ASSISTANT_PROVIDER: str = "openai"

    # Application Settings
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    PORT: int = 3007
    ALLOWED_ORIGINS: str = "http://localhost:5173,http://localhost:3000"

    # Dashboard users as comma-separated "username:sha256hex" pairs
    DASHBOARD_USERS: str = ""

    # Archive
    HISTORY_DIR: str = ".seo_studio"

    # Limits
    MAX_UPLOAD_BYTES: int = 15 * 1024 * 1024

    # Timeouts
    AUDIT_TIMEOUT: float = 120.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
        case_sensitive = False

    @property
    def allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS as comma-separated string."""
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get or create cached settings instance."""
    return Settings()
