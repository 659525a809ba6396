from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables
    or a `.env` file.
    """

    DATABASE_URL: str = "sqlite:///./chat.db"
    """SQLAlchemy database URL."""

    SECRET_KEY: str
    """Secret used to sign access tokens."""

    ALGORITHM: str = "HS256"
    """JWT signing algorithm."""

    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    """Lifetime of an access token, in minutes."""

    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    """Lifetime of a refresh token, in days."""

    COMPLETION_API_KEY: str = ""
    """Bearer key for the completion API."""

    COMPLETION_API_URL: str = "https://api.groq.com/openai/v1"
    """Base URL of an OpenAI-compatible completion API."""

    COMPLETION_MODEL: str = "llama-3.1-8b-instant"
    """Model identifier sent with every completion request."""

    COMPLETION_TIMEOUT_SECONDS: float = 30.0
    """Upper bound on a single completion call."""

    CORS_ORIGINS: List[str] = ["*"]
    """Origins allowed by the CORS middleware."""

    API_PREFIX: str = ""
    """Path prefix for every route (e.g. `/api`)."""

    LOG_LEVEL: str = "INFO"
    """Root logging level."""

    class Config:
        env_file = ".env"


settings = Settings()
