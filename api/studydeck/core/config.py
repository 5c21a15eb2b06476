from pydantic_settings import BaseSettings
from dotenv import load_dotenv
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

# api/.env, next to the studydeck package
API_ENV_FILE = Path(__file__).parent.parent.parent / ".env"


def load_env_file() -> None:
    """
    Load a .env file into the process environment before settings are read.

    api/.env is preferred, then ./.env. Variables that are already set win.
    """
    for candidate in (API_ENV_FILE, Path(".env")):
        if candidate.exists():
            load_dotenv(candidate, override=False)
            logger.info(f"Loaded .env file from: {candidate.absolute()}")
            return
    logger.warning(f".env file not found at {API_ENV_FILE} or {Path('.env').absolute()}")


load_env_file()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = ""

    # API
    api_v1_prefix: str = "/api/v1"

    # CORS
    cors_origins: list[str] = ["*"]

    # Google Generative AI (Gemini) API
    google_gemini_api_key: str = ""
    gemini_model_name: str = "gemini-2.5-flash"
    gemini_timeout_seconds: int = 60

    # Upper bound for a single flashcard generation request
    max_generated_cards: int = 50

    class Config:
        env_file = ".env"
        case_sensitive = False

    def __init__(self, **kwargs):
        if not kwargs.get("database_url"):
            kwargs["database_url"] = os.getenv("DATABASE_URL", "")
        # Older deployments only set GEMINI_API_KEY
        if not kwargs.get("google_gemini_api_key"):
            kwargs["google_gemini_api_key"] = (
                os.getenv("GOOGLE_GEMINI_API_KEY") or os.getenv("GEMINI_API_KEY", "")
            )
        super().__init__(**kwargs)


# Create settings instance
settings = Settings()

# Validate required DATABASE_URL
if not settings.database_url:
    raise ValueError("DATABASE_URL environment variable is required")
