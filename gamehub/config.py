"""
Configuration module for GameHub Insight backend.

All settings come from environment variables (a local ``.env`` file is
loaded first). Supabase settings are required to serve requests; the Gemini
key is optional and only gates recommendation generation.
"""
import logging
import os
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_float(name: str, default: float) -> Optional[float]:
    """Parse a float variable; None when it is set but not a number."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return None


def _env_list(name: str) -> List[str]:
    """Comma separated variable as a list, blanks dropped."""
    return [item.strip() for item in os.getenv(name, "").split(",") if item.strip()]


class Settings:
    """Application settings loaded from environment variables."""

    # Supabase project (tables game, favorite, ai_request + Auth)
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "").rstrip("/")
    SUPABASE_PUBLISHABLE_KEY: str = os.getenv("SUPABASE_PUBLISHABLE_KEY", "")

    @property
    def SUPABASE_JWKS_URL(self) -> str:
        """Public keys used to verify Supabase access tokens (ES256)."""
        if not self.SUPABASE_URL:
            return ""
        return f"{self.SUPABASE_URL}/auth/v1/.well-known/jwks.json"

    # Gemini. Empty key disables generation; cached history is still served
    GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    GEMINI_TIMEOUT_SECONDS: Optional[float] = _env_float("GEMINI_TIMEOUT_SECONDS", 15.0)

    # Runtime
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Web origins allowed in production (everything is allowed elsewhere)
    CORS_ALLOWED_ORIGINS: List[str] = _env_list("CORS_ALLOWED_ORIGINS")

    # Root URL of a running API, used by gamehub.client
    GAMEHUB_API_URL: str = os.getenv("GAMEHUB_API_URL", "http://localhost:8000")

    @classmethod
    def validate(cls) -> None:
        """
        Check that the settings can serve requests.

        Raises:
            ValueError: Listing every problem found.
        """
        problems = [
            f"{key} is not set"
            for key, value in (
                ("SUPABASE_URL", cls.SUPABASE_URL),
                ("SUPABASE_PUBLISHABLE_KEY", cls.SUPABASE_PUBLISHABLE_KEY),
            )
            if not value
        ]

        if cls.GEMINI_TIMEOUT_SECONDS is None or cls.GEMINI_TIMEOUT_SECONDS <= 0:
            problems.append("GEMINI_TIMEOUT_SECONDS must be a positive number of seconds")

        if cls.LOG_LEVEL not in VALID_LOG_LEVELS:
            problems.append(f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}")

        if problems:
            raise ValueError("Invalid configuration: " + "; ".join(problems))

        if not cls.GOOGLE_API_KEY:
            logger.warning("GOOGLE_API_KEY is not set; /ai endpoints can only serve cached history")

    @classmethod
    def is_production(cls) -> bool:
        return cls.ENVIRONMENT.lower() == "production"

    @classmethod
    def is_development(cls) -> bool:
        return cls.ENVIRONMENT.lower() == "development"


settings = Settings()

# Fail fast on import unless disabled (tests, tooling)
if os.getenv("VALIDATE_CONFIG", "true").lower() == "true":
    try:
        settings.validate()
    except ValueError as e:
        if not settings.is_development():
            raise
        print(f"Warning: {e}")
        print("   Set the missing values in .env before calling Supabase-backed endpoints.")
