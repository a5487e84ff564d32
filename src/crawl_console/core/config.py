"""
Crawl Console Configuration

Environment-driven settings for the console service: simulation timing,
URL history storage and the crawl backend API.
"""

import os
from enum import Enum
from pathlib import Path


class Environment(str, Enum):
    """Application environment"""

    PRODUCTION = "production"
    DEVELOPMENT = "development"
    TEST = "test"


def _get_environment() -> Environment:
    """Get and validate ENVIRONMENT variable."""
    env_value = os.getenv("ENVIRONMENT")
    if env_value is None:
        raise RuntimeError(
            "ENVIRONMENT is required. Set to 'production', 'development', or 'test'."
        )
    try:
        return Environment(env_value.lower())
    except ValueError:
        raise RuntimeError(
            f"Invalid ENVIRONMENT value: '{env_value}'. "
            "Must be 'production', 'development', or 'test'."
        )


def _get_optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return int(raw)


class Settings:
    """Crawl console configuration"""

    # Application
    APP_NAME: str = os.getenv("APP_NAME", "Crawl Console")
    APP_VERSION: str = os.getenv("APP_VERSION", "0.1.0")

    # Project Paths
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent.parent
    DATA_DIR: Path = BASE_DIR / "data"

    # Local key-value store (URL history)
    CONSOLE_DB_PATH: str = os.getenv(
        "CONSOLE_DB_PATH", str(DATA_DIR / "crawl_console.db")
    )
    HISTORY_KEY: str = os.getenv("HISTORY_KEY", "crawl-url-history")
    HISTORY_LIMIT: int = int(os.getenv("HISTORY_LIMIT", "10"))

    # Simulation
    TICK_INTERVAL_SEC: float = float(os.getenv("TICK_INTERVAL_SEC", "2.0"))
    VALIDATION_DEBOUNCE_SEC: float = float(os.getenv("VALIDATION_DEBOUNCE_SEC", "0.3"))
    SIMULATION_SEED: int | None = _get_optional_int("SIMULATION_SEED")

    # Crawl backend API
    BACKEND_API_URL: str = os.getenv("BACKEND_API_URL", "http://localhost:3001/api")
    BACKEND_TIMEOUT_SEC: float = float(os.getenv("BACKEND_TIMEOUT_SEC", "5.0"))

    # Security
    CORS_ORIGINS: list[str] = (
        os.getenv("CORS_ORIGINS", "").split(",") if os.getenv("CORS_ORIGINS") else []
    )

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"

    # Environment
    ENVIRONMENT: Environment = _get_environment()


settings = Settings()


def _validate_required(settings: Settings) -> None:
    """Validate required settings outside of tests."""
    if settings.ENVIRONMENT == Environment.TEST:
        return

    if settings.TICK_INTERVAL_SEC <= 0:
        raise RuntimeError("TICK_INTERVAL_SEC must be positive")
    if settings.HISTORY_LIMIT < 1:
        raise RuntimeError("HISTORY_LIMIT must be at least 1")
    if settings.ENVIRONMENT == Environment.PRODUCTION and not settings.CORS_ORIGINS:
        raise RuntimeError("Missing required environment variable: CORS_ORIGINS")


_validate_required(settings)
