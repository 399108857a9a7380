from pathlib import Path

from pydantic_settings import BaseSettings


def _load_version() -> str:
    version_path = Path(__file__).resolve().parent / "VERSION"
    try:
        return version_path.read_text().strip()
    except FileNotFoundError:
        return "0.1.0"


class Settings(BaseSettings):
    """Application configuration using Pydantic settings."""

    # Database
    DATABASE_URL: str = "sqlite:///./data/thoughts.db"

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: list[str] = ["*"]
    CORS_ALLOW_HEADERS: list[str] = ["*"]

    # Application
    APP_NAME: str = "Deep Thoughts"
    APP_VERSION: str = _load_version()
    DEBUG: bool = False

    # GraphQL
    GRAPHQL_PATH: str = "/graphql"

    # ── Authentication ─────────────────────────────────────────────────
    JWT_SECRET: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_MINUTES: int = 120

    # ── Content limits ─────────────────────────────────────────────────
    THOUGHT_MAX_LENGTH: int = 280
    PASSWORD_MIN_LENGTH: int = 5
    # bcrypt only accepts the first 72 bytes
    PASSWORD_MAX_BYTES: int = 72

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
