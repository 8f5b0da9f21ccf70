"""Application configuration."""

from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "Promptbook"
    app_description: str = "Discover & Share AI Prompts"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    log_level: str = getenv("LOG_LEVEL", "INFO").upper()
    session_secret: str = getenv("SESSION_SECRET", "dev-session-secret-change-me")
    session_secret_fallback: str = "dev-session-secret-change-me"
    user_store: str = getenv("USER_STORE", "memory").strip().lower()
    database_url: str = getenv("DATABASE_URL", "sqlite:///./promptbook.db")
    # Empty means the profile page calls the posts resource in-process.
    posts_api_base_url: str = getenv("POSTS_API_BASE_URL", "").rstrip("/")
    posts_fetch_timeout: float = float(getenv("POSTS_FETCH_TIMEOUT", "5.0"))


settings: Settings = Settings()
