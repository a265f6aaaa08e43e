"""Users API — configuration loaded from environment."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, loaded from .env or environment variables."""

    # ── Database ──────────────────────────────────────────
    database_url: str = "sqlite+aiosqlite:///./users_api.db"

    # ── HTTP server ───────────────────────────────────────
    host: str = "0.0.0.0"
    port: int = 3000

    # ── App ───────────────────────────────────────────────
    app_name: str = "Users API"
    debug: bool = False
    # Put raw store error messages in 500 bodies instead of a generic text
    expose_error_details: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton settings instance
settings = Settings()
