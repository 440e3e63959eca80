# @TASK P0-T0.3 - pydantic-settings 기반 애플리케이션 설정

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """SheetShare application settings.

    All values are loaded from environment variables.
    A .env file in the backend directory is also supported.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # --- Database ---
    DATABASE_URL: str = "postgresql+asyncpg://sheetshare:sheetshare@db:5432/sheetshare"
    DATABASE_ECHO: bool = False

    # --- CORS ---
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # --- Catalog listing ---
    CATALOG_DEFAULT_LIMIT: int = 10
    CATALOG_MAX_LIMIT: int = 50
    CATALOG_QUERY_TIMEOUT_SECONDS: float | None = None  # None disables the deadline

    @property
    def async_database_url(self) -> str:
        """Ensure the database URL uses the asyncpg driver."""
        url = self.DATABASE_URL
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings singleton."""
    return Settings()
