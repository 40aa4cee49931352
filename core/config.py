from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", frozen=True)

    ENV: str = "development"
    # Only "dev" allows the destructive admin reset
    PLATFORM: str = "production"

    DATABASE_URL: str = "sqlite:///./chirpy.db"
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    TOKEN_ISSUER: str = "chirpy"
    ACCESS_TOKEN_EXPIRE_SECONDS: int = 3600
    REFRESH_TOKEN_EXPIRE_DAYS: int = 60
    POLKA_KEY: str | None = None
    FILESERVER_ROOT: str = "."
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]


@lru_cache
def get_settings() -> Settings:
    """
    Load settings once per process.

    The returned object is frozen, so it can be shared by every request
    without locking.
    """
    return Settings()
