import os
import tempfile
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./dev.db"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8000
    SECRET_KEY: str = "change-this-secret"
    JWT_ALGORITHM: str = "HS256"
    TOKEN_TTL_SECONDS: int = 7200
    BCRYPT_ROUNDS: int = 12
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000"]
    DB_TIMEOUT_SECONDS: int = 15
    CHECKOUT_LOCK_TIMEOUT_SECONDS: int = 10
    LOCK_DIR: str = os.path.join(tempfile.gettempdir(), "storefront_locks")
    LOG_LEVEL: str = "INFO"
    RESET_DB: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
