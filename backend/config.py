# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    APP_NAME: str = "Kruger Gateway Discoveries API"
    APP_VERSION: str = "2.0.0"
    API_PREFIX: str = "/api"

    DATABASE_URL: str = "sqlite:///./kruger_gateway.db"

    # Token signing; expiry is a fixed 24 hours
    SECRET_KEY: str = "kruger_park_dev_secret_change_me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    BCRYPT_ROUNDS: int = 12

    FRONTEND_URL: str = "http://localhost:3000"
    SEED_ON_STARTUP: bool = True
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file: ClassVar[str] = str(env_path)

settings = Settings()
