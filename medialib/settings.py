# medialib/settings.py
import os
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # core
    APP_NAME: str = Field(default="Media Library")
    ENV: str = Field(default=os.getenv("APP_ENV", "dev"))
    DEBUG: bool = Field(default=True)
    LOG_LEVEL: str = Field(default="INFO")

    # storage
    DB_PATH: str = Field(default="data/db/medialib.db")
    MEDIA_ROOT: str = Field(default="public")
    MAX_VIDEO_SIZE: int = Field(default=100 * 1024 * 1024)  # 100MB

    # search
    SEARCH_RESULT_LIMIT: int = Field(default=50, ge=1)
    TAXONOMY_PATH: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env.dev",
        extra="ignore",
    )


settings = Settings()
