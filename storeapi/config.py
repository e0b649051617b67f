# storeapi/config.py
import os
from functools import lru_cache
from typing import List

from pydantic import BaseModel, Field, field_validator


class Settings(BaseModel):
    app_name: str = "GameStore API"
    version: str = "1.0.0"

    # JSON document holding products and users
    db_file: str = os.getenv("GAMESTORE_DB_FILE", "data.json")

    host: str = os.getenv("GAMESTORE_HOST", "127.0.0.1")
    port: int = int(os.getenv("GAMESTORE_PORT", "3000"))
    log_level: str = os.getenv("GAMESTORE_LOG_LEVEL", "INFO")

    # CORS
    cors_origins: List[str] = Field(
        default=os.getenv("GAMESTORE_CORS_ORIGINS", "*"), validate_default=True
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        if isinstance(v, list):
            return v
        return []


@lru_cache
def get_settings() -> Settings:
    return Settings()
