# storefront/config.py
import os
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel


class FrontendSettings(BaseModel):
    api_url: str = os.getenv("GAMESTORE_API_URL", "http://127.0.0.1:3000")
    timeout: int = int(os.getenv("GAMESTORE_TIMEOUT", "10"))

    # stands in for the browser's local storage
    session_file: str = os.getenv(
        "GAMESTORE_SESSION_FILE", os.path.join(os.path.expanduser("~"), ".gamestore", "session.json")
    )

    news_api_key: Optional[str] = os.getenv("NEWSDATA_API_KEY") or None
    news_url: str = os.getenv("NEWSDATA_URL", "https://newsdata.io/api/1/latest")
    news_query: str = "video games"

    log_level: str = os.getenv("GAMESTORE_LOG_LEVEL", "WARNING")


@lru_cache
def get_frontend_settings() -> FrontendSettings:
    return FrontendSettings()
