"""
Configuration module.

Reads deployment settings from the environment (optionally from a .env file).
"""

import os
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def get_env(key: str) -> str:
    """Get environment variable or raise exception if not found."""
    value = os.getenv(key)
    if value is None:
        raise Exception(f"{key} not found")
    return value


def _optional_float(key: str) -> Optional[float]:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return None
    return float(value)


# Authentication
AUTH_SECRET_KEY = os.getenv("AUTH_SECRET_KEY", "dev-secret-key-change-in-production")
AUTH_ALGORITHM = os.getenv("AUTH_ALGORITHM", "HS256")

# Chat history API (used by the HTTP client)
CHAT_HISTORY_API_URL = os.getenv("CHAT_HISTORY_API_URL", "http://127.0.0.1:8000/api/v1")

# Logging
APP_LOG_FILE = os.getenv("APP_LOG_FILE")

# Client-side list cache TTL; unset means entries live until invalidated
LIST_CACHE_TTL_SECONDS = _optional_float("LIST_CACHE_TTL_SECONDS")

# Video existence probe endpoint
YOUTUBE_OEMBED_URL = os.getenv("YOUTUBE_OEMBED_URL", "https://www.youtube.com/oembed")
