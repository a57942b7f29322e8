import os
from typing import Optional

from dotenv import load_dotenv

# The project-root .env wins over values already exported in the shell.
load_dotenv(override=True)


def _get_env_int(key: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from exc


def _get_env_float(key: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be a number, got {raw!r}") from exc


# ===== TMDB API =====

TMDB_API_KEY = os.getenv("TMDB_API_KEY", "").strip()
TMDB_BASE_URL = os.getenv("TMDB_BASE_URL", "https://api.themoviedb.org/3").strip()
TMDB_LANGUAGE = os.getenv("TMDB_LANGUAGE", "en-US").strip() or "en-US"
TMDB_TIMEOUT_S = _get_env_float("TMDB_TIMEOUT_S", 10.0) or 10.0

# Static image host; posters are fetched as <base>/<size><poster_path>.
TMDB_IMAGE_BASE_URL = os.getenv("TMDB_IMAGE_BASE_URL", "https://image.tmdb.org/t/p").strip()
TMDB_POSTER_SIZE = os.getenv("TMDB_POSTER_SIZE", "original").strip() or "original"

# Requests are rejected locally once X-RateLimit-Remaining drops below this value.
TMDB_RATE_LIMIT_MIN_REMAINING = _get_env_int("TMDB_RATE_LIMIT_MIN_REMAINING", 4)
if TMDB_RATE_LIMIT_MIN_REMAINING is None:
    TMDB_RATE_LIMIT_MIN_REMAINING = 4
