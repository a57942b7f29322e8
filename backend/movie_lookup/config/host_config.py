"""
Client configuration.

The hosting bot owns its configuration; the TMDB key lives at
``tokens.api.tmdb`` in that structure. ``TMDBConfig`` is the validated,
read-only view the resolver client is constructed with.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field

from movie_lookup.config import settings


def _settings_defaults() -> dict[str, Any]:
    return {
        "base_url": settings.TMDB_BASE_URL,
        "image_base_url": settings.TMDB_IMAGE_BASE_URL,
        "poster_size": settings.TMDB_POSTER_SIZE,
        "language": settings.TMDB_LANGUAGE,
        "timeout_s": settings.TMDB_TIMEOUT_S,
        "rate_limit_min_remaining": settings.TMDB_RATE_LIMIT_MIN_REMAINING,
    }


class TMDBConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., min_length=1)
    base_url: str = "https://api.themoviedb.org/3"
    image_base_url: str = "https://image.tmdb.org/t/p"
    poster_size: str = Field("original", min_length=1)
    language: str = Field("en-US", min_length=1)
    timeout_s: float = Field(10.0, gt=0)
    rate_limit_min_remaining: int = Field(4, ge=0)

    @classmethod
    def from_settings(cls) -> "TMDBConfig":
        """Build from env-driven settings (``TMDB_*`` variables)."""
        return cls(api_key=settings.TMDB_API_KEY, **_settings_defaults())

    @classmethod
    def from_host_config(cls, data: Mapping[str, Any]) -> "TMDBConfig":
        """Build from a host configuration mapping.

        The key is read from ``tokens.api.tmdb``. An optional top-level ``tmdb``
        section may override any other field; unset fields keep the values
        from env settings.
        """
        tokens = data.get("tokens") if isinstance(data, Mapping) else None
        api = tokens.get("api") if isinstance(tokens, Mapping) else None
        api_key = api.get("tmdb") if isinstance(api, Mapping) else None

        overrides = data.get("tmdb") if isinstance(data, Mapping) else None
        if not isinstance(overrides, Mapping):
            overrides = {}

        fields = _settings_defaults()
        fields.update({k: v for k, v in overrides.items() if k in cls.model_fields and k != "api_key"})
        fields["api_key"] = str(api_key or "").strip()
        return cls(**fields)

    def endpoint_url(self, endpoint: str) -> str:
        # Direct concatenation keeps the /3 path segment intact.
        return f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"

    def poster_url(self, poster_path: str) -> str:
        return f"{self.image_base_url.rstrip('/')}/{self.poster_size}/{poster_path.lstrip('/')}"


def load_host_config(path: str | Path) -> TMDBConfig:
    """Read a YAML host config file and build a ``TMDBConfig`` from it."""
    p = Path(path).expanduser()
    with p.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        data = {}
    return TMDBConfig.from_host_config(data)
