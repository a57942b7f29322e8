from __future__ import annotations

from movie_lookup.config.host_config import TMDBConfig, load_host_config  # noqa: F401

__all__ = [
    "TMDBConfig",
    "load_host_config",
]
