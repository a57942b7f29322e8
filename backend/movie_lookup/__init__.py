"""
movie_lookup - TMDB lookups for the chat bot.

Turns loose queries (titles, IMDb ids, ``t<id>`` TMDB ids) into TMDB movie and
person data. Failed lookups come back as ``ApiError`` values.
"""

from __future__ import annotations

from movie_lookup.domain import ApiError, ApiResult, ErrorKind, IdentifierKind, classify_query, is_error

__version__ = "0.1.0"

_resolver_client = None


def get_resolver_client():
    """Lazy singleton builder for the env-configured client.

    Returns None when no TMDB API key is configured.
    """
    global _resolver_client
    if _resolver_client is not None:
        return _resolver_client

    from movie_lookup.config.settings import TMDB_API_KEY

    if not TMDB_API_KEY:
        return None

    from movie_lookup.config.host_config import TMDBConfig
    from movie_lookup.infrastructure.tmdb_client import TMDBResolverClient

    _resolver_client = TMDBResolverClient(config=TMDBConfig.from_settings())
    return _resolver_client


__all__ = [
    "ApiError",
    "ApiResult",
    "ErrorKind",
    "IdentifierKind",
    "classify_query",
    "get_resolver_client",
    "is_error",
]
