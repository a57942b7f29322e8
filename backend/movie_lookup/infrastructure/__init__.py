from movie_lookup.infrastructure.aiohttp_fetcher import AiohttpFetcher
from movie_lookup.infrastructure.tmdb_client import HORROR_GENRE_ID, LIST_LIMIT, TMDBResolverClient

__all__ = [
    "AiohttpFetcher",
    "HORROR_GENRE_ID",
    "LIST_LIMIT",
    "TMDBResolverClient",
]
