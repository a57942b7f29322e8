"""
TMDB lookup client for the chat bot.

Resolves loose lookup queries (free-text titles, IMDb ids such as ``tt0137523``
or ``nm0000093``, and TMDB ids written as ``t550``) to TMDB entities and fetches
details, trailers, posters and movie lists. Every API failure comes back as an
``ApiError`` value; nothing is raised to the caller for a failed lookup.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Awaitable, Callable
from urllib.parse import urlencode

from movie_lookup.config.host_config import TMDBConfig
from movie_lookup.domain.identifiers import IdentifierKind, classify_query, imdb_id_of, strip_tmdb_marker
from movie_lookup.domain.results import ApiError, ApiResult, ErrorKind
from movie_lookup.infrastructure.aiohttp_fetcher import AiohttpFetcher
from movie_lookup.ports.fetch_port import FetchPort
from movie_lookup.ports.log_port import LogPort

logger = logging.getLogger(__name__)

RATE_LIMIT_HEADER = "X-RateLimit-Remaining"

_JSON_HEADERS = {"accept": "application/json"}
_IMAGE_HEADERS = {"accept": "image/*"}

# How many items the list endpoints hand back to the chat.
LIST_LIMIT = 10

HORROR_GENRE_ID = 27

Payload = dict[str, Any]


def _results(payload: Payload) -> list[Payload]:
    results = payload.get("results") or []
    if not isinstance(results, list):
        return []
    return [r for r in results if isinstance(r, dict)]


_COUNT = re.compile(r"[0-9]+")


def _rate_limit_remaining(raw: str | None) -> int | None:
    """Parse the remaining-requests header; None unless it is a plain ASCII count."""
    m = _COUNT.fullmatch((raw or "").strip())
    return int(m.group(0)) if m else None


class TMDBResolverClient:
    """Async TMDB v3 client with identifier resolution.

    Attributes:
        _config: Read-only client configuration (API key, hosts, thresholds)
        _fetcher: Outbound GET capability
        _log: Host logging collaborator (``info`` / ``error``)
    """

    def __init__(
        self,
        *,
        config: TMDBConfig,
        fetcher: FetchPort | None = None,
        log: LogPort | None = None,
    ) -> None:
        self._config = config
        self._fetcher: FetchPort = fetcher or AiohttpFetcher(timeout_s=config.timeout_s)
        self._log: LogPort = log or logger

    async def __aenter__(self) -> "TMDBResolverClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    @property
    def config(self) -> TMDBConfig:
        return self._config

    # ------------------------------------------------------------------
    # Request executor
    # ------------------------------------------------------------------

    def _build_url(self, endpoint: str, params: dict[str, Any] | None) -> str:
        query: dict[str, Any] = dict(params or {})
        # Auth and language always trail the caller's own parameters.
        query["api_key"] = self._config.api_key
        query["language"] = self._config.language
        return f"{self._config.endpoint_url(endpoint)}?{urlencode(query)}"

    async def get(self, endpoint: str, params: dict[str, Any] | None = None) -> ApiResult[Payload]:
        """Authenticated GET against the TMDB API.

        Returns the decoded JSON object, or an ``ApiError`` when the call is
        rate limited, fails in transport, or TMDB answers with its failure
        envelope (an object carrying a ``success`` key).
        """
        url = self._build_url(endpoint, params)
        logger.debug("TMDB get endpoint=%s params=%s", endpoint, params)

        try:
            resp = await self._fetcher.get(url, headers=_JSON_HEADERS)

            remaining = _rate_limit_remaining(resp.header(RATE_LIMIT_HEADER))
            if remaining is not None and remaining < self._config.rate_limit_min_remaining:
                self._log.info("Ratelimited.")
                return ApiError(ErrorKind.RATE_LIMITED)

            data = resp.json()
        except asyncio.TimeoutError:
            self._log.error(f"TMDB request timeout after {self._config.timeout_s}s endpoint={endpoint}")
            return ApiError(ErrorKind.TRANSPORT_FAILURE)
        except Exception as e:
            self._log.error(f"TMDB request failed endpoint={endpoint}: {e!r}")
            return ApiError(ErrorKind.TRANSPORT_FAILURE)

        if not isinstance(data, dict) or "success" in data:
            logger.debug("TMDB rejected endpoint=%s body=%s", endpoint, str(data)[:200])
            return ApiError(ErrorKind.TRANSPORT_FAILURE)
        return data

    # ------------------------------------------------------------------
    # Shared resolution steps
    # ------------------------------------------------------------------

    async def _find_by_imdb_id(self, imdb_id: str, results_field: str) -> ApiResult[str]:
        found = await self.get(f"find/{imdb_id}", {"external_source": "imdb_id"})
        if isinstance(found, ApiError):
            return found

        matches = found.get(results_field) or []
        if not isinstance(matches, list) or not matches or not isinstance(matches[0], dict):
            return ApiError(ErrorKind.NO_RESULTS)
        entity_id = matches[0].get("id")
        if entity_id is None:
            return ApiError(ErrorKind.NO_RESULTS)
        return str(entity_id)

    async def _resolve_id(
        self,
        query: str,
        *,
        results_field: str,
        search: Callable[[str], Awaitable[ApiResult[Any]]],
    ) -> ApiResult[str]:
        kind = classify_query(query)

        if kind is IdentifierKind.TMDB:
            return strip_tmdb_marker(query)

        if kind is IdentifierKind.IMDB:
            return await self._find_by_imdb_id(imdb_id_of(query), results_field)

        results = await search(query)
        if isinstance(results, ApiError):
            return results
        entity_id = results[0].get("id")
        if entity_id is None:
            return ApiError(ErrorKind.NO_RESULTS)
        return str(entity_id)

    async def _search(
        self, endpoint: str, query: str, page: int, details: bool
    ) -> ApiResult[Any]:
        found = await self.get(
            endpoint,
            {"query": query, "page": int(page or 1), "include_adult": "true"},
        )
        if isinstance(found, ApiError):
            return found

        results = _results(found)
        if not results:
            return ApiError(ErrorKind.NO_RESULTS)
        if details:
            return found
        return results

    async def _get_entity(self, path: str) -> ApiResult[Payload]:
        entity = await self.get(path)
        if isinstance(entity, ApiError):
            return entity
        if not entity.get("id"):
            return ApiError(ErrorKind.INVALID_ID)
        return entity

    # ------------------------------------------------------------------
    # Movies
    # ------------------------------------------------------------------

    async def get_movie_id(self, query: str) -> ApiResult[str]:
        """Resolve a query to a TMDB movie id (as a string).

        ``t550`` resolves locally; ``tt0137523`` goes through the find endpoint;
        anything else takes the first title-search hit.
        """
        return await self._resolve_id(query, results_field="movie_results", search=self.get_movies)

    async def get_movie(self, query: str) -> ApiResult[Payload]:
        movie_id = await self.get_movie_id(query)
        if isinstance(movie_id, ApiError):
            return movie_id
        return await self._get_entity(f"movie/{movie_id}")

    async def get_movies(self, query: str, page: int = 1, details: bool = False) -> ApiResult[Any]:
        """Title search. Returns the results list, or the whole envelope with ``details``."""
        return await self._search("search/movie", query, page, details)

    async def get_similar_movies(self, query: str) -> ApiResult[list[Payload]]:
        movie_id = await self.get_movie_id(query)
        if isinstance(movie_id, ApiError):
            return movie_id

        movies = await self.get(f"movie/{movie_id}/similar", {"page": 1})
        if isinstance(movies, ApiError):
            return movies
        return _results(movies)[:LIST_LIMIT]

    async def get_upcoming_movies(self) -> ApiResult[list[Payload]]:
        movies = await self.get("movie/upcoming", {"page": 1})
        if isinstance(movies, ApiError):
            return movies
        return _results(movies)[:LIST_LIMIT]

    async def get_trailers(self, query: str) -> ApiResult[list[Payload]]:
        """YouTube trailers for a movie (exact ``site``/``type`` match)."""
        movie_id = await self.get_movie_id(query)
        if isinstance(movie_id, ApiError):
            return movie_id

        videos = await self.get(f"movie/{movie_id}/videos")
        if isinstance(videos, ApiError):
            return videos

        results = _results(videos)
        if not results:
            return ApiError(ErrorKind.NO_TRAILERS)
        return [v for v in results if v.get("site") == "YouTube" and v.get("type") == "Trailer"]

    async def get_poster(self, query: str) -> ApiResult[bytes]:
        """Poster image bytes for the first title-search hit."""
        movies = await self.get_movies(query)
        if isinstance(movies, ApiError):
            return movies

        poster_path = movies[0].get("poster_path")
        if not poster_path:
            self._log.error(f"TMDB movie id={movies[0].get('id')} has no poster_path")
            return ApiError(ErrorKind.NO_POSTER)

        url = self._config.poster_url(str(poster_path))
        try:
            image = await self._fetcher.get(url, headers=_IMAGE_HEADERS)
        except Exception as e:
            self._log.error(f"TMDB poster fetch failed url={url}: {e!r}")
            return ApiError(ErrorKind.NO_POSTER)

        if not image.ok:
            self._log.error(f"TMDB poster fetch failed ({image.status}) url={url}")
            return ApiError(ErrorKind.NO_POSTER)
        return image.body

    async def discover_by_genre(
        self,
        genre_id: int,
        *,
        page: int = 1,
        sort_by: str = "popularity.desc",
    ) -> ApiResult[list[Payload]]:
        """Discover movies in one genre. Results are returned untruncated."""
        params: dict[str, Any] = {
            "sort_by": sort_by,
            "include_adult": "true",
            "with_genres": int(genre_id),
        }
        if page and int(page) > 1:
            params["page"] = int(page)

        movies = await self.get("discover/movie", params)
        if isinstance(movies, ApiError):
            return movies
        return _results(movies)

    async def spooky(self) -> ApiResult[list[Payload]]:
        """Most popular horror movies."""
        return await self.discover_by_genre(HORROR_GENRE_ID)

    # ------------------------------------------------------------------
    # People
    # ------------------------------------------------------------------

    async def get_person_id(self, query: str) -> ApiResult[str]:
        return await self._resolve_id(query, results_field="person_results", search=self.get_people)

    async def get_people(self, query: str, page: int = 1, details: bool = False) -> ApiResult[Any]:
        return await self._search("search/person", query, page, details)

    async def get_person(self, query: str) -> ApiResult[Payload]:
        person_id = await self.get_person_id(query)
        if isinstance(person_id, ApiError):
            return person_id
        return await self._get_entity(f"person/{person_id}")

    async def close(self) -> None:
        """Release the underlying HTTP session."""
        await self._fetcher.close()
