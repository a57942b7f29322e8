from movie_lookup.domain.identifiers import IdentifierKind, classify_query, imdb_id_of, strip_tmdb_marker
from movie_lookup.domain.results import ApiError, ApiResult, ErrorKind, is_error

__all__ = [
    "ApiError",
    "ApiResult",
    "ErrorKind",
    "IdentifierKind",
    "classify_query",
    "imdb_id_of",
    "is_error",
    "strip_tmdb_marker",
]
