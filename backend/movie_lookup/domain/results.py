"""
Result values returned by the resolver client.

API failures never raise across the client boundary; every operation returns
either its payload or an ``ApiError``. Callers check ``isinstance`` (or
``is_error``) and hand the error up unchanged.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, TypeVar, Union


class ErrorKind(enum.Enum):
    RATE_LIMITED = "Ratelimited. Try again in a few seconds."
    NO_RESULTS = "No results found."
    INVALID_ID = "Invalid ID."
    TRANSPORT_FAILURE = "Unable to get data from API."
    NO_POSTER = "No poster."
    NO_TRAILERS = "No trailers found."


@dataclass(frozen=True)
class ApiError:
    """A failed lookup, carrying the fixed user-facing message for its kind."""

    kind: ErrorKind

    @property
    def message(self) -> str:
        return self.kind.value

    def as_dict(self) -> dict[str, str]:
        return {"error": self.message}


T = TypeVar("T")

ApiResult = Union[T, ApiError]


def is_error(value: Any) -> bool:
    return isinstance(value, ApiError)
