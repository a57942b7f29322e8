from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol


@dataclass(frozen=True)
class FetchResponse:
    """Transport-neutral HTTP response (status, headers, raw body)."""

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if str(key).lower() == wanted:
                return value
        return None

    def json(self) -> Any:
        # Raises ValueError (json.JSONDecodeError) on malformed bodies.
        return json.loads(self.body.decode("utf-8"))

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class FetchPort(Protocol):
    """Outbound GET capability.

    Contract:
    - Implementations raise on transport failures (connection errors, timeouts);
      HTTP error statuses are returned as normal responses.
    """

    async def get(self, url: str, *, headers: Mapping[str, str] | None = None) -> FetchResponse:
        ...

    async def close(self) -> None:
        ...
