from __future__ import annotations

import asyncio
from typing import Mapping

import aiohttp

from movie_lookup.ports.fetch_port import FetchPort, FetchResponse


class AiohttpFetcher(FetchPort):
    """aiohttp-backed ``FetchPort``.

    The session is created lazily on first use and shared by all calls on this
    fetcher. Transport errors (``aiohttp.ClientError``, ``asyncio.TimeoutError``)
    propagate to the caller.

    Attributes:
        _timeout_s: Total request timeout in seconds
        _session: aiohttp ClientSession (lazily initialized)
        _lock: Async lock guarding session creation
    """

    def __init__(self, *, timeout_s: float = 10.0, headers: dict[str, str] | None = None) -> None:
        self._timeout_s = float(timeout_s or 10.0)
        self._headers = dict(headers or {})
        self._session: aiohttp.ClientSession | None = None
        self._lock = asyncio.Lock()

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is not None and not self._session.closed:
            return self._session

        async with self._lock:
            # Another coroutine may have created the session while we waited
            if self._session is not None and not self._session.closed:
                return self._session

            timeout = aiohttp.ClientTimeout(total=self._timeout_s)
            self._session = aiohttp.ClientSession(timeout=timeout, headers=self._headers)
            return self._session

    async def get(self, url: str, *, headers: Mapping[str, str] | None = None) -> FetchResponse:
        session = await self._get_session()
        async with session.get(url, headers=dict(headers or {})) as resp:
            body = await resp.read()
            return FetchResponse(status=resp.status, headers=dict(resp.headers), body=body)

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
