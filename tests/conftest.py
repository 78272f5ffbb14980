"""Shared test fixtures."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import httpx

SHIELDS = "https://img.shields.io"


def badge_response(url: str, value: object = "88%", status_code: int = 200) -> httpx.Response:
    """Build a shields.io-style JSON badge response bound to its request."""
    return httpx.Response(
        status_code,
        json={"name": "coverage", "value": value},
        request=httpx.Request("GET", url),
    )


def error_response(url: str, status_code: int = 500) -> httpx.Response:
    return httpx.Response(status_code, request=httpx.Request("GET", url))


def text_response(url: str, text: str) -> httpx.Response:
    return httpx.Response(200, text=text, request=httpx.Request("GET", url))


def make_http_client(
    routes: dict[str, httpx.Response | Exception],
    delays: dict[str, float] | None = None,
) -> AsyncMock:
    """AsyncMock httpx client answering GETs from ``routes``.

    Unrouted URLs answer 404, like nock with no matching interceptor.
    ``delays`` holds per-URL sleeps used to reorder completion.
    """
    delays = delays or {}

    async def _get(url: str, **kwargs: object) -> httpx.Response:
        if url in delays:
            await asyncio.sleep(delays[url])
        answer = routes.get(url)
        if answer is None:
            return error_response(url, 404)
        if isinstance(answer, Exception):
            raise answer
        return answer

    client = AsyncMock(spec=httpx.AsyncClient)
    client.get = AsyncMock(side_effect=_get)
    return client


def requested_urls(client: AsyncMock) -> list[str]:
    return [call.args[0] for call in client.get.await_args_list]
