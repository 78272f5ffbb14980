"""Read coverage percentages from shields.io JSON badge endpoints."""

from __future__ import annotations

import logging
import re

import httpx

from repo_coverage.errors import CoverageFetchError

logger = logging.getLogger(__name__)

_PERCENT_RE = re.compile(r"([0-9]+)%")


class DefaultBadgeFetcher:
    """Adapter for BadgeFetcherPort -- holds httpx client."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client

    async def fetch_coverage(self, url: str, *, timeout: float) -> float | None:
        """Fetch a badge and return its coverage value."""
        return await fetch_badge_coverage(url, self._http, timeout=timeout)


async def fetch_badge_coverage(
    url: str,
    http_client: httpx.AsyncClient,
    *,
    timeout: float,
) -> float | None:
    """Fetch a JSON badge and extract its coverage as a fraction in [0, 1].

    Returns None when the service answered but has nothing to report,
    including bodies that are not valid JSON (shields.io sometimes answers
    unknown repositories that way).

    Raises CoverageFetchError on timeouts, connection errors, invalid
    URLs and non-2xx responses.
    """
    try:
        resp = await http_client.get(url, timeout=timeout)
        resp.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise CoverageFetchError(url, exc) from exc

    try:
        payload = resp.json()
    except ValueError:
        logger.debug("Badge %s returned a non-JSON body, treating as no coverage", url)
        return None

    return parse_badge_payload(payload)


def parse_badge_payload(payload: object) -> float | None:
    """Extract coverage from a badge payload like ``{"value": "88%"}``.

    Anything other than a whole percentage between 0% and 100% in a
    string ``value`` field yields None.
    """
    if not isinstance(payload, dict):
        return None

    value = payload.get("value")
    if not isinstance(value, str):
        return None

    m = _PERCENT_RE.fullmatch(value)
    if not m:
        return None

    percent = int(m.group(1))
    if percent > 100:
        return None
    return percent / 100
