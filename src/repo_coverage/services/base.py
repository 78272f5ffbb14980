"""Ports: badge fetching and per-service coverage lookup."""

from __future__ import annotations

from collections.abc import Awaitable
from typing import TYPE_CHECKING, Protocol

from repo_coverage.models import QueryOutcome, RepositoryReference

if TYPE_CHECKING:
    from repo_coverage.options import CoverageOptions


class BadgeFetcherPort(Protocol):
    """Port for reading a coverage percentage from a badge JSON endpoint."""

    async def fetch_coverage(self, url: str, *, timeout: float) -> float | None:
        """Fetch a badge and return coverage in [0, 1], or None if it reports none.

        Raises CoverageFetchError when the endpoint cannot be reached.
        """
        ...


class ServiceFetcher(Protocol):
    """A registered coverage service: builds its badge URL and queries it."""

    def __call__(
        self,
        ref: RepositoryReference,
        options: CoverageOptions,
        badges: BadgeFetcherPort,
    ) -> Awaitable[QueryOutcome]: ...
