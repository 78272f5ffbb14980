"""Resolve a repository's coverage: badge first, then every service in parallel."""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace

import httpx

from repo_coverage.errors import AggregateCoverageError, CoverageFetchError
from repo_coverage.hosts.base import GitUrlParserPort
from repo_coverage.hosts.parser import DefaultGitUrlParser
from repo_coverage.hosts.resolver import resolve_repository
from repo_coverage.models import QueryOutcome, RepositoryReference
from repo_coverage.options import CoverageOptions, coverage_badge_url, resolve_options
from repo_coverage.services.base import BadgeFetcherPort, ServiceFetcher
from repo_coverage.services.registry import get_service_fetcher
from repo_coverage.services.shields import DefaultBadgeFetcher

logger = logging.getLogger(__name__)


@dataclass
class CoverageResolver:
    """Resolves coverage for repositories using a shared badge fetcher.

    Args:
        badges: Badge fetching adapter (usually ``DefaultBadgeFetcher``).
        parser: Git URL parser used to identify the repository's provider.
    """

    badges: BadgeFetcherPort
    parser: GitUrlParserPort = field(default_factory=DefaultGitUrlParser)

    async def fetch(
        self,
        repository_url: str,
        options: Mapping[str, object] | CoverageOptions | None = None,
    ) -> float | None:
        """Return the repository's coverage in [0, 1], or None if undeterminable.

        Args:
            repository_url: Any SSH, HTTPS or shorthand repository URL.
            options: Overrides for ``CoverageOptions`` (branch, badges,
                services, timeout, badge_host).

        Raises:
            AggregateCoverageError: Every query that was attempted failed.
        """
        opts = resolve_options(options)

        ref = resolve_repository(repository_url, self.parser)
        if ref is None:
            return None

        errors: list[CoverageFetchError] = []

        badge_url = coverage_badge_url(opts.badges)
        if badge_url:
            try:
                return await self.badges.fetch_coverage(badge_url, timeout=opts.timeout)
            except CoverageFetchError as exc:
                logger.warning("Coverage badge %s failed, trying services: %s", badge_url, exc)
                errors.append(exc)

        outcomes = await self._query_services(ref, opts)
        return _aggregate(outcomes, errors)

    async def _query_services(
        self,
        ref: RepositoryReference,
        opts: CoverageOptions,
    ) -> list[QueryOutcome]:
        """Query every known service concurrently and wait for all of them."""
        settled = itertools.count()

        async def run(fetcher: ServiceFetcher) -> QueryOutcome:
            outcome = await fetcher(ref, opts, self.badges)
            return replace(outcome, settled_order=next(settled))

        tasks = []
        for service in opts.services:
            fetcher = get_service_fetcher(service)
            if fetcher is None:
                logger.debug("Skipping unknown coverage service '%s'", service)
                continue
            tasks.append(run(fetcher))

        results = await asyncio.gather(*tasks, return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return list(results)


def _aggregate(outcomes: list[QueryOutcome], errors: list[CoverageFetchError]) -> float | None:
    """Pick the first coverage by service order, or decide between None and failure.

    Errors are only surfaced when no query produced a determinate answer.
    ``errors`` holds failures recorded before the services were dispatched.
    """
    for outcome in outcomes:
        if outcome.coverage is not None:
            return outcome.coverage

    if any(outcome.determinate for outcome in outcomes):
        return None

    failed = sorted((o for o in outcomes if o.error is not None), key=lambda o: o.settled_order)
    errors = errors + [o.error for o in failed if o.error is not None]
    if errors:
        raise AggregateCoverageError(errors)
    return None


async def fetch_coverage(
    repository_url: str,
    options: Mapping[str, object] | CoverageOptions | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
    parser: GitUrlParserPort | None = None,
) -> float | None:
    """Fetch the coverage of a repository from badge services.

    Uses ``http_client`` when given; otherwise a client is opened for this
    call and closed afterwards.
    Returns a fraction in [0, 1], or None when no service reports coverage.
    Raises AggregateCoverageError when every attempted query failed.
    """
    parser = parser or DefaultGitUrlParser()
    if http_client is not None:
        resolver = CoverageResolver(badges=DefaultBadgeFetcher(http_client), parser=parser)
        return await resolver.fetch(repository_url, options)

    async with httpx.AsyncClient(follow_redirects=True) as client:
        resolver = CoverageResolver(badges=DefaultBadgeFetcher(client), parser=parser)
        return await resolver.fetch(repository_url, options)
