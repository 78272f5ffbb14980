"""Static registry of the coverage services the resolver can query."""

from __future__ import annotations

import logging

from repo_coverage.errors import CoverageFetchError
from repo_coverage.models import QueryOutcome, RepositoryReference, ServiceId
from repo_coverage.options import CoverageOptions
from repo_coverage.services.base import BadgeFetcherPort, ServiceFetcher
from repo_coverage.services.urls import build_service_query

logger = logging.getLogger(__name__)


def _make_fetcher(service: ServiceId) -> ServiceFetcher:
    """Build the fetch routine for one service.

    A CoverageFetchError is captured in the outcome rather than raised so
    that sibling queries are unaffected.
    """

    async def fetch(
        ref: RepositoryReference,
        options: CoverageOptions,
        badges: BadgeFetcherPort,
    ) -> QueryOutcome:
        query = build_service_query(ref, service, options.branch, host=options.badge_host)
        if query is None:
            logger.debug("%s does not support %s repositories", service, ref.provider)
            return QueryOutcome(service=service)

        try:
            coverage = await badges.fetch_coverage(query.url, timeout=options.timeout)
        except CoverageFetchError as exc:
            logger.warning("Coverage service %s failed for %s: %s", service, ref.full_name, exc)
            return QueryOutcome(service=service, url=query.url, error=exc)

        return QueryOutcome(service=service, url=query.url, coverage=coverage)

    fetch.__name__ = f"fetch_{service}"
    return fetch


_SERVICE_FETCHERS: dict[ServiceId, ServiceFetcher] = {
    service: _make_fetcher(service) for service in ServiceId
}


def get_service_fetcher(name: str) -> ServiceFetcher | None:
    """Look up a service's fetch routine. Unknown names return None."""
    try:
        return _SERVICE_FETCHERS[ServiceId(name)]
    except ValueError:
        return None


def available_services() -> list[str]:
    """Identifiers of all registered services."""
    return [str(service) for service in _SERVICE_FETCHERS]
