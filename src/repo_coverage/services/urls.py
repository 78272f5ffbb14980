"""Build shields.io badge URLs for each coverage service."""

from __future__ import annotations

from repo_coverage.models import Provider, RepositoryReference, ServiceId, ServiceQuery

DEFAULT_BADGE_HOST = "https://img.shields.io"

# Which repository providers each service's badge endpoint understands.
# Coveralls itself supports Bitbucket, but its shields.io endpoint is GitHub only.
_SUPPORTED_PROVIDERS: dict[ServiceId, frozenset[Provider]] = {
    ServiceId.COVERALLS: frozenset({Provider.GITHUB}),
    ServiceId.CODECLIMATE: frozenset({Provider.GITHUB, Provider.BITBUCKET, Provider.GITLAB}),
    ServiceId.SCRUTINIZER: frozenset({Provider.GITHUB, Provider.BITBUCKET}),
    ServiceId.CODECOV: frozenset({Provider.GITHUB, Provider.BITBUCKET, Provider.GITLAB}),
}

_SCRUTINIZER_ALIASES: dict[Provider, str] = {
    Provider.GITHUB: "g",
    Provider.BITBUCKET: "b",
}


def supported_providers(service: ServiceId | str) -> frozenset[Provider]:
    """Return the providers a service covers (empty for unknown services)."""
    try:
        return _SUPPORTED_PROVIDERS[ServiceId(service)]
    except ValueError:
        return frozenset()


def build_badge_url(
    ref: RepositoryReference,
    service: ServiceId | str,
    branch: str | None = None,
    *,
    host: str = DEFAULT_BADGE_HOST,
) -> str | None:
    """Build the JSON badge URL for ``service``.

    Returns None when the service does not cover the repository's provider.
    The codeclimate coverage endpoint has no branch variant, so ``branch``
    is ignored for it.
    """
    if ref.provider not in supported_providers(service):
        return None

    host = host.rstrip("/")
    suffix = f"/{branch}.json" if branch else ".json"
    repo = f"{ref.owner}/{ref.project}"

    match ServiceId(service):
        case ServiceId.COVERALLS:
            return f"{host}/coveralls/{repo}{suffix}"
        case ServiceId.CODECLIMATE:
            return f"{host}/codeclimate/coverage/{repo}.json"
        case ServiceId.SCRUTINIZER:
            alias = _SCRUTINIZER_ALIASES[ref.provider]
            return f"{host}/scrutinizer/coverage/{alias}/{repo}{suffix}"
        case ServiceId.CODECOV:
            return f"{host}/codecov/c/{ref.provider}/{repo}{suffix}"


def build_service_query(
    ref: RepositoryReference,
    service: ServiceId,
    branch: str | None = None,
    *,
    host: str = DEFAULT_BADGE_HOST,
) -> ServiceQuery | None:
    """Pair a service with its badge URL, or None when it does not cover ``ref``."""
    url = build_badge_url(ref, service, branch, host=host)
    if url is None:
        return None
    return ServiceQuery(service=service, url=url)
