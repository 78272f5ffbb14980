"""repo-coverage: resolve a repository's test coverage from badge services."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _distribution_version

from repo_coverage.errors import AggregateCoverageError, CoverageFetchError, RepoCoverageError
from repo_coverage.resolver import CoverageResolver, fetch_coverage

_LOCAL_VERSION_FALLBACK = "0.0.0+local"

__all__ = [
    "AggregateCoverageError",
    "CoverageFetchError",
    "CoverageResolver",
    "RepoCoverageError",
    "fetch_coverage",
]


def _resolve_version() -> str:
    """Resolve package version from installed metadata with deterministic fallback."""
    try:
        return _distribution_version("repo-coverage")
    except PackageNotFoundError:
        return _LOCAL_VERSION_FALLBACK


__version__ = _resolve_version()


def main() -> None:
    """Entry point for `repo-coverage` CLI."""
    from repo_coverage.server import mcp

    mcp.run(transport="stdio")
