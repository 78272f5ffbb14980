"""Exception hierarchy for repo-coverage.

All exceptions inherit from RepoCoverageError (single catch point).
Per-service failures never reach the caller on their own: they are either
suppressed by a determinate answer or wrapped in AggregateCoverageError.
"""

from __future__ import annotations


class RepoCoverageError(Exception):
    """Base exception for all repo-coverage errors."""


class InvalidOptionsError(RepoCoverageError, ValueError):
    """Resolution options contain an unknown key or an invalid value."""


class CoverageFetchError(RepoCoverageError):
    """A badge endpoint could not be reached or answered with an error status."""

    def __init__(self, url: str, cause: BaseException) -> None:
        super().__init__(f"Failed to fetch coverage badge {url}: {cause}")
        self.url = url
        self.cause = cause


class AggregateCoverageError(RepoCoverageError):
    """Every attempted coverage query failed."""

    def __init__(self, errors: list[CoverageFetchError]) -> None:
        super().__init__(f"{len(errors)} error(s) occurred while trying to fetch coverage")
        self.errors = list(errors)
