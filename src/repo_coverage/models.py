"""Domain models for repo-coverage. All frozen dataclasses -- no mutation after creation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from repo_coverage.errors import CoverageFetchError

# ─── Enumerations ─────────────────────────────────────────────


class Provider(StrEnum):
    GITHUB = "github"
    BITBUCKET = "bitbucket"
    GITLAB = "gitlab"


class ServiceId(StrEnum):
    CODECOV = "codecov"
    COVERALLS = "coveralls"
    CODECLIMATE = "codeclimate"
    SCRUTINIZER = "scrutinizer"


# ─── Repository Models ────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class RepositoryReference:
    """A repository on a known hosting provider."""

    provider: Provider
    owner: str
    project: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.project}"


# ─── Query Models ─────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ServiceQuery:
    """The badge URL a single service is queried at."""

    service: ServiceId
    url: str


@dataclass(frozen=True, slots=True)
class QueryOutcome:
    """Settled result of one dispatched coverage query.

    ``url`` is None when the service does not cover the repository's
    provider, in which case no request was made. ``settled_order`` is the
    position at which the query finished relative to its siblings.
    """

    service: str
    url: str | None = None
    coverage: float | None = None
    error: CoverageFetchError | None = None
    settled_order: int = 0

    @property
    def determinate(self) -> bool:
        """True when a service was contacted and gave an answer (value or none)."""
        return self.url is not None and self.error is None
