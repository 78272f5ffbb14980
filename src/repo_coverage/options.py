"""Resolution options: documented defaults plus field-by-field overrides.

Defaults:
    branch      None -- query the services' default branch
    badges      None -- no pre-resolved badge list
    services    codecov, coveralls, codeclimate, scrutinizer (in that order)
    timeout     15 seconds per request
    badge_host  https://img.shields.io
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, fields, replace

from repo_coverage.errors import InvalidOptionsError
from repo_coverage.models import ServiceId
from repo_coverage.services.urls import DEFAULT_BADGE_HOST

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 15.0
DEFAULT_SERVICES: tuple[str, ...] = (
    ServiceId.CODECOV,
    ServiceId.COVERALLS,
    ServiceId.CODECLIMATE,
    ServiceId.SCRUTINIZER,
)

_ENV_PREFIX = "REPO_COVERAGE_"


@dataclass(frozen=True, slots=True)
class CoverageOptions:
    """Options for a single coverage resolution."""

    branch: str | None = None
    badges: tuple[Mapping[str, object], ...] | None = None
    services: tuple[str, ...] = DEFAULT_SERVICES
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    badge_host: str = DEFAULT_BADGE_HOST


DEFAULT_OPTIONS = CoverageOptions()

_OPTION_NAMES = frozenset(f.name for f in fields(CoverageOptions))


def resolve_options(
    overrides: Mapping[str, object] | CoverageOptions | None = None,
    *,
    base: CoverageOptions = DEFAULT_OPTIONS,
) -> CoverageOptions:
    """Merge caller-supplied options over ``base`` one field at a time.

    Keys whose value is None keep the base value. Unknown keys and
    invalid values raise InvalidOptionsError.
    """
    if overrides is None:
        return base
    if isinstance(overrides, CoverageOptions):
        return overrides

    unknown = set(overrides) - _OPTION_NAMES
    if unknown:
        raise InvalidOptionsError(f"Unknown coverage option(s): {', '.join(sorted(unknown))}")

    changes: dict[str, object] = {}
    for name, value in overrides.items():
        if value is None:
            continue
        changes[name] = _normalize(name, value)

    return replace(base, **changes)


def options_from_env(environ: Mapping[str, str]) -> CoverageOptions:
    """Build default options from ``REPO_COVERAGE_*`` environment variables.

    Recognized: REPO_COVERAGE_TIMEOUT, REPO_COVERAGE_SERVICES (comma separated),
    REPO_COVERAGE_BADGE_HOST. Empty values are ignored.
    """
    overrides: dict[str, object] = {}
    for name in ("timeout", "services", "badge_host"):
        raw = environ.get(f"{_ENV_PREFIX}{name.upper()}", "").strip()
        if raw:
            overrides[name] = raw
    if overrides:
        logger.info("Coverage options from environment: %s", ", ".join(sorted(overrides)))
    return resolve_options(overrides)


def coverage_badge_url(badges: Sequence[Mapping[str, object]] | None) -> str | None:
    """Return the content URL of the first coverage badge, if any.

    Badge descriptors look like ``{"info": {"type": "coverage", ...},
    "urls": {"content": "https://img.shields.io/...json", ...}}``.
    Entries missing either part are skipped.
    """
    for badge in badges or ():
        if not isinstance(badge, Mapping):
            continue
        info = badge.get("info")
        if not isinstance(info, Mapping) or info.get("type") != "coverage":
            continue
        urls = badge.get("urls")
        content = urls.get("content") if isinstance(urls, Mapping) else None
        if isinstance(content, str) and content:
            return content
        return None
    return None


# ─── Field normalization ──────────────────────────────────────


def _normalize(name: str, value: object) -> object:
    match name:
        case "timeout":
            return _normalize_timeout(value)
        case "services":
            return _normalize_services(value)
        case "badges":
            if not isinstance(value, Sequence) or isinstance(value, str):
                raise InvalidOptionsError("badges must be a list of badge descriptors.")
            return tuple(value)
        case "branch" | "badge_host":
            if not isinstance(value, str) or not value.strip():
                raise InvalidOptionsError(f"{name} must be a non-empty string.")
            return value.strip()
    return value


def _normalize_timeout(value: object) -> float:
    if isinstance(value, bool):
        raise InvalidOptionsError("timeout must be a number of seconds.")
    try:
        timeout = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise InvalidOptionsError(f"timeout must be a number of seconds, got {value!r}.") from exc
    if timeout <= 0:
        raise InvalidOptionsError(f"timeout must be positive, got {timeout}.")
    return timeout


def _normalize_services(value: object) -> tuple[str, ...]:
    if isinstance(value, str):
        return tuple(s.strip() for s in value.split(",") if s.strip())
    if isinstance(value, Sequence):
        return tuple(str(s) for s in value)
    raise InvalidOptionsError("services must be a list or a comma-separated string.")
