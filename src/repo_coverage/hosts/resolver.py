"""Map a raw repository URL to a known provider, or report it as unsupported."""

from __future__ import annotations

import logging

from repo_coverage.hosts.base import GitUrlParserPort
from repo_coverage.hosts.parser import DefaultGitUrlParser
from repo_coverage.models import RepositoryReference

logger = logging.getLogger(__name__)

_default_parser = DefaultGitUrlParser()


def resolve_repository(
    repository_url: str,
    parser: GitUrlParserPort | None = None,
) -> RepositoryReference | None:
    """Resolve a repository URL to a RepositoryReference.

    Parser failures and unrecognized hosts both yield None: an unsupported
    repository is an outcome, not an error.
    """
    parser = parser or _default_parser
    try:
        ref = parser.parse(repository_url)
    except Exception as exc:
        logger.debug("Could not parse repository URL %r: %s", repository_url, exc)
        return None

    if ref is None:
        logger.debug("Unsupported repository URL %r", repository_url)
    return ref
