"""Port: git repository URL parsing."""

from __future__ import annotations

from typing import Protocol

from repo_coverage.models import RepositoryReference


class GitUrlParserPort(Protocol):
    """Port for turning a raw repository URL into a provider/owner/project triple."""

    def parse(self, url: str) -> RepositoryReference | None:
        """Parse a repository URL.

        Returns None when the host is not a known provider. May raise
        ValueError on malformed input.
        """
        ...
