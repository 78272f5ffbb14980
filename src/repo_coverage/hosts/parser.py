"""Parse git repository URLs for the hosting providers badge services know about."""

from __future__ import annotations

import re
from urllib.parse import unquote, urlsplit

from repo_coverage.models import Provider, RepositoryReference

_HOSTS: dict[str, Provider] = {
    "github.com": Provider.GITHUB,
    "bitbucket.org": Provider.BITBUCKET,
    "gitlab.com": Provider.GITLAB,
}

_URL_SCHEMES = frozenset({"http", "https", "git", "ssh", "git+ssh", "git+http", "git+https"})

# github:owner/project, gitlab:group/project, ...
_PROVIDER_SHORTHAND_RE = re.compile(r"^(github|bitbucket|gitlab):(?!//)(.+)$", re.IGNORECASE)

# git@github.com:owner/project.git
_SCP_RE = re.compile(r"^(?:[^@/:\s]+@)?(?P<host>[^@/:\s]+):(?P<path>[^/].*)$")

# owner/project
_BARE_SHORTHAND_RE = re.compile(r"^[^/:@\s]+/[^/:@\s]+$")

_SEGMENT_RE = re.compile(r"^[A-Za-z0-9_.-]+$")
_BAD_PERCENT_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class DefaultGitUrlParser:
    """Adapter for GitUrlParserPort -- stateless."""

    def parse(self, url: str) -> RepositoryReference | None:
        """Parse a repository URL into a RepositoryReference."""
        return parse_git_url(url)


def parse_git_url(url: str) -> RepositoryReference | None:
    """Parse a repository URL into a RepositoryReference.

    Handles:
    - git@github.com:owner/project.git
    - https://github.com/owner/project, git://..., git+ssh://git@..., ssh://...
    - github:owner/project, bitbucket:owner/project, gitlab:group/project
    - owner/project (GitHub)

    Returns None if the host is not GitHub, Bitbucket or GitLab, or the
    path is not a repository path. Raises ValueError on malformed
    percent-encoding.
    """
    raw = url.strip().split("#", 1)[0]
    if not raw:
        return None

    m = _PROVIDER_SHORTHAND_RE.match(raw)
    if m:
        return _from_path(Provider(m.group(1).lower()), m.group(2))

    if "://" in raw:
        parts = urlsplit(raw)
        if parts.scheme.lower() not in _URL_SCHEMES:
            return None
        provider = _provider_for_host(parts.hostname or "")
        if provider is None:
            return None
        return _from_path(provider, parts.path)

    m = _SCP_RE.match(raw)
    if m:
        provider = _provider_for_host(m.group("host"))
        if provider is None:
            return None
        return _from_path(provider, m.group("path"))

    if _BARE_SHORTHAND_RE.match(raw):
        return _from_path(Provider.GITHUB, raw)

    return None


def _provider_for_host(host: str) -> Provider | None:
    host = host.lower()
    if host.startswith("www."):
        host = host[len("www.") :]
    return _HOSTS.get(host)


def _from_path(provider: Provider, path: str) -> RepositoryReference | None:
    """Split ``owner/project`` out of a URL path.

    GitLab paths may carry nested groups, which become part of the owner.
    """
    if _BAD_PERCENT_ESCAPE_RE.search(path):
        raise ValueError(f"Malformed percent-encoding in repository path '{path}'")

    path = unquote(path).strip("/")
    path = path.removesuffix(".git")
    segments = path.split("/")

    if provider is Provider.GITLAB:
        if len(segments) < 2:
            return None
    elif len(segments) != 2:
        return None

    if not all(_is_valid_segment(s) for s in segments):
        return None

    return RepositoryReference(
        provider=provider,
        owner="/".join(segments[:-1]),
        project=segments[-1],
    )


def _is_valid_segment(segment: str) -> bool:
    return bool(_SEGMENT_RE.match(segment)) and segment not in (".", "..")
