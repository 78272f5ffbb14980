"""MCP server that reports test coverage for source repositories."""

from __future__ import annotations

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from repo_coverage.options import CoverageOptions, options_from_env
from repo_coverage.resolver import CoverageResolver
from repo_coverage.services.shields import DefaultBadgeFetcher
from repo_coverage.tools.coverage import get_coverage


@dataclass(frozen=True, slots=True)
class AppContext:
    """Shared state across all tool invocations."""

    http_client: httpx.AsyncClient
    resolver: CoverageResolver
    default_options: CoverageOptions


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[AppContext]:
    """Manage shared adapter lifecycle -- the composition root."""
    default_options = options_from_env(os.environ)
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(default_options.timeout),
        follow_redirects=True,
        limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
    ) as http_client:
        resolver = CoverageResolver(badges=DefaultBadgeFetcher(http_client))

        yield AppContext(
            http_client=http_client,
            resolver=resolver,
            default_options=default_options,
        )


mcp = FastMCP(
    "repo-coverage",
    instructions=(
        "repo-coverage looks up the test coverage of a GitHub, Bitbucket or GitLab "
        "repository by asking coverage badge services (codecov, coveralls, "
        "codeclimate, scrutinizer) through shields.io.\n\n"
        "Call get_coverage with the repository URL. A null coverage means no "
        "service reports coverage for the repository; it is not an error."
    ),
    lifespan=app_lifespan,
)

mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(get_coverage)
