"""get_coverage tool -- resolve a repository's coverage from badge services."""

from __future__ import annotations

from mcp.server.fastmcp import Context

from repo_coverage.errors import AggregateCoverageError, InvalidOptionsError
from repo_coverage.options import resolve_options


async def get_coverage(
    repository_url: str,
    ctx: Context,
    branch: str | None = None,
    services: list[str] | None = None,
    timeout_seconds: float | None = None,
) -> dict[str, object]:
    """Look up the test coverage of a repository.

    Queries codecov, coveralls, codeclimate and scrutinizer badges in
    parallel and returns the first coverage found, in service order.

    Args:
        repository_url: Repository URL, e.g. "https://github.com/owner/repo",
            "git@bitbucket.org:owner/repo.git" or "gitlab:group/repo".
        branch: Branch to report coverage for. Ignored by codeclimate.
        services: Services to try, in order of preference.
        timeout_seconds: Per-request timeout.

    Returns:
        Dict with: success, coverage (fraction in [0, 1] or null) and
        percent, or an error message and the per-service errors.
    """
    app_ctx = ctx.request_context.lifespan_context
    try:
        options = resolve_options(
            {"branch": branch, "services": services, "timeout": timeout_seconds},
            base=app_ctx.default_options,
        )
    except InvalidOptionsError as exc:
        return {"success": False, "error": str(exc)}

    try:
        coverage = await app_ctx.resolver.fetch(repository_url, options)
    except AggregateCoverageError as exc:
        await ctx.error(f"Coverage lookup failed for {repository_url}: {exc}")
        return {
            "success": False,
            "repository_url": repository_url,
            "error": str(exc),
            "errors": [str(err) for err in exc.errors],
        }
    except Exception as exc:
        await ctx.error(f"Unexpected error in get_coverage: {exc}")
        return {"success": False, "error": f"Internal error: {type(exc).__name__}"}

    return {
        "success": True,
        "repository_url": repository_url,
        "coverage": coverage,
        "percent": round(coverage * 100) if coverage is not None else None,
    }
