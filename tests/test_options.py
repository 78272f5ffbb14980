"""Tests for resolution options (options.py)."""

from __future__ import annotations

import pytest

from repo_coverage.errors import InvalidOptionsError
from repo_coverage.options import (
    DEFAULT_OPTIONS,
    CoverageOptions,
    coverage_badge_url,
    options_from_env,
    resolve_options,
)


class TestDefaults:
    def test_documented_defaults(self) -> None:
        assert DEFAULT_OPTIONS.branch is None
        assert DEFAULT_OPTIONS.badges is None
        assert DEFAULT_OPTIONS.services == ("codecov", "coveralls", "codeclimate", "scrutinizer")
        assert DEFAULT_OPTIONS.timeout == 15.0
        assert DEFAULT_OPTIONS.badge_host == "https://img.shields.io"

    def test_none_returns_defaults(self) -> None:
        assert resolve_options(None) is DEFAULT_OPTIONS


class TestResolveOptions:
    def test_overrides_field_by_field(self) -> None:
        opts = resolve_options({"branch": "dev", "timeout": 5})
        assert opts.branch == "dev"
        assert opts.timeout == 5.0
        assert opts.services == DEFAULT_OPTIONS.services

    def test_none_values_keep_base(self) -> None:
        base = CoverageOptions(timeout=3.0, services=("coveralls",))
        opts = resolve_options({"timeout": None, "services": None, "branch": "x"}, base=base)
        assert opts.timeout == 3.0
        assert opts.services == ("coveralls",)
        assert opts.branch == "x"

    def test_options_instance_passes_through(self) -> None:
        opts = CoverageOptions(branch="main")
        assert resolve_options(opts) is opts

    def test_services_list(self) -> None:
        opts = resolve_options({"services": ["coveralls", "codeclimate"]})
        assert opts.services == ("coveralls", "codeclimate")

    def test_services_comma_separated(self) -> None:
        opts = resolve_options({"services": "coveralls, codecov,"})
        assert opts.services == ("coveralls", "codecov")

    def test_badges_become_tuple(self) -> None:
        badge = {"info": {"type": "coverage"}, "urls": {"content": "https://x/y.json"}}
        opts = resolve_options({"badges": [badge]})
        assert opts.badges == (badge,)

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(InvalidOptionsError, match="got"):
            resolve_options({"got": {"timeout": 15000}})

    @pytest.mark.parametrize("timeout", [0, -1, "soon", True])
    def test_invalid_timeout_rejected(self, timeout: object) -> None:
        with pytest.raises(InvalidOptionsError):
            resolve_options({"timeout": timeout})

    def test_empty_branch_rejected(self) -> None:
        with pytest.raises(InvalidOptionsError):
            resolve_options({"branch": "  "})

    def test_invalid_options_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            resolve_options({"services": 42})


class TestOptionsFromEnv:
    def test_reads_prefixed_variables(self) -> None:
        opts = options_from_env(
            {
                "REPO_COVERAGE_TIMEOUT": "2.5",
                "REPO_COVERAGE_SERVICES": "coveralls,scrutinizer",
                "REPO_COVERAGE_BADGE_HOST": "https://shields.internal",
            }
        )
        assert opts.timeout == 2.5
        assert opts.services == ("coveralls", "scrutinizer")
        assert opts.badge_host == "https://shields.internal"

    def test_empty_environment_gives_defaults(self) -> None:
        assert options_from_env({"REPO_COVERAGE_TIMEOUT": ""}) == DEFAULT_OPTIONS


class TestCoverageBadgeUrl:
    def test_first_coverage_badge_wins(self) -> None:
        badges = [
            {"info": {"type": "build"}, "urls": {"content": "https://build.json"}},
            {"info": {"type": "coverage"}, "urls": {"content": "https://first.json"}},
            {"info": {"type": "coverage"}, "urls": {"content": "https://second.json"}},
        ]
        assert coverage_badge_url(badges) == "https://first.json"

    def test_no_coverage_badge(self) -> None:
        assert coverage_badge_url([{"info": {"type": "version"}, "urls": {}}]) is None

    def test_none_and_empty(self) -> None:
        assert coverage_badge_url(None) is None
        assert coverage_badge_url([]) is None

    def test_malformed_entries_skipped(self) -> None:
        badges = [{"urls": {"content": "https://x.json"}}, {"info": "coverage"}]
        assert coverage_badge_url(badges) is None

    def test_non_mapping_entries_skipped(self) -> None:
        badges = [
            None,
            "x",
            42,
            {"info": {"type": "coverage"}, "urls": {"content": "https://valid.json"}},
        ]
        assert coverage_badge_url(badges) == "https://valid.json"
