"""Tests for rust_lambda_tooling.build.probe (cargo lambda availability and its cache)."""

from unittest.mock import MagicMock, patch

import pytest

from rust_lambda_tooling.build.probe import (
    TOOL_AVAILABILITY,
    ToolAvailability,
    ToolAvailabilityCache,
    get_cargo_lambda_version,
    probe,
)
from rust_lambda_tooling.errors import EnvironmentProbeFailure

RUN = "rust_lambda_tooling.build.probe.subprocess.run"


class TestProbe:
    def test_available_when_version_is_recent(self) -> None:
        with patch(RUN) as m:
            m.return_value = MagicMock(
                returncode=0, stdout="cargo-lambda 1.2.1 (d3b9a8f 2024-04-10Z)\n", stderr=""
            )
            assert probe() is ToolAvailability.AVAILABLE
        (cmd,) = m.call_args[0]
        assert cmd == ["cargo", "lambda", "--version"]

    def test_unavailable_when_cargo_missing(self) -> None:
        with patch(RUN, side_effect=FileNotFoundError("cargo")):
            assert probe() is ToolAvailability.UNAVAILABLE

    def test_unavailable_on_nonzero_exit(self) -> None:
        with patch(RUN) as m:
            m.return_value = MagicMock(
                returncode=101, stdout="", stderr="error: no such command: `lambda`"
            )
            assert probe() is ToolAvailability.UNAVAILABLE

    def test_unavailable_on_unparsable_output(self) -> None:
        with patch(RUN) as m:
            m.return_value = MagicMock(returncode=0, stdout="cargo-lambda dev build", stderr="")
            assert probe() is ToolAvailability.UNAVAILABLE

    def test_unavailable_when_older_than_minimum(self) -> None:
        with patch(RUN) as m:
            m.return_value = MagicMock(returncode=0, stdout="cargo-lambda 0.10.0", stderr="")
            assert probe(min_version="0.17.0") is ToolAvailability.UNAVAILABLE

    def test_get_version_raises_probe_failure(self) -> None:
        with (
            patch(RUN, side_effect=PermissionError("denied")),
            pytest.raises(EnvironmentProbeFailure, match="not runnable"),
        ):
            get_cargo_lambda_version()


class TestToolAvailabilityCache:
    def test_unknown_until_resolved(self) -> None:
        cache = ToolAvailabilityCache(probe_fn=lambda: ToolAvailability.AVAILABLE)
        assert cache.value is ToolAvailability.UNKNOWN
        assert cache.resolve() is ToolAvailability.AVAILABLE
        assert cache.value is ToolAvailability.AVAILABLE

    def test_probes_once_and_never_changes(self) -> None:
        answers = iter([ToolAvailability.UNAVAILABLE, ToolAvailability.AVAILABLE])
        calls = []

        def fake_probe() -> ToolAvailability:
            calls.append(1)
            return next(answers)

        cache = ToolAvailabilityCache(probe_fn=fake_probe)
        assert cache.resolve() is ToolAvailability.UNAVAILABLE
        assert cache.resolve() is ToolAvailability.UNAVAILABLE
        assert cache.resolve() is ToolAvailability.UNAVAILABLE
        assert len(calls) == 1

    def test_reset_allows_a_new_probe(self) -> None:
        cache = ToolAvailabilityCache(probe_fn=lambda: ToolAvailability.UNAVAILABLE)
        assert cache.resolve() is ToolAvailability.UNAVAILABLE
        cache.reset(probe_fn=lambda: ToolAvailability.AVAILABLE)
        assert cache.value is ToolAvailability.UNKNOWN
        assert cache.resolve() is ToolAvailability.AVAILABLE

    def test_process_cache_uses_module_probe(self) -> None:
        with patch(
            "rust_lambda_tooling.build.probe.probe", return_value=ToolAvailability.AVAILABLE
        ) as m:
            assert TOOL_AVAILABILITY.resolve() is ToolAvailability.AVAILABLE
            assert TOOL_AVAILABILITY.resolve() is ToolAvailability.AVAILABLE
        assert m.call_count == 1

    def test_process_cache_ignores_later_host_changes(self) -> None:
        with patch(RUN, side_effect=FileNotFoundError("cargo")):
            assert TOOL_AVAILABILITY.resolve() is ToolAvailability.UNAVAILABLE
        with patch(RUN) as m:
            m.return_value = MagicMock(returncode=0, stdout="cargo-lambda 1.2.1", stderr="")
            assert TOOL_AVAILABILITY.resolve() is ToolAvailability.UNAVAILABLE
        assert not m.called
