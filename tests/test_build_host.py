"""Tests for rust_lambda_tooling.build.host (running cargo lambda on this machine)."""

import os
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from rust_lambda_tooling.build.host import run_host_plan, run_on_host, shell_invocation
from rust_lambda_tooling.build.strategy import HostPlan
from rust_lambda_tooling.errors import BuildFailure

RUN = "rust_lambda_tooling.build.host.subprocess.run"
COMMAND = "cargo lambda build --release --target x86_64-unknown-linux-gnu --lambda-dir /out"


class TestShellInvocation:
    def test_posix_is_argv(self) -> None:
        assert shell_invocation(COMMAND, "linux") == ["bash", "-c", COMMAND]

    def test_win32_is_verbatim_string(self) -> None:
        assert shell_invocation(COMMAND, "win32") == f"cmd /c {COMMAND}"


class TestRunOnHost:
    def test_success_runs_in_cwd_with_merged_env(self, tmp_path: Path) -> None:
        with patch(RUN) as m:
            m.return_value = MagicMock(returncode=0, stdout="", stderr="")
            result = run_on_host(
                COMMAND, {"RUSTFLAGS": "-C strip=symbols"}, str(tmp_path), "linux"
            )
        assert result is None
        (argv,) = m.call_args[0]
        kwargs = m.call_args[1]
        assert argv == ["bash", "-c", COMMAND]
        assert kwargs["cwd"] == str(tmp_path)
        assert kwargs["env"]["RUSTFLAGS"] == "-C strip=symbols"
        assert set(os.environ) <= set(kwargs["env"])

    def test_overrides_win_over_process_env(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {"CARGO_PROFILE": "dev"}), patch(RUN) as m:
            m.return_value = MagicMock(returncode=0, stdout="", stderr="")
            run_on_host(COMMAND, {"CARGO_PROFILE": "release"}, str(tmp_path), "linux")
        assert m.call_args[1]["env"]["CARGO_PROFILE"] == "release"

    def test_nonzero_exit_raises_build_failure(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with patch(RUN) as m:
            m.return_value = MagicMock(
                returncode=101, stdout="", stderr="error: could not compile `handler`\n"
            )
            with pytest.raises(BuildFailure) as exc_info:
                run_on_host(COMMAND, None, str(tmp_path), "linux")
        assert exc_info.value.returncode == 101
        assert "could not compile" in exc_info.value.stderr
        err = capsys.readouterr().err
        assert "error: could not compile `handler`" in err
        assert "errored" in err

    def test_run_host_plan_uses_plan_platform(self, tmp_path: Path) -> None:
        plan = HostPlan(command=COMMAND, cwd=str(tmp_path), target_platform="win32")
        with patch(RUN) as m:
            m.return_value = MagicMock(returncode=0, stdout="", stderr="")
            run_host_plan(plan)
        (argv,) = m.call_args[0]
        assert argv == f"cmd /c {COMMAND}"
