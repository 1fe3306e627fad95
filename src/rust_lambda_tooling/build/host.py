"""Run the build command on this machine."""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Mapping

from rust_lambda_tooling.build.command import dialect_for
from rust_lambda_tooling.build.strategy import HostPlan
from rust_lambda_tooling.errors import BuildFailure


def shell_invocation(command: str, target_platform: str) -> list[str] | str:
    """argv for subprocess.run. win32 gets a plain string so cmd.exe sees the quoting untouched."""
    dialect = dialect_for(target_platform)
    if dialect.verbatim:
        return " ".join([*dialect.prefix, command])
    return [*dialect.prefix, command]


def run_on_host(
    command: str,
    environment: Mapping[str, str] | None,
    cwd: str,
    target_platform: str = sys.platform,
) -> None:
    """Run command synchronously with environment merged over os.environ. Raises BuildFailure on nonzero exit."""
    env = {**os.environ, **(environment or {})}
    r = subprocess.run(
        shell_invocation(command, target_platform),
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
    )
    if r.returncode != 0:
        stderr = (r.stderr or "").strip()
        if stderr:
            print(stderr, file=sys.stderr)
        print("💥 Run `cargo lambda` errored.", file=sys.stderr)
        msg = f"cargo lambda exited with status {r.returncode}"
        raise BuildFailure(msg, returncode=r.returncode, stderr=stderr)


def run_host_plan(plan: HostPlan) -> None:
    run_on_host(plan.command, plan.environment, plan.cwd, plan.target_platform)
