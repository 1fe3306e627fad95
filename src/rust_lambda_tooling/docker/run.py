"""Run a ContainerPlan with docker: entry mounted read side, staging dir mounted as the output."""

from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from rust_lambda_tooling.errors import BuildFailure

if TYPE_CHECKING:
    from rust_lambda_tooling.build.strategy import ContainerPlan

log = logging.getLogger(__name__)


def docker_run_args(plan: ContainerPlan, entry: Path, out_dir: Path) -> list[str]:
    cmd = [
        "docker",
        "run",
        "--rm",
        "-u",
        plan.user,
        "-v",
        f"{entry.resolve()}:{plan.input_dir}:delegated",
        "-v",
        f"{out_dir.resolve()}:{plan.output_dir}:delegated",
        "-w",
        plan.input_dir,
    ]
    for k, v in plan.environment.items():
        cmd += ["-e", f"{k}={v}"]
    cmd.append(plan.image.image)
    cmd.extend(plan.command)
    return cmd


def run_container_plan(plan: ContainerPlan, entry: Path, out_dir: Path) -> None:
    """Build the image if needed and run the in-container command. Raises BuildFailure on nonzero exit."""
    plan.image.ensure_built()
    out_dir.mkdir(parents=True, exist_ok=True)
    cmd = docker_run_args(plan, entry, out_dir)
    print(f"📦 Bundling in container {plan.image.image}...")
    log.debug("Running: %s", " ".join(cmd))
    r = subprocess.run(cmd)
    if r.returncode != 0:
        print("💥 Docker bundling errored.", file=sys.stderr)
        msg = f"docker run exited with status {r.returncode}"
        raise BuildFailure(msg, returncode=r.returncode)
