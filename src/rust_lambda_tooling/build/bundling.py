"""Bundle a Rust Lambda function: cargo lambda on the host when possible, else in Docker.

Bundling(props) resolves the cached cargo lambda probe once, selects a strategy and
prepares both execution plans. execute(out_dir) runs the selected one; a host plan
re-checks availability first and falls back to the container plan when cargo
lambda is known to be missing. A failed host build is not retried in Docker.

bundle(props, staging_dir) wraps execute() with asset hashing and staging.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from rust_lambda_tooling.asset.staging import (
    AssetHashType,
    BundledAsset,
    asset_path,
    custom_hash,
    discard,
    is_staged,
    make_temp_output,
    output_hash,
    publish,
    source_hash,
)
from rust_lambda_tooling.build.command import CONTAINER_PLATFORM, create_build_command
from rust_lambda_tooling.build.host import run_host_plan
from rust_lambda_tooling.build.probe import (
    TOOL_AVAILABILITY,
    ToolAvailability,
    ToolAvailabilityCache,
)
from rust_lambda_tooling.build.strategy import (
    ContainerPlan,
    ExecutionPlan,
    HostPlan,
    Strategy,
    select_strategy,
)
from rust_lambda_tooling.docker.image import PLACEHOLDER_IMAGE, DockerImage
from rust_lambda_tooling.docker.run import run_container_plan
from rust_lambda_tooling.errors import ToolUnavailable

log = logging.getLogger(__name__)

BUNDLING_INPUT_DIR = "/asset-input"
BUNDLING_OUTPUT_DIR = "/asset-output"
BUNDLING_USER = "root"


@dataclass(frozen=True)
class BundlingProps:
    entry: Path
    target: str
    bin: str | None = None
    build_environment: Mapping[str, str] = field(default_factory=dict)
    forced_docker_bundling: bool = False
    asset_hash_type: AssetHashType = AssetHashType.SOURCE
    asset_hash: str | None = None
    # IMAGE build arg of the bundling Dockerfile; None keeps the Dockerfile default.
    docker_image: str | None = None


class Bundling:
    def __init__(
        self,
        props: BundlingProps,
        *,
        availability: ToolAvailabilityCache = TOOL_AVAILABILITY,
        host_platform: str = sys.platform,
    ) -> None:
        self.props = props
        self.host_platform = host_platform
        self._availability = availability
        self.strategy = select_strategy(props.forced_docker_bundling, availability.resolve())

        self.image = (
            self._build_image()
            if self.strategy is Strategy.RUN_IN_CONTAINER
            else DockerImage.from_registry(PLACEHOLDER_IMAGE)
        )
        self.command = (
            "bash",
            "-c",
            create_build_command(
                BUNDLING_INPUT_DIR,
                props.target,
                BUNDLING_OUTPUT_DIR,
                CONTAINER_PLATFORM,
                bin=props.bin,
            ),
        )
        self.environment = dict(props.build_environment)
        self.user = BUNDLING_USER

    def _build_image(self) -> DockerImage:
        build_args = {"IMAGE": self.props.docker_image} if self.props.docker_image else None
        return DockerImage.from_build(build_args=build_args)

    def container_plan(self) -> ContainerPlan:
        image = self.image if self.image.image != PLACEHOLDER_IMAGE else self._build_image()
        return ContainerPlan(
            image=image,
            command=self.command,
            input_dir=BUNDLING_INPUT_DIR,
            output_dir=BUNDLING_OUTPUT_DIR,
            user=self.user,
            environment=self.environment,
        )

    def host_plan(self, out_dir: str) -> HostPlan:
        """Raises ConfigurationError when the host platform has no supported shell."""
        command = create_build_command(
            str(self.props.entry),
            self.props.target,
            out_dir,
            self.host_platform,
            bin=self.props.bin,
        )
        return HostPlan(
            command=command,
            cwd=str(self.props.entry),
            target_platform=self.host_platform,
            environment=self.environment,
        )

    def plan(self, out_dir: str) -> ExecutionPlan:
        if self.strategy is Strategy.RUN_ON_HOST:
            return self.host_plan(out_dir)
        return self.container_plan()

    def try_bundle(self, out_dir: str) -> bool:
        """Build on the host. False (nothing run) when forced to Docker or cargo lambda is unavailable."""
        if self.props.forced_docker_bundling:
            return False
        try:
            self._require_cargo_lambda()
        except ToolUnavailable as e:
            sys.stderr.write(f"{e}\n")
            return False
        plan = self.host_plan(out_dir)
        print(f"🔨 BUNDLING...: {out_dir}")
        print(f"Running: {plan.command}")
        run_host_plan(plan)
        return True

    def _require_cargo_lambda(self) -> None:
        if self._availability.resolve() is not ToolAvailability.AVAILABLE:
            msg = "cargo lambda cannot run locally. Switching to Docker bundling."
            raise ToolUnavailable(msg)

    def execute(self, out_dir: Path) -> ExecutionPlan:
        """Run the selected plan into out_dir and return the plan that actually ran."""
        if self.strategy is Strategy.RUN_ON_HOST and self.try_bundle(str(out_dir)):
            return self.host_plan(str(out_dir))
        plan = self.container_plan()
        run_container_plan(plan, self.props.entry, out_dir)
        return plan


def _hash_options(props: BundlingProps) -> dict[str, object]:
    return {
        "target": props.target,
        "bin": props.bin,
        "build_environment": dict(props.build_environment),
    }


def _staging_exclude(entry: Path, staging_dir: Path) -> list[str]:
    """Entry-relative path of staging_dir when it sits inside the crate; nothing otherwise."""
    try:
        rel = staging_dir.resolve().relative_to(entry.resolve())
    except ValueError:
        return []
    return [rel.as_posix()] if rel.parts else []


def bundle(
    props: BundlingProps,
    staging_dir: Path,
    *,
    availability: ToolAvailabilityCache = TOOL_AVAILABILITY,
    host_platform: str = sys.platform,
) -> BundledAsset:
    """Bundle props.entry into staging_dir/asset.<hash>. All-or-nothing: failures leave no asset behind."""
    hash_type = props.asset_hash_type
    known_hash: str | None = None
    if hash_type is AssetHashType.SOURCE:
        skip = _staging_exclude(props.entry, staging_dir)
        known_hash = source_hash(props.entry, _hash_options(props), skip=skip)
    elif hash_type is AssetHashType.CUSTOM:
        known_hash = custom_hash(props.asset_hash)

    if known_hash is not None:
        target = asset_path(staging_dir, known_hash)
        if is_staged(target):
            print(f"✅ Up to date: {target}")
            log.debug("Skipping build, %s already staged", target)
            return BundledAsset(known_hash, target, hash_type, skipped=True)

    bundling = Bundling(props, availability=availability, host_platform=host_platform)
    temp_dir = make_temp_output(staging_dir)
    try:
        bundling.execute(temp_dir)
        if not is_staged(temp_dir):
            log.warning("Bundling produced no files in %s", temp_dir)
        final_hash = known_hash if known_hash is not None else output_hash(temp_dir)
        path = publish(temp_dir, asset_path(staging_dir, final_hash))
    except BaseException:
        discard(temp_dir)
        raise
    print(f"✅ Bundled: {path}")
    return BundledAsset(final_hash, path, hash_type)
