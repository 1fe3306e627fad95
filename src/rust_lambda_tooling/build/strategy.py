"""Host vs container selection and the resolved execution plans."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from rust_lambda_tooling.build.probe import ToolAvailability

if TYPE_CHECKING:
    from rust_lambda_tooling.docker.image import DockerImage


class Strategy(Enum):
    RUN_ON_HOST = "host"
    RUN_IN_CONTAINER = "container"


def select_strategy(force_container: bool, availability: ToolAvailability) -> Strategy:
    """Container when forced or when cargo lambda is not known to be available; host otherwise."""
    if force_container or availability is not ToolAvailability.AVAILABLE:
        return Strategy.RUN_IN_CONTAINER
    return Strategy.RUN_ON_HOST


@dataclass(frozen=True)
class HostPlan:
    """Run `command` through the target_platform shell in `cwd` on this machine."""

    command: str
    cwd: str
    target_platform: str
    environment: Mapping[str, str] = field(default_factory=dict)

    @property
    def strategy(self) -> Strategy:
        return Strategy.RUN_ON_HOST


@dataclass(frozen=True)
class ContainerPlan:
    """Run `command` inside `image` as `user`, with entry mounted at input_dir and output at output_dir."""

    image: DockerImage
    command: tuple[str, ...]
    input_dir: str
    output_dir: str
    user: str = "root"
    environment: Mapping[str, str] = field(default_factory=dict)

    @property
    def strategy(self) -> Strategy:
        return Strategy.RUN_IN_CONTAINER


ExecutionPlan = HostPlan | ContainerPlan
