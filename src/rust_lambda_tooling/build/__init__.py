"""cargo lambda bundling: availability probe, strategy selection, command building, host runs."""

from .bundling import (
    BUNDLING_INPUT_DIR,
    BUNDLING_OUTPUT_DIR,
    Bundling,
    BundlingProps,
    bundle,
)
from .command import (
    CONTAINER_PLATFORM,
    BuildRequest,
    create_build_command,
    shell_prefix,
)
from .host import run_on_host
from .probe import TOOL_AVAILABILITY, ToolAvailability, ToolAvailabilityCache, probe
from .strategy import ContainerPlan, ExecutionPlan, HostPlan, Strategy, select_strategy
from .targets import ARCH_TARGETS, normalize_arch, resolve_target

__all__ = [
    "ARCH_TARGETS",
    "BUNDLING_INPUT_DIR",
    "BUNDLING_OUTPUT_DIR",
    "CONTAINER_PLATFORM",
    "TOOL_AVAILABILITY",
    "BuildRequest",
    "Bundling",
    "BundlingProps",
    "ContainerPlan",
    "ExecutionPlan",
    "HostPlan",
    "Strategy",
    "ToolAvailability",
    "ToolAvailabilityCache",
    "bundle",
    "create_build_command",
    "normalize_arch",
    "probe",
    "resolve_target",
    "run_on_host",
    "select_strategy",
    "shell_prefix",
]
