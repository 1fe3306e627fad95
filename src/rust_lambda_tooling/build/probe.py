"""cargo lambda availability probe with a process-wide cache.

The cache is written at most once per process: the first caller that needs the
answer runs ``cargo lambda --version`` and stores AVAILABLE or UNAVAILABLE.
Every later caller reads the stored value, even if the host changes meanwhile.
``reset()`` exists for test isolation only.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from enum import Enum

from rust_lambda_tooling.errors import EnvironmentProbeFailure
from rust_lambda_tooling.helpers import compare_versions, extract_version

log = logging.getLogger(__name__)

MIN_CARGO_LAMBDA_VERSION = "0.17.0"
VERSION_COMMAND = ["cargo", "lambda", "--version"]


class ToolAvailability(Enum):
    UNKNOWN = "unknown"
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


def get_cargo_lambda_version() -> str:
    """Run `cargo lambda --version` and return the parsed version. Raises EnvironmentProbeFailure."""
    try:
        r = subprocess.run(VERSION_COMMAND, capture_output=True, text=True)
    except OSError as e:
        msg = f"cargo lambda not runnable: {e}"
        raise EnvironmentProbeFailure(msg) from e
    if r.returncode != 0:
        msg = f"cargo lambda --version exited {r.returncode}: {(r.stderr or '').strip()}"
        raise EnvironmentProbeFailure(msg)
    try:
        return extract_version(r.stdout)
    except ValueError as e:
        raise EnvironmentProbeFailure(str(e)) from e


def probe(min_version: str = MIN_CARGO_LAMBDA_VERSION) -> ToolAvailability:
    """AVAILABLE if cargo lambda runs and is at least min_version; any failure is UNAVAILABLE."""
    try:
        version = get_cargo_lambda_version()
    except EnvironmentProbeFailure as e:
        log.debug("cargo lambda probe failed: %s", e)
        return ToolAvailability.UNAVAILABLE
    try:
        too_old = compare_versions(version, min_version) < 0
    except ValueError as e:
        log.debug("cargo lambda version not comparable: %s", e)
        return ToolAvailability.UNAVAILABLE
    if too_old:
        log.debug("cargo lambda %s is older than %s", version, min_version)
        return ToolAvailability.UNAVAILABLE
    log.debug("cargo lambda %s available", version)
    return ToolAvailability.AVAILABLE


class ToolAvailabilityCache:
    """Single-write, many-read holder for the probe result."""

    def __init__(self, probe_fn: Callable[[], ToolAvailability] | None = None) -> None:
        self._probe_fn = probe_fn
        self._value = ToolAvailability.UNKNOWN

    @property
    def value(self) -> ToolAvailability:
        """Current value without probing (UNKNOWN until resolve() has run)."""
        return self._value

    def resolve(self) -> ToolAvailability:
        """Probe on first call, then return the stored answer forever."""
        if self._value is ToolAvailability.UNKNOWN:
            fn = self._probe_fn or probe
            self._value = fn()
        return self._value

    def reset(self, probe_fn: Callable[[], ToolAvailability] | None = None) -> None:
        """Forget the stored answer and set the probe function (None = module probe). Tests only."""
        self._value = ToolAvailability.UNKNOWN
        self._probe_fn = probe_fn


TOOL_AVAILABILITY = ToolAvailabilityCache()
