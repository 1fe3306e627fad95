"""Bundling error taxonomy. Library code raises these; the CLI maps them to exit codes."""

from __future__ import annotations


class BundlingError(Exception):
    """Base class for every error raised while planning or running a bundle."""


class ToolUnavailable(BundlingError):
    """cargo lambda cannot run on this host. Soft: triggers the container fallback."""


class EnvironmentProbeFailure(BundlingError):
    """The version probe failed (missing tool, nonzero exit, unparsable output)."""


class ConfigurationError(BundlingError):
    """Invalid input detected before any subprocess is spawned."""


class BuildFailure(BundlingError):
    """cargo lambda (or the bundling container) exited nonzero."""

    def __init__(self, message: str, *, returncode: int, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


__all__ = [
    "BuildFailure",
    "BundlingError",
    "ConfigurationError",
    "EnvironmentProbeFailure",
    "ToolUnavailable",
]
