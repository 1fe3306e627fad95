"""Build the `cargo lambda build` command line for a target platform.

Platform tags are sys.platform values for host builds (linux, darwin, win32, and
other POSIX hosts such as freebsd14 or cygwin) plus CONTAINER_PLATFORM for builds
inside the bundling image. The command is always returned as one string; the
shell that runs it comes from shell_prefix().

POSIX platforms quote with shlex. win32 runs under cmd.exe, which does not
understand single quotes, so arguments are double-quoted with
subprocess.list2cmdline and the whole line is passed to cmd verbatim.
"""

from __future__ import annotations

import shlex
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import PurePath, PurePosixPath, PureWindowsPath

from rust_lambda_tooling.errors import ConfigurationError

CONTAINER_PLATFORM = "container"

# cargo-lambda's default compiler; pinned so host and container builds cross-compile the same way.
COMPILER = "cargo-zigbuild"


@dataclass(frozen=True, slots=True)
class ShellDialect:
    prefix: tuple[str, ...]
    join: Callable[[Sequence[str]], str]
    path_type: type[PurePath]
    verbatim: bool = False


_POSIX_HOST = ShellDialect(prefix=("bash", "-c"), join=shlex.join, path_type=PurePosixPath)

SHELL_DIALECTS: dict[str, ShellDialect] = {
    CONTAINER_PLATFORM: ShellDialect(prefix=(), join=shlex.join, path_type=PurePosixPath),
    "linux": _POSIX_HOST,
    "darwin": _POSIX_HOST,
    "win32": ShellDialect(
        prefix=("cmd", "/c"),
        join=subprocess.list2cmdline,
        path_type=PureWindowsPath,
        verbatim=True,
    ),
}


@dataclass(frozen=True, slots=True)
class BuildRequest:
    entry: str
    target: str
    out_dir: str
    target_platform: str
    bin: str | None = None


# sys.platform prefixes of other POSIX hosts; they run the command under bash like linux.
_POSIX_PLATFORM_PREFIXES = (
    "freebsd",
    "openbsd",
    "netbsd",
    "dragonfly",
    "sunos",
    "aix",
    "cygwin",
    "msys",
)


def dialect_for(target_platform: str) -> ShellDialect:
    """Shell dialect for a platform tag. Raises ConfigurationError for unsupported tags."""
    dialect = SHELL_DIALECTS.get(target_platform)
    if dialect is None and target_platform.startswith(_POSIX_PLATFORM_PREFIXES):
        dialect = _POSIX_HOST
    if dialect is None:
        msg = (
            f"Unsupported target platform: {target_platform!r}. "
            f"Use one of: {', '.join(sorted(SHELL_DIALECTS))} or another POSIX sys.platform."
        )
        raise ConfigurationError(msg)
    return dialect


def shell_prefix(target_platform: str) -> tuple[str, ...]:
    """Shell argv that runs the command on this platform; empty for the container platform."""
    return dialect_for(target_platform).prefix


def build_args(
    entry: str,
    target: str,
    out_dir: str,
    target_platform: str,
    bin: str | None = None,
) -> list[str]:
    """cargo lambda build argv (before quoting). Without bin, cargo lambda picks it from Cargo.toml."""
    dialect = dialect_for(target_platform)
    manifest = dialect.path_type(entry) / "Cargo.toml"
    args = [
        "cargo",
        "lambda",
        "build",
        "--release",
        "--target",
        target,
        "--compiler",
        COMPILER,
        "--manifest-path",
        str(manifest),
        "--lambda-dir",
        out_dir,
    ]
    if bin:
        args += ["--bin", bin, "--flatten", bin]
    return args


def create_build_command(
    entry: str,
    target: str,
    out_dir: str,
    target_platform: str,
    bin: str | None = None,
) -> str:
    """Single shell command string for `cargo lambda build`. Entry existence is not checked."""
    dialect = dialect_for(target_platform)
    return dialect.join(build_args(entry, target, out_dir, target_platform, bin=bin))


def command_for_request(request: BuildRequest) -> str:
    return create_build_command(
        request.entry,
        request.target,
        request.out_dir,
        request.target_platform,
        bin=request.bin,
    )
