"""Lambda architecture -> Rust target triple."""

from __future__ import annotations

from rust_lambda_tooling.errors import ConfigurationError

ARCH_TARGETS: dict[str, str] = {
    "x86_64": "x86_64-unknown-linux-gnu",
    "arm64": "aarch64-unknown-linux-gnu",
}

# Docker-style names accepted on the command line.
ARCH_ALIASES: dict[str, str] = {
    "amd64": "x86_64",
    "x86-64": "x86_64",
    "aarch64": "arm64",
}

DEFAULT_ARCH = "x86_64"


def normalize_arch(arch: str | None) -> str:
    """Return the canonical architecture name (x86_64 or arm64). Raises ConfigurationError if unknown."""
    if not arch:
        return DEFAULT_ARCH
    name = ARCH_ALIASES.get(arch.lower(), arch.lower())
    if name not in ARCH_TARGETS:
        msg = f"Unknown architecture: {arch}. Use {', '.join(sorted(ARCH_TARGETS))}."
        raise ConfigurationError(msg)
    return name


def resolve_target(arch: str | None = None, target: str | None = None) -> str:
    """Explicit target wins; otherwise the triple for arch (default x86_64)."""
    if target:
        return target
    return ARCH_TARGETS[normalize_arch(arch)]
