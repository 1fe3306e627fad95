"""Shared helpers for rust_lambda_tooling (version, fingerprint, env pairs, manifest).

Used by build, asset, docker, config and cli modules.
"""

from __future__ import annotations

import hashlib
import re
from collections.abc import Iterable
from pathlib import Path, PurePosixPath

# --- Version ---

_VERSION_IN_TEXT = re.compile(r"(\d+\.\d+\.\d+(?:-[\w.-]+)?)")


def compare_versions(v1: str, v2: str) -> int:
    """Compare two version strings (semver). Returns positive if v1 > v2, negative if v1 < v2, zero if equal. Raises ValueError on invalid format."""
    v1 = v1.lstrip("v")
    v2 = v2.lstrip("v")

    def parse_version(v: str) -> tuple[int, int, int, str | None]:
        m = re.match(r"^(\d+)\.(\d+)\.(\d+)(?:-([\w.-]+))?$", v)
        if not m:
            msg = "Invalid version format: " + str(v)
            raise ValueError(msg)
        return (int(m.group(1)), int(m.group(2)), int(m.group(3)), m.group(4))

    major1, minor1, patch1, prerelease1 = parse_version(v1)
    major2, minor2, patch2, prerelease2 = parse_version(v2)

    if major1 != major2:
        return major1 - major2
    if minor1 != minor2:
        return minor1 - minor2
    if patch1 != patch2:
        return patch1 - patch2

    if prerelease1 is None and prerelease2 is not None:
        return 1
    if prerelease1 is not None and prerelease2 is None:
        return -1
    if prerelease1 is None and prerelease2 is None:
        return 0

    if prerelease1 < prerelease2:
        return -1
    if prerelease1 > prerelease2:
        return 1
    return 0


def extract_version(output: str) -> str:
    """First semver-looking token in tool output (e.g. 'cargo-lambda 1.2.1 (abc 2024-05-01Z)' -> '1.2.1').

    Raises ValueError when the output carries no version.
    """
    m = _VERSION_IN_TEXT.search(output or "")
    if not m:
        msg = f"No version found in output: {output.strip()[:80]!r}"
        raise ValueError(msg)
    return m.group(1)


# --- Fingerprint ---

DEFAULT_FINGERPRINT_EXCLUDE = frozenset({"target", ".git", "node_modules", "cdk.out"})


def iter_fingerprint_files(
    root: Path, exclude: Iterable[str] = DEFAULT_FINGERPRINT_EXCLUDE
) -> list[Path]:
    """All files under root, sorted.

    exclude holds paths relative to root ("target", "out/stage"); a file is skipped only
    when its relative path starts with one of them, so nested dirs named "target" still count.
    """
    skip = [PurePosixPath(e).parts for e in exclude]
    skip = [s for s in skip if s]
    out: list[Path] = []
    for p in root.rglob("*"):
        rel = p.relative_to(root).parts
        if any(rel[: len(s)] == s for s in skip):
            continue
        if p.is_file():
            out.append(p)
    return sorted(out)


def fingerprint_directory(
    root: Path,
    *,
    exclude: Iterable[str] = DEFAULT_FINGERPRINT_EXCLUDE,
    extra: str = "",
) -> str:
    """sha256 over relative paths and contents of every file under root. extra is mixed in first."""
    h = hashlib.sha256()
    if extra:
        h.update(extra.encode())
    for p in iter_fingerprint_files(root, exclude):
        h.update(p.relative_to(root).as_posix().encode())
        h.update(b"\0")
        h.update(hashlib.sha256(p.read_bytes()).digest())
    return h.hexdigest()


# --- Environment ---


def parse_env_pairs(pairs: Iterable[str]) -> dict[str, str]:
    """Parse ['K=V', ...] into a dict. Raises ValueError on entries without '=' or with an empty key."""
    out: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            msg = f"Invalid environment entry (expected KEY=VALUE): {pair!r}"
            raise ValueError(msg)
        out[key] = value
    return out


# --- Manifest ---


def find_manifest(entry: Path) -> Path:
    """Return entry/Cargo.toml. Raises FileNotFoundError when missing."""
    manifest = entry / "Cargo.toml"
    if not manifest.is_file():
        msg = f"Cargo.toml not found in {entry}"
        raise FileNotFoundError(msg)
    return manifest
