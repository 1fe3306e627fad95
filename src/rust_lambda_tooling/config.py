"""Bundling settings: defaults, optional rust-lambda.yaml, environment overrides.

rust-lambda.yaml format (all keys optional):
- architecture: x86_64 | arm64
- target: explicit Rust target triple (wins over architecture)
- bin: executable name passed to cargo lambda
- force_docker: always bundle in the container
- build_environment: map of variables passed to cargo lambda
- asset_hash_type: source | output | custom
- asset_hash: fingerprint used when asset_hash_type is custom
- docker_image: base image for the bundling Dockerfile (IMAGE build arg)
- staging_dir: where asset.<hash> directories are written
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from rust_lambda_tooling.errors import ConfigurationError

SETTINGS_FILE_NAME = "rust-lambda.yaml"
FORCE_DOCKER_ENV = "RUST_LAMBDA_FORCE_DOCKER"

DEFAULT_SETTINGS: dict[str, Any] = {
    "architecture": "x86_64",
    "target": None,
    "bin": None,
    "force_docker": False,
    "build_environment": {},
    "asset_hash_type": "source",
    "asset_hash": None,
    "docker_image": None,
    "staging_dir": "rust-lambda.out",
}


def _env_flag(value: str | None) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


def load_settings_file(path: Path) -> dict[str, Any]:
    """Read a settings YAML file. Raises ConfigurationError if it is not a mapping or not valid YAML."""
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        msg = f"Invalid settings file {path}: {e}"
        raise ConfigurationError(msg) from e
    if not isinstance(data, dict):
        msg = f"Settings file {path} must contain a mapping"
        raise ConfigurationError(msg)
    unknown = sorted(set(data) - set(DEFAULT_SETTINGS))
    if unknown:
        msg = f"Unknown settings in {path}: {', '.join(unknown)}"
        raise ConfigurationError(msg)
    return data


def resolve_settings(
    overrides: dict[str, Any] | None = None,
    *,
    settings_file: Path | None = None,
    environ: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Defaults, then settings_file, then environment, then overrides (None values are ignored)."""
    out = dict(DEFAULT_SETTINGS)
    out["build_environment"] = {}
    if settings_file is not None and settings_file.exists():
        out.update(load_settings_file(settings_file))
    env = os.environ if environ is None else environ
    if _env_flag(env.get(FORCE_DOCKER_ENV)):
        out["force_docker"] = True
    for k, v in (overrides or {}).items():
        if k in out and v is not None:
            out[k] = v
    build_env = out.get("build_environment") or {}
    if not isinstance(build_env, dict):
        msg = "build_environment must be a mapping"
        raise ConfigurationError(msg)
    out["build_environment"] = {str(k): str(v) for k, v in build_env.items()}
    return out


def merge_build_environment(
    defaults: dict[str, str] | None, overrides: dict[str, str] | None
) -> dict[str, str]:
    """Caller overrides win over settings defaults. Keys unique, order irrelevant."""
    return {**(defaults or {}), **(overrides or {})}
