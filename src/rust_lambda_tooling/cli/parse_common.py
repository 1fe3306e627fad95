"""Shared CLI argument handling: common flags and settings -> BundlingProps."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

from rust_lambda_tooling.asset.staging import AssetHashType
from rust_lambda_tooling.build.bundling import BundlingProps
from rust_lambda_tooling.build.targets import ARCH_ALIASES, ARCH_TARGETS, resolve_target
from rust_lambda_tooling.config import (
    SETTINGS_FILE_NAME,
    merge_build_environment,
    resolve_settings,
)
from rust_lambda_tooling.errors import ConfigurationError
from rust_lambda_tooling.helpers import parse_env_pairs


def path_resolver(s: str) -> Path:
    """Resolve a path argument to absolute Path (e.g. entry, --out, --config)."""
    return Path(s).resolve()


def add_target_flags(ap: argparse.ArgumentParser) -> None:
    """entry, --arch, --target, --bin, --config."""
    ap.add_argument("entry", type=path_resolver, help="Directory containing Cargo.toml")
    ap.add_argument(
        "--arch",
        choices=sorted({*ARCH_TARGETS, *ARCH_ALIASES}),
        default=None,
        help="Lambda architecture (default: x86_64)",
    )
    ap.add_argument("--target", default=None, help="Rust target triple (overrides --arch)")
    ap.add_argument("--bin", default=None, help="Executable name (default: from Cargo.toml)")
    ap.add_argument(
        "--config",
        type=path_resolver,
        default=None,
        help=f"Settings file (default: <entry>/{SETTINGS_FILE_NAME})",
    )


def settings_for(args: argparse.Namespace, **overrides: Any) -> dict[str, Any]:
    """Resolve settings for parsed args: settings file, env, then CLI flags."""
    settings_file = args.config or args.entry / SETTINGS_FILE_NAME
    if args.config is not None and not settings_file.exists():
        msg = f"Settings file not found: {settings_file}"
        raise ConfigurationError(msg)
    cli = {"architecture": args.arch, "target": args.target, "bin": args.bin, **overrides}
    return resolve_settings(cli, settings_file=settings_file)


def target_from_settings(settings: dict[str, Any]) -> str:
    return resolve_target(settings["architecture"], settings["target"])


def props_from_settings(
    entry: Path, settings: dict[str, Any], env_pairs: list[str] | None = None
) -> BundlingProps:
    """Build BundlingProps; --env KEY=VALUE pairs win over build_environment in settings."""
    try:
        cli_env = parse_env_pairs(env_pairs or [])
    except ValueError as e:
        raise ConfigurationError(str(e)) from e
    return BundlingProps(
        entry=entry,
        target=target_from_settings(settings),
        bin=settings["bin"],
        build_environment=merge_build_environment(settings["build_environment"], cli_env),
        forced_docker_bundling=bool(settings["force_docker"]),
        asset_hash_type=AssetHashType.parse(settings["asset_hash_type"]),
        asset_hash=settings["asset_hash"],
        docker_image=settings["docker_image"],
    )
