"""`rust-lambda bundle`: build a Lambda asset on the host or in Docker."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rust_lambda_tooling.build.bundling import bundle
from rust_lambda_tooling.cli.parse_common import (
    add_target_flags,
    path_resolver,
    props_from_settings,
    settings_for,
)
from rust_lambda_tooling.errors import BundlingError
from rust_lambda_tooling.helpers import find_manifest


def run_bundle(args: argparse.Namespace) -> int:
    """Bundle args.entry into the staging directory. Returns 0 or 1."""
    try:
        find_manifest(args.entry)
    except FileNotFoundError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    try:
        settings = settings_for(
            args,
            force_docker=True if args.force_docker else None,
            asset_hash_type=args.hash_type,
            asset_hash=args.asset_hash,
            staging_dir=str(args.out) if args.out else None,
        )
        props = props_from_settings(args.entry, settings, args.env)
        staging_dir = Path(settings["staging_dir"])
        if not staging_dir.is_absolute():
            staging_dir = args.entry / staging_dir
        asset = bundle(props, staging_dir)
    except BundlingError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    print(asset.path)
    return 0


def run_bundle_argv(argv: list[str] | None = None) -> None:
    """Parse argv and run bundle."""
    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []  # skip 'rust-lambda bundle'
    ap = argparse.ArgumentParser(
        prog="rust-lambda bundle", description="Bundle a Rust Lambda function"
    )
    add_target_flags(ap)
    ap.add_argument(
        "--out",
        type=path_resolver,
        default=None,
        help="Staging directory for asset.<hash> (default: <entry>/rust-lambda.out)",
    )
    ap.add_argument("--force-docker", action="store_true", help="Always bundle in Docker")
    ap.add_argument(
        "--env",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Build environment variable (repeatable)",
    )
    ap.add_argument(
        "--hash-type",
        choices=["source", "output", "custom"],
        default=None,
        help="Asset hash type (default: source)",
    )
    ap.add_argument("--asset-hash", default=None, help="Asset hash for --hash-type custom")
    args = ap.parse_args(argv)
    sys.exit(run_bundle(args))
