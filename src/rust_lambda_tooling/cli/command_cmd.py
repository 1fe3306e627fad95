"""`rust-lambda command`: print the cargo lambda build command for a platform."""

from __future__ import annotations

import argparse
import sys

from rust_lambda_tooling.build.bundling import BUNDLING_INPUT_DIR, BUNDLING_OUTPUT_DIR
from rust_lambda_tooling.build.command import CONTAINER_PLATFORM, BuildRequest, command_for_request
from rust_lambda_tooling.cli.parse_common import (
    add_target_flags,
    settings_for,
    target_from_settings,
)
from rust_lambda_tooling.errors import BundlingError


def run_command(args: argparse.Namespace) -> int:
    """Print the command string. For the container platform, entry and out are the mount points."""
    try:
        settings = settings_for(args)
        target = target_from_settings(settings)
        if args.platform == CONTAINER_PLATFORM:
            entry, out_dir = BUNDLING_INPUT_DIR, BUNDLING_OUTPUT_DIR
        else:
            entry, out_dir = str(args.entry), args.out
        request = BuildRequest(entry, target, out_dir, args.platform, bin=settings["bin"])
        command = command_for_request(request)
    except BundlingError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    print(command)
    return 0


def run_command_argv(argv: list[str] | None = None) -> None:
    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []
    ap = argparse.ArgumentParser(
        prog="rust-lambda command", description="Print the cargo lambda build command"
    )
    add_target_flags(ap)
    ap.add_argument("--out", default="target/lambda", help="Output directory (host platforms)")
    ap.add_argument(
        "--platform",
        default=sys.platform,
        help=f"linux, darwin, win32 or {CONTAINER_PLATFORM} (default: this host)",
    )
    args = ap.parse_args(argv)
    sys.exit(run_command(args))
