"""`rust-lambda probe`: report whether cargo lambda can bundle on this host."""

import sys

from rust_lambda_tooling.build.probe import (
    MIN_CARGO_LAMBDA_VERSION,
    TOOL_AVAILABILITY,
    ToolAvailability,
)


def run_probe() -> int:
    """Returns 0 when cargo lambda is available, 1 otherwise."""
    if TOOL_AVAILABILITY.resolve() is ToolAvailability.AVAILABLE:
        print("✅ cargo lambda available: bundling runs on this host")
        return 0
    print(
        f"❌ cargo lambda >= {MIN_CARGO_LAMBDA_VERSION} not found: bundling will use Docker",
        file=sys.stderr,
    )
    return 1
