"""Main CLI entry point for rust-lambda tooling."""

import logging
import sys

from rust_lambda_tooling.cli import bundle_cmd, command_cmd, probe_cmd

VERBOSE_FLAGS = ("-v", "--verbose")


def _usage() -> None:
    print("Usage: rust-lambda [-v] <command> [args...]", file=sys.stderr)
    print("Commands:", file=sys.stderr)
    print(
        "  bundle <entry>   - Build a Lambda asset with cargo lambda (host or Docker)",
        file=sys.stderr,
    )
    print(
        "  command <entry>  - Print the cargo lambda build command for a platform",
        file=sys.stderr,
    )
    print("  probe            - Check whether cargo lambda can run on this host", file=sys.stderr)


def _configure_logging(argv: list[str]) -> list[str]:
    """Strip -v/--verbose from argv and set up logging accordingly."""
    verbose = any(a in VERBOSE_FLAGS for a in argv)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return [a for a in argv if a not in VERBOSE_FLAGS]


def main() -> None:
    """Main CLI entry point."""
    argv = _configure_logging(sys.argv[1:])
    if not argv:
        _usage()
        sys.exit(1)

    command, rest = argv[0], argv[1:]

    if command == "bundle":
        bundle_cmd.run_bundle_argv(rest)
    elif command == "command":
        command_cmd.run_command_argv(rest)
    elif command == "probe":
        sys.exit(probe_cmd.run_probe())
    elif command in ("-h", "--help", "help"):
        _usage()
        sys.exit(0)
    else:
        print(f"Error: Unknown command: {command}", file=sys.stderr)
        _usage()
        sys.exit(1)


if __name__ == "__main__":
    main()
