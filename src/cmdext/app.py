"""cmdext application entry point.

Runs a single command in streaming or captured mode from the command line:

    python -m cmdext [--capture] [--cwd DIR] [-e KEY=VALUE] [-u KEY] PROGRAM [ARGS...]
"""

from __future__ import annotations

import argparse
import logging
import sys

from .config import get_config
from .errors import CommandError
from .runtime import Command

__all__ = ["build_parser", "configure_logging", "main"]

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Send cmdext logs to stderr.

    The root logger stays at WARNING to keep third-party noise down; only the
    cmdext namespace is raised to INFO (DEBUG with CMDEXT_LOG_DEBUG).
    """
    config = get_config()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    )
    logging.basicConfig(
        level=logging.WARNING,
        handlers=[stderr_handler],
    )
    logging.getLogger("cmdext").setLevel(logging.DEBUG if config.log_debug else logging.INFO)


def _parse_env_assignment(value: str) -> tuple[str, str]:
    key, sep, val = value.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {value!r}")
    return key, val


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cmdext",
        description="Run a command with banners, or capture its stdout.",
    )
    parser.add_argument(
        "--capture",
        action="store_true",
        help="Capture output and print stdout instead of streaming",
    )
    parser.add_argument("--cwd", help="Working directory for the command")
    parser.add_argument(
        "-e",
        "--env",
        action="append",
        default=[],
        type=_parse_env_assignment,
        metavar="KEY=VALUE",
        help="Set an environment variable for the command (repeatable)",
    )
    parser.add_argument(
        "-u",
        "--unset",
        action="append",
        default=[],
        metavar="KEY",
        help="Remove an inherited environment variable (repeatable)",
    )
    parser.add_argument("program", help="Program to run")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="Program arguments")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point. Returns the process exit code."""
    configure_logging()
    args = build_parser().parse_args(argv)

    command = Command(args.program).with_args(args.args).envs(dict(args.env))
    for key in args.unset:
        command = command.env_remove(key)
    if args.cwd:
        command = command.cwd(args.cwd)

    try:
        if args.capture:
            output = command.run_captured()
            sys.stdout.write(output.stdout)
            sys.stdout.flush()
        else:
            command.run_streaming()
    except CommandError as e:
        logger.debug(f"Command failed: {type(e).__name__}")
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
