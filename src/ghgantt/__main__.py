"""CLI entry point for ghgantt."""

import argparse
from pathlib import Path

from . import __version__
from .config import Settings
from .logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="ghgantt",
        description="Mirror GitHub issues into a task store and serve them as Gantt chart data",
    )
    parser.add_argument(
        "--project-root",
        type=Path,
        default=None,
        help="Path to project root containing ghgantt.yml (default: current directory)",
    )
    parser.add_argument(
        "--generate",
        action="store_true",
        help="Generate default ghgantt.yml in the project root and exit",
    )
    parser.add_argument(
        "--sync",
        action="store_true",
        help="Run one sync from GitHub and exit instead of serving",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Interface to bind the HTTP server to (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for the HTTP server (default: 3000)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Build settings from CLI args, falling back to GHGANTT_* env vars."""
    settings_kwargs: dict = {}
    if args.project_root:
        settings_kwargs["project_root"] = args.project_root
    if args.host:
        settings_kwargs["host"] = args.host
    if args.port:
        settings_kwargs["port"] = args.port
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file
    return Settings(**settings_kwargs)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    settings = build_settings(args)

    setup_logging(settings.verbose, settings.log_file)

    if args.generate:
        from .cli.generate import run_generate

        raise SystemExit(run_generate(settings.project_root))

    if args.sync:
        from .cli.sync import run_sync

        raise SystemExit(run_sync(settings))

    # Import here so --generate/--sync do not pull in the server stack
    from .cli.serve import run_serve

    raise SystemExit(run_serve(settings))


if __name__ == "__main__":
    main()
