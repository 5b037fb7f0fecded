"""Wren CLI — inspect route strategies and dry-run the build phase.

Entry point registered as ``wren`` in ``pyproject.toml``::

    [project.scripts]
    wren = "wren.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wren`` command."""
    parser = argparse.ArgumentParser(
        prog="wren",
        description="Wren — per-route rendering strategies for server-rendered sites.",
    )
    parser.add_argument(
        "--log-level",
        default="info",
        choices=("debug", "info", "warning", "error"),
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- wren routes ------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes and strategies")
    routes_parser.add_argument(
        "registry",
        help="Import string (e.g. myapp.routes:registry)",
    )

    # -- wren build -------------------------------------------------------
    build_parser = subparsers.add_parser(
        "build", help="Run the build phase into memory and report the pages"
    )
    build_parser.add_argument(
        "registry",
        help="Import string (e.g. myapp.routes:registry)",
    )
    build_parser.add_argument(
        "--concurrency",
        type=int,
        default=None,
        help="Max pages generated at once per route",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "routes":
        from wren.cli._routes import run_routes

        run_routes(args)
    elif args.command == "build":
        from wren.cli._build import run_build

        run_build(args)
