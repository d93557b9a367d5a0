"""Sprout CLI — build, serve, and inspect a site.

Entry point registered as ``sprout`` in ``pyproject.toml``::

    [project.scripts]
    sprout = "sprout.cli:main"
"""

import argparse
import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    """Send sprout's log records to stderr at *level*."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, stream=sys.stderr)


def _add_site_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--root", default=".", help="Site root directory (default: .)")
    parser.add_argument(
        "--site",
        default=None,
        help="Import string of a configured Site (e.g. mysite:site); overrides --root",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``sprout`` command."""
    parser = argparse.ArgumentParser(
        prog="sprout",
        description="Sprout — static-site compiler with hydrating page routes.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["debug", "info", "warning", "error"],
        help="Logging verbosity (default: debug if the site config sets debug, else its log_level)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- sprout build -----------------------------------------------------
    build_parser = subparsers.add_parser("build", help="Compile pages and write the manifest")
    _add_site_arguments(build_parser)

    # -- sprout serve -----------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Build, then start the HTTP server")
    _add_site_arguments(serve_parser)
    serve_parser.add_argument("--host", default=None, help="Bind host address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    serve_parser.add_argument(
        "--skip-build",
        action="store_true",
        help="Serve the existing build instead of rebuilding first",
    )

    # -- sprout routes ----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List pages in the current manifest")
    _add_site_arguments(routes_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "build":
        from sprout.cli._build import run_build

        run_build(args)
    elif args.command == "serve":
        from sprout.cli._serve import run_serve

        run_serve(args)
    elif args.command == "routes":
        from sprout.cli._routes import run_routes

        run_routes(args)
