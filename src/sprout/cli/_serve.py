"""``sprout serve`` — build the site, then start the HTTP listener."""

import argparse
import logging
import sys

from sprout.cli import configure_logging
from sprout.cli._resolve import site_from_args
from sprout.errors import BuildError

logger = logging.getLogger("sprout.cli")


def run_serve(args: argparse.Namespace) -> None:
    """Build (unless ``--skip-build``) and serve until interrupted.

    A failed build stops here: the listener is never started.
    """
    try:
        site = site_from_args(args)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    configure_logging(args.log_level or site.config.effective_log_level)

    try:
        site.serve(args.host, args.port, build=not args.skip_build)
    except BuildError as exc:
        logger.error("Build failed: %s", exc)
        raise SystemExit(1) from exc
    except FileNotFoundError as exc:
        logger.error("No manifest to serve (%s); run `sprout build` first", exc.filename)
        raise SystemExit(1) from exc
