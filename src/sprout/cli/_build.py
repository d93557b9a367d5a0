"""``sprout build`` — compile every page and write the manifest."""

import argparse
import logging
import sys

import anyio

from sprout.cli import configure_logging
from sprout.cli._resolve import site_from_args
from sprout.errors import BuildError

logger = logging.getLogger("sprout.cli")


def run_build(args: argparse.Namespace) -> None:
    """Run one build; exit 1 if it fails."""
    try:
        site = site_from_args(args)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    configure_logging(args.log_level or site.config.effective_log_level)

    try:
        manifest = anyio.run(site.build)
    except BuildError as exc:
        logger.error("Build failed: %s", exc)
        raise SystemExit(1) from exc

    print(f"Built {len(manifest)} page(s) into {site.context.build_root}")
