"""``sprout routes`` — list the pages recorded in the manifest."""

import argparse
import sys

from sprout.build.manifest import Manifest
from sprout.cli._resolve import site_from_args


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of URL, MIDDLEWARE, and TITLE for each manifest entry."""
    try:
        site = site_from_args(args)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    try:
        manifest = Manifest.load(site.context.manifest_path)
    except FileNotFoundError as exc:
        print(f"No manifest at {site.context.manifest_path}; run `sprout build`", file=sys.stderr)
        raise SystemExit(1) from exc

    if not manifest:
        print("No pages built.")
        return

    rows = [
        (entry.url, "yes" if entry.middleware else "no", entry.head.title if entry.head else "")
        for entry in manifest
    ]

    max_url = max(max(len(r[0]) for r in rows), 3)  # "URL" header
    fmt = f"{{:<{max_url}}}  {{:<10}}  {{}}"
    print(fmt.format("URL", "MIDDLEWARE", "TITLE"))
    sep_len = max_url + 14 + max((len(r[2]) for r in rows), default=0)
    print("-" * min(sep_len, 80))
    for url, middleware, title in rows:
        print(fmt.format(url, middleware, title))
