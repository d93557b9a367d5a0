"""Site resolution — builds the Site a CLI command operates on.

Either imports a ``"module:attribute"`` string (for sites that plug in
their own bundler, minifier, or renderer) or constructs a default
``Site`` from the ``--root``/``--host``/``--port`` options.
"""

import argparse
import importlib
from dataclasses import replace

from sprout.config import SiteConfig
from sprout.site import Site


def resolve_site(import_string: str) -> Site:
    """Resolve an import string to a sprout Site instance.

    Accepts ``"module:attribute"`` format.  When the attribute portion
    is omitted, defaults to ``"site"``.  Factory functions are called.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a sprout ``Site``.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "site"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, Site):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, Site):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a sprout.Site instance"
        raise TypeError(msg)

    return obj


def site_from_args(args: argparse.Namespace) -> Site:
    """Build the Site for a CLI invocation."""
    if getattr(args, "site", None):
        return resolve_site(args.site)

    overrides: dict[str, object] = {"root": args.root}
    if getattr(args, "host", None):
        overrides["host"] = args.host
    if getattr(args, "port", None):
        overrides["port"] = args.port
    return Site(replace(SiteConfig(), **overrides))
