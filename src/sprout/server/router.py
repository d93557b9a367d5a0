"""Request classification.

Every request path is tested against a fixed list of prefixes, first
match wins.  Asset prefixes come before the page fallback, which
accepts any absolute path; only request targets that are not absolute
paths (``*``) fall through to not-found.
"""

from enum import Enum

from sprout.config import SiteConfig


class RouteClass(Enum):
    STATIC_ASSET = "static_asset"
    API = "api"
    DIST_ASSET = "dist_asset"
    PAGE = "page"
    NOT_FOUND = "not_found"


class RouteState(Enum):
    """Lifecycle of one request through the router."""

    RECEIVED = "received"
    CLASSIFIED = "classified"
    DISPATCHED = "dispatched"
    RESPONDED = "responded"
    ERRORED = "errored"


def matches_prefix(path: str, prefix: str) -> bool:
    """True if *path* is *prefix* or lies below it."""
    prefix = "/" + prefix.strip("/")
    return path == prefix or path.startswith(prefix + "/")


def classify(path: str, config: SiteConfig) -> RouteClass:
    """Classify *path* by fixed-priority prefix match."""
    if matches_prefix(path, config.static_prefix):
        return RouteClass.STATIC_ASSET
    if matches_prefix(path, config.api_prefix):
        return RouteClass.API
    if matches_prefix(path, config.dist_prefix):
        return RouteClass.DIST_ASSET
    if path.startswith("/"):
        return RouteClass.PAGE
    return RouteClass.NOT_FOUND
