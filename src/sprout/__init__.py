"""Sprout — a static-site compiler with hydrating page routes.

Pre-renders Python page modules to HTML at build time, bundles a client
script per page, and serves both over ASGI with fresh per-request
context for client-side hydration.

Basic usage::

    from sprout import Site, SiteConfig

    site = Site(SiteConfig(root="mysite"))
    site.serve()

A page module (``mysite/pages/home/index.py``)::

    from sprout.pages import template_component

    component = template_component("HomePage", "<b>{{ url }}</b>")

    def middleware(request):
        return {"props": {"url": request.url}}

    def head():
        return {"title": "HOME", "description": "The home page"}
"""

__version__ = "0.1.0"
__all__ = [
    "BuildError",
    "ConfigurationError",
    "ErrorKind",
    "Manifest",
    "Request",
    "Response",
    "RouteError",
    "Site",
    "SiteConfig",
    "SproutError",
    "build_site",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import sprout`` fast while providing a clean top-level API.
    """
    if name == "Site":
        from sprout.site import Site

        return Site

    if name == "SiteConfig":
        from sprout.config import SiteConfig

        return SiteConfig

    if name == "Request":
        from sprout.http.request import Request

        return Request

    if name == "Response":
        from sprout.http.response import Response

        return Response

    if name == "Manifest":
        from sprout.build.manifest import Manifest

        return Manifest

    if name == "build_site":
        from sprout.build.pipeline import build_site

        return build_site

    if name in ("BuildError", "ConfigurationError", "ErrorKind", "RouteError", "SproutError"):
        import sprout.errors

        return getattr(sprout.errors, name)

    msg = f"module 'sprout' has no attribute {name!r}"
    raise AttributeError(msg)
