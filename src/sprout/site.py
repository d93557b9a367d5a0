"""Sprout site — the build entry point and the ASGI application.

A ``Site`` builds its pages, then loads the resulting manifest and
binds page middleware exactly once.  From then on it serves requests
against that immutable state until the next build.
"""

import threading

import anyio

from sprout._internal.asgi import Receive, Scope, Send
from sprout.build.assets import Bundler, Minifier
from sprout.build.compiler import Renderer
from sprout.build.manifest import Manifest
from sprout.build.pipeline import build_site
from sprout.config import SiteConfig
from sprout.context import SiteContext
from sprout.pages.registry import PageRegistry
from sprout.pages.render import render_component
from sprout.server.handler import handle_request
from sprout.server.handlers import ServeState


class Site:
    """A static site with hydrating page routes.

    Usage::

        site = Site(SiteConfig(root="mysite"))
        site.serve()  # build, load, listen

    Thread safety:
        Loading uses a Lock + double-check so exactly one thread reads
        the manifest even if several ASGI workers receive their first
        request at once.
    """

    __slots__ = (
        "_bundler",
        "_load_lock",
        "_minifier",
        "_renderer",
        "_state",
        "config",
        "context",
    )

    def __init__(
        self,
        config: SiteConfig | None = None,
        *,
        bundler: Bundler | None = None,
        minifier: Minifier | None = None,
        renderer: Renderer = render_component,
    ) -> None:
        self.config: SiteConfig = config or SiteConfig()
        self.context: SiteContext = SiteContext.from_config(self.config)
        self._bundler = bundler
        self._minifier = minifier
        self._renderer = renderer
        self._state: ServeState | None = None
        self._load_lock: threading.Lock = threading.Lock()

    # -- Build phase --

    async def build(self) -> Manifest:
        """Rebuild the distribution directory and manifest.

        Any previously loaded serve state is discarded; the next request
        (or :meth:`load`) reads the new manifest.
        """
        with self._load_lock:
            self._state = None
        return await build_site(
            self.context,
            bundler=self._bundler,
            minifier=self._minifier,
            renderer=self._renderer,
        )

    # -- Serve phase --

    def load(self) -> ServeState:
        """Read the manifest and bind page middleware, once."""
        if self._state is not None:
            return self._state
        with self._load_lock:
            if self._state is None:
                manifest = Manifest.load(self.context.manifest_path)
                self._state = ServeState(
                    context=self.context,
                    manifest=manifest,
                    registry=PageRegistry.from_manifest(manifest, self.context.root),
                )
            return self._state

    @property
    def manifest(self) -> Manifest:
        return self.load().manifest

    def serve(self, host: str | None = None, port: int | None = None, *, build: bool = True) -> None:
        """Build (unless *build* is False), load, and start listening.

        The listener only starts once the build has fully completed.
        """
        if build:
            anyio.run(self.build)
        self.load()

        from sprout.server.dev import run_server

        run_server(self, host or self.config.host, port or self.config.port)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        await handle_request(scope, receive, send, state=self.load())

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Load serve state at startup, before the first HTTP request."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self.load()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
