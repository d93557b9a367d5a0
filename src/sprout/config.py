"""Site configuration.

SiteConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class SiteConfig:
    """Site configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = SiteConfig(root="site", port=3000, granular_errors=True)

    Relative paths are resolved against ``root`` by
    :meth:`sprout.context.SiteContext.from_config`.
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False  # forces debug logging, including per-request route states

    # Site layout
    root: str | Path = "."
    pages_dir: str | Path = "pages"
    page_pattern: str = "**/*.py"
    client_suffix: str = ".jsx"
    template_path: str | Path = "public/index.html"
    hydration_template: str | Path | None = None  # None = packaged bootstrap

    # Build output (also the URL prefix of compiled assets)
    dist_dir: str = "_sprout"

    # Routing prefixes
    static_prefix: str = "/public"
    api_prefix: str = "/api"

    # External bundler / minifier
    esbuild_binary: str = "esbuild"

    # Serve static assets with a content type guessed from the extension
    # instead of the fixed text/html.
    infer_static_content_types: bool = False

    # Map error kinds to distinct status codes instead of one per route class
    granular_errors: bool = False

    # Logging
    log_level: str = "info"

    @property
    def effective_log_level(self) -> str:
        """``"debug"`` when ``debug`` is set, otherwise ``log_level``."""
        return "debug" if self.debug else self.log_level

    @property
    def dist_prefix(self) -> str:
        """URL prefix under which compiled distribution assets are served."""
        return "/" + self.dist_dir.strip("/")
