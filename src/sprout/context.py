"""Build/serve context.

Every filesystem location the build writes and the server reads is
resolved once, here, from :class:`~sprout.config.SiteConfig`.  The
resulting :class:`SiteContext` is passed explicitly to the compiler,
the pipeline, and the route handlers; nothing consults the process
working directory.
"""

from dataclasses import dataclass
from pathlib import Path

from sprout.config import SiteConfig
from sprout.errors import ConfigurationError

MANIFEST_NAME = "ssr_manifest.json"


@dataclass(frozen=True, slots=True)
class SiteContext:
    """Resolved paths for one site.

    Attributes:
        config: The configuration the paths were derived from.
        root: Site root; request paths for assets resolve against it.
        pages_root: Directory scanned for page modules.
        dist_root: Distribution directory, wiped at every build.
        build_root: ``<dist_root>/build``.
        pages_output_root: ``<build_root>/pages``; a page compiled here
            is served at ``/``.
        manifest_path: ``<build_root>/ssr_manifest.json``.
        template_path: Shared HTML shell every page is composed into.
    """

    config: SiteConfig
    root: Path
    pages_root: Path
    dist_root: Path
    build_root: Path
    pages_output_root: Path
    manifest_path: Path
    template_path: Path

    @classmethod
    def from_config(cls, config: SiteConfig) -> "SiteContext":
        """Resolve all paths for *config*."""
        dist_name = config.dist_dir.strip("/")
        if not dist_name or "/" in dist_name:
            msg = f"dist_dir must be a single directory name, got {config.dist_dir!r}"
            raise ConfigurationError(msg)

        root = Path(config.root).resolve()
        dist_root = root / dist_name
        build_root = dist_root / "build"
        return cls(
            config=config,
            root=root,
            pages_root=(root / config.pages_dir).resolve(),
            dist_root=dist_root,
            build_root=build_root,
            pages_output_root=build_root / "pages",
            manifest_path=build_root / MANIFEST_NAME,
            template_path=(root / config.template_path).resolve(),
        )

    def url_for_output(self, path: Path) -> str:
        """Public URL of a file under the distribution directory."""
        return "/" + path.relative_to(self.root).as_posix()

    def resolve_request_path(self, request_path: str) -> Path:
        """Map a request path onto the site root (``root + path``)."""
        return (self.root / request_path.lstrip("/")).resolve()
