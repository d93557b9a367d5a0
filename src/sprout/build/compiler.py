"""Per-page compilation.

Turns one page module into its three build artifacts: the composed
static ``index.html``, the raw client bundle, and its minified sibling.
Pages are compiled one at a time.  The augmented module's temp file
name is derived from the source path, so two concurrent compilations
of the same page would collide.
"""

from __future__ import annotations

import html
import logging
import secrets
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import anyio

from sprout.build.assets import Bundler, Minifier
from sprout.build.hydration import augment_source
from sprout.context import SiteContext
from sprout.errors import BuildError
from sprout.pages.discovery import TEMP_MARKER, load_page_module
from sprout.pages.render import render_component
from sprout.pages.types import CompiledPage, PageHead, PageModule

logger = logging.getLogger("sprout.build")

# Mount point for the server-rendered component in the shell template
STATIC_NODE = '<div id="__sprout"></div>'

# Bytes of entropy per artifact token (44 URL-safe characters)
ARTIFACT_TOKEN_BYTES = 33

Renderer = Callable[[Callable[..., Any], Mapping[str, Any]], str]


def static_node(content: str) -> str:
    return f'<div id="__sprout">{content}</div>'


def compose_html(
    template: str,
    rendered: str,
    script_url: str,
    head: PageHead | None,
) -> str:
    """Compose a page document from the shell template.

    The rendered component fills the mount point, a module script tag
    for the minified bundle goes before ``</body>``, and page metadata
    goes before ``</head>``.
    """
    document = template.replace(STATIC_NODE, static_node(rendered), 1)
    script = f'<script src="{html.escape(script_url)}" type="module" defer></script>'
    document = document.replace("</body>", script + "</body>", 1)
    if head is not None:
        meta = (
            f"<title>{html.escape(head.title)}</title>"
            f'<meta name="description" content="{html.escape(head.description)}">'
        )
        document = document.replace("</head>", meta + "</head>", 1)
    return document


class PageCompiler:
    """Compiles page modules for one build.

    Holds the artifact tokens and output directories issued so far: no
    token is reused within a build, and no two pages may claim the same
    output directory.
    """

    __slots__ = (
        "_bootstrap",
        "_bundler",
        "_claimed",
        "_context",
        "_issued",
        "_minifier",
        "_renderer",
        "_template",
    )

    def __init__(
        self,
        context: SiteContext,
        *,
        template: str,
        bootstrap: str,
        bundler: Bundler,
        minifier: Minifier,
        renderer: Renderer = render_component,
    ) -> None:
        self._context = context
        self._template = template
        self._bootstrap = bootstrap
        self._bundler = bundler
        self._minifier = minifier
        self._renderer = renderer
        self._issued: set[str] = set()
        self._claimed: dict[Path, Path] = {}

    def new_artifact_id(self) -> str:
        """Generate a random token not yet issued in this build."""
        while True:
            token = secrets.token_urlsafe(ARTIFACT_TOKEN_BYTES)
            if token not in self._issued:
                self._issued.add(token)
                return token

    def output_dir_for(self, source_path: Path) -> Path:
        """Output directory of a page.

        ``index`` modules map to their directory; any other module adds
        its stem as a final path segment.
        """
        relative = source_path.relative_to(self._context.pages_root)
        logical = relative.parent
        if relative.stem != "index":
            logical = logical / relative.stem
        return self._context.pages_output_root / logical

    def _claim_output_dir(self, source_path: Path) -> Path:
        output_dir = self.output_dir_for(source_path)
        previous = self._claimed.get(output_dir)
        if previous is not None:
            raise BuildError(
                "route",
                f"compiles to the same directory as {previous.name} ({output_dir})",
                source_path,
            )
        self._claimed[output_dir] = source_path
        return output_dir

    async def compile_page(
        self, source_path: Path
    ) -> tuple[CompiledPage, PageModule, PageHead | None]:
        """Compile one page.

        Raises:
            BuildError: On any failure; the build must stop.
        """
        page = load_page_module(source_path)
        output_dir = self._claim_output_dir(source_path)
        await anyio.Path(output_dir).mkdir(parents=True, exist_ok=True)

        artifact_id = self.new_artifact_id()
        raw_script = output_dir / f"{artifact_id}.js"
        minified_script = output_dir / f"{artifact_id}.min.js"
        html_output = output_dir / "index.html"

        bundle = await self._bundle(page)
        await anyio.Path(raw_script).write_text(bundle, encoding="utf-8")

        try:
            rendered = self._renderer(page.component, {})
            head = page.resolve_head()
        except Exception as exc:
            raise BuildError("render", f"{type(exc).__name__}: {exc}", source_path) from exc

        document = compose_html(
            self._template,
            rendered,
            self._context.url_for_output(minified_script),
            head,
        )
        await anyio.Path(html_output).write_text(document, encoding="utf-8")

        try:
            await self._minifier.minify(raw_script, minified_script)
        except Exception as exc:
            raise BuildError("minify", str(exc), source_path) from exc

        compiled = CompiledPage(
            source_path=source_path,
            output_dir=output_dir,
            html_output_path=html_output,
            raw_script_path=raw_script,
            minified_script_path=minified_script,
            artifact_id=artifact_id,
        )
        logger.info("Compiled %s -> %s", source_path.name, output_dir)
        return compiled, page, head

    async def _bundle(self, page: PageModule) -> str:
        """Write the augmented client module beside the page, bundle it, clean up."""
        source_path = page.source_path
        suffix = self._context.config.client_suffix
        client_path = source_path.with_suffix(suffix)
        temp_path = source_path.with_name(f"{source_path.stem}{TEMP_MARKER}{suffix}")

        try:
            client_source = await anyio.Path(client_path).read_text(encoding="utf-8")
        except OSError as exc:
            raise BuildError("bundle", f"client source unreadable: {exc}", source_path) from exc

        augmented = augment_source(client_source, self._bootstrap, page.component_name)
        await anyio.Path(temp_path).write_text(augmented, encoding="utf-8")
        try:
            return await self._bundler.bundle(temp_path)
        except Exception as exc:
            raise BuildError("bundle", str(exc), source_path) from exc
        finally:
            await anyio.Path(temp_path).unlink(missing_ok=True)
