"""The build phase.

Wipes the distribution directory, discovers page modules, compiles
them one by one, and writes the manifest.  Any failure aborts the whole
build; no manifest is written for a failed build.
"""

from __future__ import annotations

import logging
import shutil
import time

import anyio
import anyio.to_thread

from sprout.build.assets import Bundler, EsbuildBundler, EsbuildMinifier, Minifier
from sprout.build.compiler import STATIC_NODE, PageCompiler, Renderer
from sprout.build.hydration import load_bootstrap
from sprout.build.manifest import Manifest, ManifestBuilder
from sprout.context import SiteContext
from sprout.errors import BuildError
from sprout.pages.discovery import discover_pages
from sprout.pages.render import render_component

logger = logging.getLogger("sprout.build")


async def _load_template(context: SiteContext) -> str:
    try:
        template = await anyio.Path(context.template_path).read_text(encoding="utf-8")
    except OSError as exc:
        raise BuildError("template", f"cannot read {context.template_path}: {exc}") from exc
    if STATIC_NODE not in template:
        raise BuildError("template", f"{context.template_path} has no {STATIC_NODE} mount point")
    return template


async def build_site(
    context: SiteContext,
    *,
    bundler: Bundler | None = None,
    minifier: Minifier | None = None,
    renderer: Renderer = render_component,
) -> Manifest:
    """Run a full build and return the written manifest.

    Args:
        context: Resolved site paths and configuration.
        bundler: Client bundler; defaults to esbuild.
        minifier: Script minifier; defaults to esbuild.
        renderer: Component renderer for the static HTML.

    Raises:
        BuildError: On any failure.  The distribution directory may be
            left half-written, but no manifest is produced.
    """
    config = context.config
    started = time.perf_counter()
    logger.info("Starting build of %s", context.pages_root)

    template = await _load_template(context)
    try:
        bootstrap = await anyio.to_thread.run_sync(
            load_bootstrap,
            context.root / config.hydration_template if config.hydration_template else None,
        )
    except OSError as exc:
        raise BuildError("template", f"cannot read hydration template: {exc}") from exc

    try:
        pages = await anyio.to_thread.run_sync(
            discover_pages, context.pages_root, config.page_pattern
        )
    except FileNotFoundError as exc:
        raise BuildError("discover", str(exc)) from exc

    if await anyio.Path(context.dist_root).exists():
        await anyio.to_thread.run_sync(shutil.rmtree, context.dist_root)
    await anyio.Path(context.build_root).mkdir(parents=True)

    compiler = PageCompiler(
        context,
        template=template,
        bootstrap=bootstrap,
        bundler=bundler or EsbuildBundler(config.esbuild_binary),
        minifier=minifier or EsbuildMinifier(config.esbuild_binary),
        renderer=renderer,
    )
    builder = ManifestBuilder(context)

    for source_path in pages:
        try:
            compiled, page, head = await compiler.compile_page(source_path)
        except BuildError:
            logger.error("Build failed at %s", source_path)
            raise
        except Exception as exc:
            logger.error("Build failed at %s", source_path)
            raise BuildError("compile", f"{type(exc).__name__}: {exc}", source_path) from exc
        builder.add(compiled, page, head)

    manifest = await builder.write()
    logger.info(
        "Built %d page(s) in %.2fs; manifest at %s",
        len(manifest),
        time.perf_counter() - started,
        context.manifest_path,
    )
    return manifest
