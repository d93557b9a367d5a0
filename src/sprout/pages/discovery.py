"""Filesystem discovery and loading of page modules.

Walks the pages directory for files matching the page pattern and
imports each one to read its exports:

- ``component`` — required; rendered at build time and hydrated in
  the browser.
- ``middleware(request)`` — optional per-request context producer.
- ``head()`` — optional title/description for the document head.

Discovery order is sorted by path so the manifest order is stable
across builds.
"""

from __future__ import annotations

import hashlib
import importlib.util
from pathlib import Path

from sprout.errors import BuildError
from sprout.pages.types import PageModule

# Marker inserted into the name of the augmented module written beside
# each page during the build.
TEMP_MARKER = "__temp__"


def discover_pages(pages_dir: str | Path, pattern: str = "**/*.py") -> list[Path]:
    """Enumerate page module source paths.

    Args:
        pages_dir: Root directory to scan.
        pattern: Glob pattern, relative to *pages_dir*.

    Returns:
        Matching file paths, sorted.  Names beginning with ``_`` and
        leftover build temp files are skipped.
    """
    root = Path(pages_dir).resolve()
    if not root.is_dir():
        raise FileNotFoundError(f"Pages directory not found: {root}")

    pages: list[Path] = []
    for item in sorted(root.glob(pattern)):
        if not item.is_file():
            continue
        if item.name.startswith("_"):
            continue
        if TEMP_MARKER in item.stem:
            continue
        pages.append(item)
    return pages


def load_page_module(path: Path) -> PageModule:
    """Import a page module from *path* and collect its exports.

    Raises:
        BuildError: If the file cannot be imported or does not define a
            callable ``component``.
    """
    digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:12]
    module_name = f"_sprout_page_{path.stem}_{digest}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise BuildError("load", "not an importable module", path)

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise BuildError("load", f"{type(exc).__name__}: {exc}", path) from exc

    component = getattr(module, "component", None)
    if component is None or not callable(component):
        raise BuildError("load", "page module does not define a callable 'component'", path)

    middleware = getattr(module, "middleware", None)
    head = getattr(module, "head", None)
    return PageModule(
        source_path=path,
        component=component,
        middleware=middleware if callable(middleware) else None,
        head=head if callable(head) else None,
    )
