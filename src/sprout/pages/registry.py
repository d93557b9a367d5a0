"""Startup-resolved middleware table.

Page modules are loaded once, when the site starts serving, for every
manifest entry that declares middleware.  Requests look the bound
callable up by URL instead of re-importing the page on each hit.
"""

import logging
from collections.abc import Iterator, Mapping
from pathlib import Path

from sprout.build.manifest import Manifest
from sprout.errors import BuildError
from sprout.pages.discovery import load_page_module
from sprout.pages.types import Middleware

logger = logging.getLogger("sprout.server")


class PageRegistry(Mapping[str, Middleware]):
    """Immutable mapping of page URL to its bound middleware."""

    __slots__ = ("_table",)

    def __init__(self, table: Mapping[str, Middleware] | None = None) -> None:
        self._table: dict[str, Middleware] = dict(table or {})

    def __getitem__(self, url: str) -> Middleware:
        return self._table[url]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    @classmethod
    def from_manifest(cls, manifest: Manifest, root: Path) -> "PageRegistry":
        """Load the page module of every entry that declares middleware.

        Raises:
            BuildError: If a page module can no longer be imported or
                has lost its ``middleware`` export since the build.
        """
        table: dict[str, Middleware] = {}
        for entry in manifest:
            if not entry.middleware:
                continue
            page = load_page_module(root / entry.source)
            if page.middleware is None:
                raise BuildError(
                    "registry",
                    "manifest declares middleware but the page no longer exports one",
                    page.source_path,
                )
            table[entry.url] = page.middleware
            logger.debug("Bound middleware for %s from %s", entry.url, entry.source)
        return cls(table)
