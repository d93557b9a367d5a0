"""The SSR manifest — the sole contract between build and serve.

The build appends one :class:`ManifestEntry` per compiled page, in
discovery order, and writes the whole list once.  The server loads it
once at startup and never mutates it; the next build replaces it
wholesale.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import anyio

from sprout.context import SiteContext
from sprout.errors import BuildError
from sprout.pages.types import CompiledPage, PageHead, PageModule


@dataclass(frozen=True, slots=True)
class ManifestEntry:
    """One compiled page as recorded in the manifest.

    Paths are POSIX strings relative to the site root.

    Attributes:
        id: The page's artifact token.
        compiled: Raw client script path.
        path: Logical output directory of the page.
        url: ``"/"`` for the pages output root, otherwise ``path`` with
            that root stripped.
        middleware: Whether the page exports ``middleware``.
        head: Title/description, or ``None`` if the page has no ``head()``.
        source: Page module path, used to bind middleware at startup.
    """

    id: str
    compiled: str
    path: str
    url: str
    middleware: bool
    head: PageHead | None
    source: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "compiled": self.compiled,
            "path": self.path,
            "url": self.url,
            "middleware": self.middleware,
            "head": self.head.to_dict() if self.head is not None else None,
            "source": self.source,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ManifestEntry:
        head = data.get("head")
        return cls(
            id=data["id"],
            compiled=data["compiled"],
            path=data["path"],
            url=data["url"],
            middleware=bool(data.get("middleware", False)),
            head=PageHead.from_mapping(head) if head else None,
            source=data.get("source", ""),
        )


def url_for_path(path: str, pages_output_path: str) -> str:
    """Compute the route URL for a page's logical output directory."""
    if path == pages_output_path:
        return "/"
    return path.removeprefix(pages_output_path)


class Manifest(Sequence[ManifestEntry]):
    """Ordered, immutable collection of manifest entries.

    Ids and urls are checked for uniqueness on construction.
    """

    __slots__ = ("_by_url", "_entries")

    def __init__(self, entries: Sequence[ManifestEntry] = ()) -> None:
        self._entries: tuple[ManifestEntry, ...] = tuple(entries)
        seen: set[str] = set()
        self._by_url: dict[str, ManifestEntry] = {}
        for entry in self._entries:
            if entry.id in seen:
                raise BuildError("manifest", f"duplicate artifact id {entry.id!r}")
            if entry.url in self._by_url:
                raise BuildError("manifest", f"duplicate url {entry.url!r}")
            seen.add(entry.id)
            self._by_url[entry.url] = entry

    def __getitem__(self, index):  # type: ignore[override]
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ManifestEntry]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"Manifest({len(self)} entries)"

    def entry_for_url(self, url: str) -> ManifestEntry | None:
        """Return the entry served at *url*, if any."""
        return self._by_url.get(url)

    @property
    def urls(self) -> tuple[str, ...]:
        return tuple(e.url for e in self._entries)

    # -- Serialization --

    def to_json(self) -> str:
        return json.dumps([e.to_dict() for e in self._entries], indent=3)

    @classmethod
    def from_json(cls, text: str) -> Manifest:
        data = json.loads(text)
        if not isinstance(data, list):
            msg = f"manifest must be a JSON list, got {type(data).__name__}"
            raise ValueError(msg)
        return cls([ManifestEntry.from_dict(item) for item in data])

    @classmethod
    def load(cls, path: Path) -> Manifest:
        return cls.from_json(path.read_text(encoding="utf-8"))


class ManifestBuilder:
    """Accumulates entries during a build.

    Entries are appended in discovery order; :meth:`write` serializes
    the full list exactly once.
    """

    __slots__ = ("_context", "_entries")

    def __init__(self, context: SiteContext) -> None:
        self._context = context
        self._entries: list[ManifestEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def add(
        self,
        compiled: CompiledPage,
        page: PageModule,
        head: PageHead | None = None,
    ) -> ManifestEntry:
        """Record one successfully compiled page."""
        root = self._context.root
        path = compiled.output_dir.relative_to(root).as_posix()
        pages_output = self._context.pages_output_root.relative_to(root).as_posix()
        entry = ManifestEntry(
            id=compiled.artifact_id,
            compiled=compiled.raw_script_path.relative_to(root).as_posix(),
            path=path,
            url=url_for_path(path, pages_output),
            middleware=page.middleware is not None,
            head=head,
            source=_relative_or_absolute(compiled.source_path, root),
        )
        self._entries.append(entry)
        return entry

    def build(self) -> Manifest:
        return Manifest(self._entries)

    async def write(self) -> Manifest:
        """Serialize all accumulated entries to the manifest path."""
        manifest = self.build()
        path = anyio.Path(self._context.manifest_path)
        await path.parent.mkdir(parents=True, exist_ok=True)
        await path.write_text(manifest.to_json(), encoding="utf-8")
        return manifest


def _relative_or_absolute(path: Path, root: Path) -> str:
    if path.is_relative_to(root):
        return path.relative_to(root).as_posix()
    return path.as_posix()
