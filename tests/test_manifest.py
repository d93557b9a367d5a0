"""Tests for sprout.build.manifest — entries, URLs, and serialization."""

import json
from pathlib import Path

import pytest

from sprout.build.manifest import Manifest, ManifestBuilder, ManifestEntry, url_for_path
from sprout.config import SiteConfig
from sprout.context import SiteContext
from sprout.errors import BuildError
from sprout.pages.types import PageHead


def _entry(id: str, url: str, *, middleware: bool = False, head: PageHead | None = None):
    path = "_sprout/build/pages" + ("" if url == "/" else url)
    return ManifestEntry(
        id=id,
        compiled=f"{path}/{id}.js",
        path=path,
        url=url,
        middleware=middleware,
        head=head,
        source="pages/index.py",
    )


class TestUrlForPath:
    def test_root_is_slash(self) -> None:
        assert url_for_path("_sprout/build/pages", "_sprout/build/pages") == "/"

    def test_nested(self) -> None:
        assert url_for_path("_sprout/build/pages/home", "_sprout/build/pages") == "/home"

    def test_deep(self) -> None:
        assert url_for_path("_sprout/build/pages/a/b", "_sprout/build/pages") == "/a/b"


class TestManifest:
    def test_lookup_by_url(self) -> None:
        manifest = Manifest([_entry("a", "/"), _entry("b", "/home", middleware=True)])

        assert manifest.entry_for_url("/home").id == "b"
        assert manifest.entry_for_url("/missing") is None
        assert manifest.urls == ("/", "/home")

    def test_sequence_protocol(self) -> None:
        manifest = Manifest([_entry("a", "/"), _entry("b", "/home")])

        assert len(manifest) == 2
        assert manifest[1].id == "b"
        assert [e.id for e in manifest] == ["a", "b"]

    def test_duplicate_ids_rejected(self) -> None:
        with pytest.raises(BuildError):
            Manifest([_entry("a", "/"), _entry("a", "/home")])

    def test_duplicate_urls_rejected(self) -> None:
        with pytest.raises(BuildError, match="duplicate url"):
            Manifest([_entry("a", "/about"), _entry("b", "/about")])

    def test_json_shape(self) -> None:
        head = PageHead(title="T", description="D")
        manifest = Manifest([_entry("a", "/", head=head)])
        data = json.loads(manifest.to_json())

        assert data == [
            {
                "id": "a",
                "compiled": "_sprout/build/pages/a.js",
                "path": "_sprout/build/pages",
                "url": "/",
                "middleware": False,
                "head": {"title": "T", "description": "D"},
                "source": "pages/index.py",
            }
        ]

    def test_json_indent(self) -> None:
        text = Manifest([_entry("a", "/")]).to_json()
        assert '\n   {\n      "id"' in text

    def test_null_head_round_trips(self) -> None:
        manifest = Manifest([_entry("a", "/")])
        assert Manifest.from_json(manifest.to_json())[0].head is None

    def test_from_json_requires_list(self) -> None:
        with pytest.raises(ValueError):
            Manifest.from_json('{"id": "a"}')

    def test_save_and_load(self, tmp_path: Path) -> None:
        path = tmp_path / "build" / "ssr_manifest.json"
        manifest = Manifest([_entry("a", "/"), _entry("b", "/home", middleware=True)])

        path.parent.mkdir(parents=True)
        path.write_text(manifest.to_json(), encoding="utf-8")
        loaded = Manifest.load(path)

        assert list(loaded) == list(manifest)

    def test_missing_middleware_defaults_false(self) -> None:
        entry = ManifestEntry.from_dict(
            {"id": "a", "compiled": "x.js", "path": "p", "url": "/", "head": None}
        )
        assert entry.middleware is False
        assert entry.source == ""


class TestManifestBuilder:
    async def test_write_creates_manifest(self, tmp_path: Path) -> None:
        context = SiteContext.from_config(SiteConfig(root=tmp_path))
        builder = ManifestBuilder(context)

        manifest = await builder.write()

        assert len(manifest) == 0
        assert context.manifest_path.read_text(encoding="utf-8") == "[]"
