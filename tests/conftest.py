"""Shared fixtures: a small on-disk site and in-process asset tools."""

from pathlib import Path

import pytest

from sprout.config import SiteConfig
from sprout.site import Site

SHELL = """<!doctype html>
<html>
<head><meta charset="utf-8"></head>
<body>
<div id="__sprout"></div>
</body>
</html>
"""

INDEX_PAGE = '''
from sprout.pages import template_component

component = template_component("IndexPage", "<h1>Index</h1>")


def head():
    return {"title": "Index & Co", "description": "The landing page"}
'''

HOME_PAGE = '''
from sprout.pages import template_component

component = template_component("HomePage", "<h1>Home</h1>")


def middleware(request):
    return {"props": {"url": request.url, "greeting": "héllo"}}
'''

ABOUT_PAGE = '''
def AboutPage(**props):
    return "<p>About</p>"


component = AboutPage
'''


class FakeBundler:
    """Returns the entry's source as the bundle; records what it saw."""

    def __init__(self) -> None:
        self.entries: list[Path] = []
        self.sources: list[str] = []

    async def bundle(self, entry: Path) -> str:
        self.entries.append(entry)
        source = entry.read_text(encoding="utf-8")
        self.sources.append(source)
        return f"/* bundled {entry.name} */\n{source}"


class FakeMinifier:
    """Writes a whitespace-collapsed copy; can be told to fail."""

    def __init__(self, *, fail_on: str | None = None) -> None:
        self.fail_on = fail_on
        self.calls: list[tuple[Path, Path]] = []

    async def minify(self, source: Path, output: Path) -> None:
        self.calls.append((source, output))
        if source.parent.name == self.fail_on:
            msg = f"cannot minify {source.name}"
            raise RuntimeError(msg)
        output.write_text(" ".join(source.read_text(encoding="utf-8").split()), encoding="utf-8")


def write_page(pages: Path, relative: str, source: str, client: str = "export default 1;\n") -> Path:
    """Write a page module and its client source; return the module path."""
    path = pages / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source, encoding="utf-8")
    path.with_suffix(".jsx").write_text(client, encoding="utf-8")
    return path


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """A site with three pages, one of which has middleware."""
    root = tmp_path / "site"
    public = root / "public"
    public.mkdir(parents=True)
    (public / "index.html").write_text(SHELL, encoding="utf-8")
    (public / "foo.png").write_bytes(b"\x89PNG\r\n\x1a\n")

    pages = root / "pages"
    write_page(pages, "index.py", INDEX_PAGE, "export function IndexPage() {}\n")
    write_page(pages, "home/index.py", HOME_PAGE, "export function HomePage() {}\n")
    write_page(pages, "about.py", ABOUT_PAGE, "export function AboutPage() {}\n")
    return root


@pytest.fixture
def bundler() -> FakeBundler:
    return FakeBundler()


@pytest.fixture
def minifier() -> FakeMinifier:
    return FakeMinifier()


@pytest.fixture
def make_site(site_root: Path, bundler: FakeBundler, minifier: FakeMinifier):
    """Factory for a Site over ``site_root`` with config overrides."""

    def factory(**overrides: object) -> Site:
        config = SiteConfig(root=site_root, **overrides)
        return Site(config, bundler=bundler, minifier=minifier)

    return factory


@pytest.fixture
def site(make_site) -> Site:
    return make_site()
