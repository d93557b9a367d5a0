"""Tests for sprout.config and sprout.context — settings and resolved paths."""

from pathlib import Path

import pytest

from sprout.config import SiteConfig
from sprout.context import MANIFEST_NAME, SiteContext
from sprout.errors import ConfigurationError


class TestSiteConfig:
    def test_defaults(self) -> None:
        cfg = SiteConfig()

        assert cfg.host == "127.0.0.1"
        assert cfg.port == 8080
        assert cfg.debug is False
        assert cfg.pages_dir == "pages"
        assert cfg.page_pattern == "**/*.py"
        assert cfg.client_suffix == ".jsx"
        assert cfg.template_path == "public/index.html"
        assert cfg.hydration_template is None
        assert cfg.dist_dir == "_sprout"
        assert cfg.static_prefix == "/public"
        assert cfg.api_prefix == "/api"
        assert cfg.esbuild_binary == "esbuild"
        assert cfg.infer_static_content_types is False
        assert cfg.granular_errors is False
        assert cfg.log_level == "info"

    def test_override(self) -> None:
        cfg = SiteConfig(port=3000, granular_errors=True, dist_dir="out")

        assert cfg.port == 3000
        assert cfg.granular_errors is True
        assert cfg.dist_prefix == "/out"

    def test_frozen(self) -> None:
        cfg = SiteConfig()

        with pytest.raises(AttributeError):
            cfg.port = 1  # type: ignore[misc]

    def test_effective_log_level(self) -> None:
        assert SiteConfig().effective_log_level == "info"
        assert SiteConfig(log_level="warning").effective_log_level == "warning"
        assert SiteConfig(debug=True, log_level="warning").effective_log_level == "debug"

    def test_dist_prefix_strips_slashes(self) -> None:
        assert SiteConfig(dist_dir="/_sprout/").dist_prefix == "/_sprout"


class TestSiteContext:
    def test_paths_resolve_against_root(self, tmp_path: Path) -> None:
        ctx = SiteContext.from_config(SiteConfig(root=tmp_path))
        root = tmp_path.resolve()

        assert ctx.root == root
        assert ctx.pages_root == root / "pages"
        assert ctx.dist_root == root / "_sprout"
        assert ctx.build_root == root / "_sprout" / "build"
        assert ctx.pages_output_root == root / "_sprout" / "build" / "pages"
        assert ctx.manifest_path == root / "_sprout" / "build" / MANIFEST_NAME
        assert ctx.template_path == root / "public" / "index.html"

    def test_nested_dist_dir_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            SiteContext.from_config(SiteConfig(root=tmp_path, dist_dir="a/b"))

    def test_empty_dist_dir_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            SiteContext.from_config(SiteConfig(root=tmp_path, dist_dir="/"))

    def test_url_for_output(self, tmp_path: Path) -> None:
        ctx = SiteContext.from_config(SiteConfig(root=tmp_path))
        script = ctx.pages_output_root / "home" / "abc.min.js"

        assert ctx.url_for_output(script) == "/_sprout/build/pages/home/abc.min.js"

    def test_resolve_request_path(self, tmp_path: Path) -> None:
        ctx = SiteContext.from_config(SiteConfig(root=tmp_path))

        assert ctx.resolve_request_path("/public/foo.png") == ctx.root / "public" / "foo.png"

    def test_resolve_request_path_can_escape(self, tmp_path: Path) -> None:
        ctx = SiteContext.from_config(SiteConfig(root=tmp_path / "site"))

        resolved = ctx.resolve_request_path("/public/../../secret")
        assert not resolved.is_relative_to(ctx.root)
