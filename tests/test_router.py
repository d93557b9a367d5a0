"""Tests for sprout.server.router — fixed-priority request classification."""

from sprout.config import SiteConfig
from sprout.server.router import RouteClass, classify, matches_prefix


class TestMatchesPrefix:
    def test_exact(self) -> None:
        assert matches_prefix("/public", "/public")

    def test_below(self) -> None:
        assert matches_prefix("/public/foo.png", "/public")

    def test_sibling_name_does_not_match(self) -> None:
        assert not matches_prefix("/publicity", "/public")

    def test_prefix_without_leading_slash(self) -> None:
        assert matches_prefix("/_sprout/x.js", "_sprout/")


class TestClassify:
    def test_static_asset(self) -> None:
        assert classify("/public/foo.png", SiteConfig()) is RouteClass.STATIC_ASSET

    def test_api(self) -> None:
        assert classify("/api/users", SiteConfig()) is RouteClass.API

    def test_dist_asset(self) -> None:
        path = "/_sprout/build/pages/abc.min.js"
        assert classify(path, SiteConfig()) is RouteClass.DIST_ASSET

    def test_page_fallback(self) -> None:
        cfg = SiteConfig()
        assert classify("/", cfg) is RouteClass.PAGE
        assert classify("/home", cfg) is RouteClass.PAGE
        assert classify("/does/not/exist", cfg) is RouteClass.PAGE

    def test_non_path_target_is_not_found(self) -> None:
        assert classify("*", SiteConfig()) is RouteClass.NOT_FOUND

    def test_first_match_wins(self) -> None:
        # A dist dir named like the static prefix is still served as static.
        cfg = SiteConfig(dist_dir="public")
        assert classify("/public/a.js", cfg) is RouteClass.STATIC_ASSET

    def test_custom_prefixes(self) -> None:
        cfg = SiteConfig(static_prefix="/assets", api_prefix="/rpc", dist_dir="out")

        assert classify("/assets/a.css", cfg) is RouteClass.STATIC_ASSET
        assert classify("/rpc/call", cfg) is RouteClass.API
        assert classify("/out/a.js", cfg) is RouteClass.DIST_ASSET
        assert classify("/public/a.css", cfg) is RouteClass.PAGE
