"""Build phase: page compilation, client bundling, and the SSR manifest."""

from sprout.build.assets import AssetError, Bundler, EsbuildBundler, EsbuildMinifier, Minifier
from sprout.build.compiler import PageCompiler, compose_html
from sprout.build.manifest import Manifest, ManifestBuilder, ManifestEntry
from sprout.build.pipeline import build_site

__all__ = [
    "AssetError",
    "Bundler",
    "EsbuildBundler",
    "EsbuildMinifier",
    "Manifest",
    "ManifestBuilder",
    "ManifestEntry",
    "Minifier",
    "PageCompiler",
    "build_site",
    "compose_html",
]
