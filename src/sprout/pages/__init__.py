"""Page modules: discovery, loading, and rendering.

A page is a Python module under the pages directory::

    pages/
      index.py         # GET /
      index.jsx        # client source hydrated in the browser
      home/
        index.py       # GET /home
        index.jsx

Each module exports ``component`` and optionally ``middleware(request)``
and ``head()``.
"""

from sprout.pages.discovery import discover_pages, load_page_module
from sprout.pages.render import render_component, template_component
from sprout.pages.types import CompiledPage, PageHead, PageModule

__all__ = [
    "CompiledPage",
    "PageHead",
    "PageModule",
    "discover_pages",
    "load_page_module",
    "render_component",
    "template_component",
]
