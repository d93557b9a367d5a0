"""Data models for page modules and their compiled artifacts.

Immutable frozen dataclasses.  ``PageModule`` is read-only build input;
``CompiledPage`` is produced once per page per build.
"""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

# middleware(request) -> {"props": ...}, sync or async
Middleware = Callable[..., Mapping[str, Any] | Awaitable[Mapping[str, Any]]]


@dataclass(frozen=True, slots=True)
class PageHead:
    """Document metadata a page contributes to the shell's ``<head>``."""

    title: str
    description: str

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "description": self.description}

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PageHead":
        return cls(
            title=str(data.get("title", "")),
            description=str(data.get("description", "")),
        )


@dataclass(frozen=True, slots=True)
class PageModule:
    """A loaded page module.

    Attributes:
        source_path: Filesystem path of the ``.py`` file.
        component: The module's ``component``, rendered to static HTML
            at build time and referenced by name in the hydration
            bootstrap.
        middleware: Optional per-request context producer.
        head: Optional ``head()`` returning ``{"title", "description"}``.
    """

    source_path: Path
    component: Callable[..., Any]
    middleware: Middleware | None = None
    head: Callable[[], Mapping[str, Any]] | None = None

    @property
    def component_name(self) -> str:
        return getattr(self.component, "__name__", type(self.component).__name__)

    def resolve_head(self) -> PageHead | None:
        """Call ``head()`` if the page defines one."""
        if self.head is None:
            return None
        return PageHead.from_mapping(self.head())


@dataclass(frozen=True, slots=True)
class CompiledPage:
    """Artifacts written for one page by one build.

    Attributes:
        source_path: The page module the artifacts came from.
        output_dir: Directory holding the three artifacts.
        html_output_path: ``<output_dir>/index.html``.
        raw_script_path: ``<output_dir>/<artifact_id>.js``.
        minified_script_path: ``<output_dir>/<artifact_id>.min.js``.
        artifact_id: Random token naming the scripts; unique per build.
    """

    source_path: Path
    output_dir: Path
    html_output_path: Path
    raw_script_path: Path
    minified_script_path: Path
    artifact_id: str
