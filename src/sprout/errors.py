"""Sprout exception hierarchy.

Shared by the build pipeline, the request router, and the route
handlers so every module raises and catches the same types.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class SproutError(Exception):
    """Base for all sprout-specific errors."""


class ConfigurationError(SproutError):
    """Raised when site configuration is invalid."""


class BuildError(SproutError):
    """A fatal failure during the build phase.

    Any build failure aborts the whole build: no partial manifest is
    written and the server is never started.  The original exception is
    chained as ``__cause__``.

    Attributes:
        stage: The build step that failed (``"load"``, ``"bundle"``,
            ``"render"``, ``"minify"``, ...).
        source_path: The page being compiled, or ``None`` for failures
            outside a single page (template, manifest).
    """

    def __init__(self, stage: str, detail: str, source_path: Path | None = None) -> None:
        self.stage = stage
        self.detail = detail
        self.source_path = source_path
        where = f" [{source_path}]" if source_path is not None else ""
        super().__init__(f"{stage}{where}: {detail}")


@dataclass(frozen=True, slots=True)
class HTTPError(SproutError):
    """An error that maps directly to an HTTP status code."""

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — fixed plain-text not-found response."""

    def __init__(self, detail: str = "NOT FOUND") -> None:
        super().__init__(status=404, detail=detail)


class ErrorKind(Enum):
    """Closed set of request-time failure causes.

    Each route class maps these to a status code through a table in
    :mod:`sprout.server.errors`.
    """

    NOT_FOUND = "not_found"
    IO_FAILURE = "io_failure"
    RENDER_FAILURE = "render_failure"
    MIDDLEWARE_FAILURE = "middleware_failure"
    INTERNAL = "internal"


class RouteError(SproutError):
    """A handler failure tagged with its :class:`ErrorKind`.

    ``detail`` is the failure's textual description; asset routes send
    it back verbatim as the 500 body.
    """

    def __init__(self, kind: ErrorKind, detail: str) -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(detail)
