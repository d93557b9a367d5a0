"""Route handlers, one per route class.

Handlers receive the request and the immutable :class:`ServeState`
loaded at startup.  Failures are raised as
:class:`~sprout.errors.RouteError` and converted to responses by
:mod:`sprout.server.errors`.
"""

import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import anyio

from sprout._internal.invoke import invoke
from sprout.build.manifest import Manifest
from sprout.context import SiteContext
from sprout.errors import ErrorKind, NotFound, RouteError
from sprout.http.request import Request
from sprout.http.response import Response
from sprout.pages.registry import PageRegistry
from sprout.server.hydration import inject_context

STATIC_CONTENT_TYPE = "text/html; charset=utf-8"
DIST_CONTENT_TYPE = "application/javascript; charset=utf-8"


def placeholder_context() -> dict[str, Any]:
    """Context for pages without middleware."""
    return {}


@dataclass(frozen=True, slots=True)
class ServeState:
    """Everything request handling reads; fixed for the process lifetime."""

    context: SiteContext
    manifest: Manifest
    registry: PageRegistry


async def _read_asset(state: ServeState, request_path: str) -> tuple[Path, bytes]:
    local = state.context.resolve_request_path(request_path)
    if not local.is_relative_to(state.context.root):
        raise RouteError(ErrorKind.NOT_FOUND, f"{request_path} resolves outside the site root")
    try:
        return local, await anyio.Path(local).read_bytes()
    except OSError as exc:
        raise RouteError(ErrorKind.IO_FAILURE, str(exc)) from exc


async def handle_static_asset(request: Request, state: ServeState) -> Response:
    """Serve ``<root><path>`` for the public prefix."""
    local, body = await _read_asset(state, request.path)
    content_type = STATIC_CONTENT_TYPE
    if state.context.config.infer_static_content_types:
        guessed, _ = mimetypes.guess_type(local.name)
        content_type = guessed or "application/octet-stream"
    return Response(body=body, content_type=content_type)


async def handle_dist_asset(request: Request, state: ServeState) -> Response:
    """Serve compiled client scripts from the distribution directory."""
    _, body = await _read_asset(state, request.path)
    return Response(body=body, content_type=DIST_CONTENT_TYPE)


def handle_api(request: Request, state: ServeState) -> Response:  # noqa: ARG001
    """Reserved extension point; answers every request the same way."""
    return Response(body="API", content_type="text/plain; charset=utf-8")


def handle_not_found(request: Request, state: ServeState) -> Response:  # noqa: ARG001
    raise NotFound()


async def handle_page(request: Request, state: ServeState) -> Response:
    """Serve a pre-rendered page with fresh hydration context."""
    context = state.context
    route = request.path.rstrip("/") or "/"
    output_dir = (context.pages_output_root / route.lstrip("/")).resolve()
    if not output_dir.is_relative_to(context.pages_output_root):
        raise RouteError(ErrorKind.NOT_FOUND, f"{request.path} is outside the pages output")

    entry = state.manifest.entry_for_url(route)
    if entry is not None and entry.middleware:
        props = await _run_middleware(request, state, route)
    else:
        props = placeholder_context()

    try:
        document = await anyio.Path(output_dir / "index.html").read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise RouteError(ErrorKind.NOT_FOUND, f"no compiled page for {route}") from exc
    except OSError as exc:
        raise RouteError(ErrorKind.IO_FAILURE, str(exc)) from exc

    try:
        document = inject_context(document, props, request.path)
    except (TypeError, ValueError) as exc:
        raise RouteError(ErrorKind.RENDER_FAILURE, f"context is not serializable: {exc}") from exc

    return Response(body=document)


async def _run_middleware(request: Request, state: ServeState, route: str) -> Any:
    middleware = state.registry.get(route)
    if middleware is None:
        raise RouteError(ErrorKind.MIDDLEWARE_FAILURE, f"no middleware bound for {route}")
    try:
        result = await invoke(middleware, request)
    except Exception as exc:
        raise RouteError(
            ErrorKind.MIDDLEWARE_FAILURE, f"{type(exc).__name__}: {exc}"
        ) from exc
    try:
        return result["props"]
    except (KeyError, TypeError) as exc:
        raise RouteError(
            ErrorKind.MIDDLEWARE_FAILURE, f"middleware for {route} did not return 'props'"
        ) from exc
