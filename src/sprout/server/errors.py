"""Error handling pipeline for sprout requests.

Handlers raise :class:`~sprout.errors.RouteError` tagged with an
:class:`~sprout.errors.ErrorKind`.  Each route class owns a table
mapping kinds to status codes; kinds missing from a table use the
table's ``INTERNAL`` status.

The default tables collapse every failure into one status per route
class: 500 with the failure text for assets, a generic 404 for pages.
``SiteConfig.granular_errors`` swaps in :data:`GRANULAR_STATUS`.
"""

import logging
from collections.abc import Mapping

from sprout.errors import ErrorKind, HTTPError, RouteError
from sprout.http.request import Request
from sprout.http.response import Response
from sprout.server.router import RouteClass

logger = logging.getLogger("sprout.server")

StatusTable = Mapping[ErrorKind, int]

ASSET_STATUS: StatusTable = {ErrorKind.INTERNAL: 500}

PAGE_STATUS: StatusTable = {kind: 404 for kind in ErrorKind}

GRANULAR_STATUS: StatusTable = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.IO_FAILURE: 500,
    ErrorKind.RENDER_FAILURE: 500,
    ErrorKind.MIDDLEWARE_FAILURE: 500,
    ErrorKind.INTERNAL: 500,
}

NOT_FOUND_BODY = "NOT FOUND"
INTERNAL_BODY = "Internal Server Error"


def status_for(kind: ErrorKind, table: StatusTable) -> int:
    """Look up *kind*, defaulting to the table's INTERNAL status."""
    return table.get(kind, table.get(ErrorKind.INTERNAL, 500))


def table_for(route_class: RouteClass, *, granular: bool) -> StatusTable:
    if granular:
        return GRANULAR_STATUS
    if route_class is RouteClass.PAGE:
        return PAGE_STATUS
    return ASSET_STATUS


def handle_route_error(
    exc: RouteError,
    request: Request,
    route_class: RouteClass,
    *,
    granular: bool = False,
) -> Response:
    """Convert a handler failure into a response."""
    status = status_for(exc.kind, table_for(route_class, granular=granular))

    if exc.kind is ErrorKind.INTERNAL:
        logger.error(
            "%d %s %s: %s", status, request.method, request.path, exc.detail, exc_info=exc
        )
    else:
        logger.debug(
            "%d %s %s: %s: %s", status, request.method, request.path, exc.kind.value, exc.detail
        )

    if route_class is RouteClass.PAGE:
        body = NOT_FOUND_BODY if status == 404 else INTERNAL_BODY
        return Response(body=body, status=status, content_type="text/plain; charset=utf-8")

    return Response(body=exc.detail, status=status)


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Map an HTTPError raised before or instead of dispatch to a Response."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
    resp = Response(
        body=exc.detail or f"Error {exc.status}",
        status=exc.status,
        content_type="text/plain; charset=utf-8",
    )
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp
