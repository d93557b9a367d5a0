"""ASGI handler — translates ASGI scope/messages to sprout types.

The only component that touches raw ASGI directly. Converts scope dicts
to typed Request objects, classifies and dispatches them, and sends
the Response back through ASGI send().

Each request moves ``received → classified → dispatched → responded``;
a handler failure moves it to ``errored`` and is converted to a
response by :mod:`sprout.server.errors`.
"""

import logging
from collections.abc import Awaitable, Callable

from sprout._internal.asgi import Receive, Scope, Send
from sprout._internal.invoke import invoke
from sprout.errors import ErrorKind, HTTPError, RouteError
from sprout.http.request import Request
from sprout.http.response import Response
from sprout.server.errors import handle_http_error, handle_route_error
from sprout.server.handlers import (
    ServeState,
    handle_api,
    handle_dist_asset,
    handle_not_found,
    handle_page,
    handle_static_asset,
)
from sprout.server.router import RouteClass, RouteState, classify
from sprout.server.sender import send_response

logger = logging.getLogger("sprout.server")

RouteHandler = Callable[[Request, ServeState], Response | Awaitable[Response]]

HANDLERS: dict[RouteClass, RouteHandler] = {
    RouteClass.STATIC_ASSET: handle_static_asset,
    RouteClass.API: handle_api,
    RouteClass.DIST_ASSET: handle_dist_asset,
    RouteClass.PAGE: handle_page,
    RouteClass.NOT_FOUND: handle_not_found,
}


def _transition(request: Request, state: RouteState) -> None:
    logger.debug("%s %s %s", state.value, request.method, request.path)


async def dispatch(request: Request, state: ServeState) -> Response:
    """Classify and answer one request."""
    _transition(request, RouteState.RECEIVED)

    if not request.headers.get("host"):
        return handle_http_error(HTTPError(status=400, detail="INVALID HOST"), request)

    route_class = classify(request.path, state.context.config)
    _transition(request, RouteState.CLASSIFIED)

    try:
        _transition(request, RouteState.DISPATCHED)
        response = await invoke(HANDLERS[route_class], request, state)
    except HTTPError as exc:
        _transition(request, RouteState.ERRORED)
        return handle_http_error(exc, request)
    except RouteError as exc:
        _transition(request, RouteState.ERRORED)
        return handle_route_error(
            exc, request, route_class, granular=state.context.config.granular_errors
        )
    except Exception as exc:
        _transition(request, RouteState.ERRORED)
        internal = RouteError(ErrorKind.INTERNAL, f"{type(exc).__name__}: {exc}")
        internal.__cause__ = exc
        return handle_route_error(
            internal, request, route_class, granular=state.context.config.granular_errors
        )

    _transition(request, RouteState.RESPONDED)
    return response


async def handle_request(scope: Scope, receive: Receive, send: Send, *, state: ServeState) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    response = await dispatch(request, state)
    await send_response(response, send)
