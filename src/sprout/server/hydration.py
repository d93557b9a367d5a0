"""Embed per-request context in served HTML.

The context is serialized to JSON, UTF-8 encoded, and written as a
comma-separated list of byte values on a marker element just before
``</body>``.  The client bootstrap decodes it with ``TextDecoder``.
"""

import html
import json
from typing import Any

MARKER_ID = "__SPROUT__"
CONTEXT_ATTR = "data-sprout-context"
ROUTE_ATTR = "data-sprout-route"


def encode_context(context: Any) -> str:
    """Serialize *context* to the marker's byte-list attribute value."""
    payload = json.dumps(context, ensure_ascii=False).encode("utf-8")
    return ",".join(str(b) for b in payload)


def decode_context(value: str) -> Any:
    """Inverse of :func:`encode_context`."""
    if not value:
        return None
    payload = bytes(int(part) for part in value.split(","))
    return json.loads(payload.decode("utf-8"))


def hydration_marker(context: Any, route: str) -> str:
    return (
        f'<script id="{MARKER_ID}" {CONTEXT_ATTR}="{encode_context(context)}"'
        f' {ROUTE_ATTR}="{html.escape(route, quote=True)}"></script>'
    )


def inject_context(document: str, context: Any, route: str) -> str:
    """Insert the hydration marker before the last ``</body>``.

    Documents without a closing body tag get the marker appended.
    """
    marker = hydration_marker(context, route)
    idx = document.rfind("</body>")
    if idx == -1:
        return document + marker
    return document[:idx] + marker + document[idx:]
