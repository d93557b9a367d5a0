"""Async test client for sprout sites.

Uses the same Request and Response types as production.
No wrapper translation layer.
"""

from typing import Any

from sprout.http.response import Response
from sprout.site import Site


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Async test client for sprout sites.

    Sends requests through the ASGI interface directly, no sockets.
    The site must already be built; entering the client runs the ASGI
    lifespan startup, which loads the manifest and binds middleware.

    Usage::

        await site.build()
        async with TestClient(site) as client:
            response = await client.get("/")
            assert response.status == 200
    """

    __slots__ = ("host", "site")

    def __init__(self, site: Site, *, host: str = "testserver") -> None:
        self.site = site
        self.host = host

    async def __aenter__(self) -> "TestClient":
        # Startup loads the manifest; shutdown ends the lifespan loop.
        # Loaded state stays on the site for the requests that follow.
        messages = [{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}]
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return messages.pop(0)

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await self.site({"type": "lifespan", "asgi": {"version": "3.0"}}, receive, send)
        failed = [m for m in sent if m["type"] == "lifespan.startup.failed"]
        if failed:
            msg = f"Site failed to start: {failed[0].get('message', '')}"
            raise RuntimeError(msg)
        return self

    async def __aexit__(self, *args: object) -> None:
        return None

    async def get(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
    ) -> Response:
        """Send a GET request."""
        return await self.request("GET", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        """Send a POST request."""
        return await self.request("POST", path, headers=headers, body=body)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        """Send an arbitrary request through the ASGI app.

        A ``host`` header is added unless *headers* sets one; pass
        ``{"host": ""}`` to send a request without a usable host.
        """
        if "?" in path:
            path_part, query_string = path.split("?", 1)
        else:
            path_part = path
            query_string = ""

        merged = {"host": self.host, **(headers or {})}
        raw_headers: list[tuple[bytes, bytes]] = []
        for name, value in merged.items():
            raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "scheme": "http",
            "path": path_part,
            "raw_path": path_part.encode("latin-1"),
            "query_string": query_string.encode("latin-1"),
            "root_path": "",
            "headers": raw_headers,
            "server": ("testserver", 80),
            "client": ("127.0.0.1", 0),
        }

        request_body = body or b""
        body_sent = False

        async def receive() -> dict[str, Any]:
            nonlocal body_sent
            if not body_sent:
                body_sent = True
                return {"type": "http.request", "body": request_body, "more_body": False}
            return {"type": "http.disconnect"}

        response_status = 200
        response_headers: list[tuple[bytes, bytes]] = []
        response_body_parts: list[bytes] = []

        async def send(message: dict[str, Any]) -> None:
            nonlocal response_status, response_headers
            if message["type"] == "http.response.start":
                response_status = message["status"]
                response_headers = list(message.get("headers", []))
            elif message["type"] == "http.response.body":
                response_body_parts.append(message.get("body", b""))

        await self.site(scope, receive, send)

        content_type = "text/html; charset=utf-8"
        extra_headers: list[tuple[str, str]] = []
        for name_b, value_b in response_headers:
            name_str = name_b.decode("latin-1")
            value_str = value_b.decode("latin-1")
            if name_str == "content-type":
                content_type = value_str
            elif name_str != "content-length":
                extra_headers.append((name_str, value_str))

        return Response(
            body=b"".join(response_body_parts),
            status=response_status,
            content_type=content_type,
            headers=tuple(extra_headers),
        )
