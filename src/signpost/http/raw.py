"""The inbound request as the host hands it over.

Replaces process-wide request globals with an explicit value: the router
reads nothing it is not given, so synthetic requests need no server.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from signpost._internal.asgi import Receive, Scope
from signpost.http.headers import Headers


@dataclass(frozen=True, slots=True)
class RawRequest:
    """An unrouted HTTP request.

    ``uri`` is the full request target including the query string. ``body``
    is the complete, already-read request body. ``client`` is the direct
    peer address, when the host knows it.
    """

    method: str
    uri: str
    headers: Headers = field(default_factory=Headers)
    body: bytes = b""
    client: str | None = None

    @classmethod
    def build(
        cls,
        method: str,
        uri: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: bytes | str = b"",
        client: str | None = None,
    ) -> RawRequest:
        """Create a RawRequest from plain Python values.

        Convenient for tests and non-ASGI hosts::

            raw = RawRequest.build("GET", "/users/1?full=1", headers={"X-Forwarded-For": "1.2.3.4"})

        Header names and values must be latin-1 encodable, as on the wire;
        anything else raises ``ValueError``.
        """
        if isinstance(body, str):
            body = body.encode("utf-8")
        return cls(
            method=method,
            uri=uri,
            headers=Headers.from_mapping(headers or {}),
            body=body,
            client=client,
        )

    @classmethod
    async def from_asgi(cls, scope: Scope, receive: Receive) -> RawRequest:
        """Create a RawRequest from an ASGI scope, reading the whole body."""
        query_string: bytes = scope.get("query_string", b"")
        raw_path: bytes | None = scope.get("raw_path")
        # ``path`` is percent-decoded; an encoded "?" or "/" must stay encoded.
        uri = raw_path.decode("latin-1") if raw_path else scope["path"]
        if query_string:
            uri = f"{uri}?{query_string.decode('latin-1')}"
        client: Any = scope.get("client")
        return cls(
            method=scope["method"],
            uri=uri,
            headers=Headers.from_asgi(scope.get("headers", ())),
            body=await _read_body(receive),
            client=client[0] if client else None,
        )


async def _read_body(receive: Receive) -> bytes:
    """Drain ``http.request`` messages into one bytes object."""
    chunks: list[bytes] = []
    while True:
        message = await receive()
        body = message.get("body", b"")
        if body:
            chunks.append(body)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)
