"""Outbound response: a chainable writer over a host transport.

The writer holds no response state of its own. Every call goes straight
to the transport in call order; ``end()`` halts the route program.
"""

from __future__ import annotations

import json as json_module
from typing import Any, Protocol

from signpost.errors import ResponseEnded

JSON_CONTENT_TYPE = "application/json"


class Transport(Protocol):
    """The live outbound response the host exposes."""

    def set_status(self, status: int) -> None: ...

    def set_header(self, name: str, value: str) -> None: ...

    def write(self, chunk: bytes) -> None: ...


class OutboundResponse:
    """In-memory transport used by the host adapter.

    Accumulates status, headers, and body chunks the way a server's output
    buffer does until the adapter sends them. Header names are
    case-insensitive; setting one again replaces it in place.
    """

    __slots__ = ("_headers", "chunks", "status")

    def __init__(self) -> None:
        self.status = 200
        self._headers: dict[str, tuple[str, str]] = {}
        self.chunks: list[bytes] = []

    def set_status(self, status: int) -> None:
        self.status = status

    def set_header(self, name: str, value: str) -> None:
        self._headers[name.lower()] = (name, value)

    def write(self, chunk: bytes) -> None:
        self.chunks.append(chunk)

    def reset(self) -> None:
        """Discard everything written so far (used before an error response)."""
        self.status = 200
        self._headers.clear()
        self.chunks.clear()

    @property
    def headers(self) -> tuple[tuple[str, str], ...]:
        """Headers in first-set order, with their original casing."""
        return tuple(self._headers.values())

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return the value of header *name*, case-insensitively."""
        entry = self._headers.get(name.lower())
        return entry[1] if entry else default

    @property
    def body(self) -> bytes:
        return b"".join(self.chunks)

    @property
    def text(self) -> str:
        """Body as string."""
        return self.body.decode("utf-8")

    def json(self) -> Any:
        return json_module.loads(self.body)

    def __repr__(self) -> str:
        return (
            f"OutboundResponse(status={self.status}, "
            f"headers={self.headers!r}, body={self.body!r})"
        )


class ResponseWriter:
    """Chainable response capability passed to every handler.

    Usage::

        def show_user(req, res):
            user_id = req.params["id"]
            res.set_status(200).set_header("X-User", user_id).json({"id": user_id})
    """

    __slots__ = ("_transport",)

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def set_status(self, status: int) -> ResponseWriter:
        """Set the HTTP status code."""
        self._transport.set_status(status)
        return self

    def set_header(self, name: str, value: str) -> ResponseWriter:
        """Set (or overwrite) a response header."""
        self._transport.set_header(name, value)
        return self

    def json(self, data: Any, *, end: bool = False) -> ResponseWriter:
        """Write *data* as JSON with ``Content-Type: application/json``.

        Pass ``end=True`` to end the response right after writing.
        """
        self._transport.set_header("Content-Type", JSON_CONTENT_TYPE)
        self._transport.write(json_module.dumps(data, separators=(",", ":")).encode("utf-8"))
        if end:
            self.end()
        return self

    def send(self, data: Any, *, end: bool = False) -> ResponseWriter:
        """Write *data* verbatim.

        ``bytes`` pass through, ``str`` is UTF-8 encoded, anything else is
        written as ``str(data)``. No content type is set.
        """
        if isinstance(data, bytes):
            chunk = data
        elif isinstance(data, str):
            chunk = data.encode("utf-8")
        else:
            chunk = str(data).encode("utf-8")
        self._transport.write(chunk)
        if end:
            self.end()
        return self

    def end(self) -> None:
        """Stop processing this request. Nothing after this call runs."""
        raise ResponseEnded
