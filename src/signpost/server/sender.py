"""ASGI response sending — translates an OutboundResponse to ASGI messages."""

import logging

from signpost._internal.asgi import Send
from signpost.http.response import OutboundResponse

logger = logging.getLogger("signpost.server")


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: OutboundResponse, send: Send) -> None:
    """Translate a buffered OutboundResponse into ASGI send() calls."""
    raw_headers: list[tuple[bytes, bytes]] = [
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in response.headers
        if name.lower() != "content-length"
    ]

    body = response.body
    if body and not _body_allowed(response.status):
        logger.debug("Dropping %d-byte body for status %d", len(body), response.status)
        body = b""

    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )
