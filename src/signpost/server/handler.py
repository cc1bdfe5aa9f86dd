"""ASGI handler — translates ASGI scope/messages to signpost types.

The only component that touches raw ASGI directly. Reads the request into
a RawRequest, runs the route program in a worker thread, and sends the
buffered OutboundResponse back through ASGI send().
"""

import logging
from functools import partial

import anyio

from signpost._internal.asgi import Receive, Scope, Send
from signpost._internal.types import RouteProgram
from signpost.config import RouterConfig
from signpost.errors import InternalServerError
from signpost.http.raw import RawRequest
from signpost.http.response import OutboundResponse, ResponseWriter
from signpost.server.dispatch import dispatch
from signpost.server.sender import send_response

logger = logging.getLogger("signpost.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    program: RouteProgram,
    config: RouterConfig,
) -> None:
    """Process a single HTTP request through the route program."""
    if scope["type"] != "http":
        return

    raw = await RawRequest.from_asgi(scope, receive)
    transport = OutboundResponse()

    try:
        # Route programs and handlers are synchronous; keep them off the event loop.
        await anyio.to_thread.run_sync(partial(dispatch, raw, program, config, transport))
    except Exception as exc:
        logger.exception("Unhandled error in route program for %s %s", raw.method, raw.uri)
        detail = str(exc) or type(exc).__name__
        error = InternalServerError(detail) if config.debug else InternalServerError()
        transport.reset()
        ResponseWriter(transport).set_status(error.status).json(error.to_payload())

    await send_response(transport, send)
