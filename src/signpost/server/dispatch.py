"""Run one route program against one request.

The synchronous core entry point. The ASGI adapter calls it from a
worker thread; tests and other hosts can call it directly.
"""

import logging

from signpost._internal.types import RouteProgram
from signpost.config import RouterConfig
from signpost.errors import ResponseEnded
from signpost.http.raw import RawRequest
from signpost.http.response import OutboundResponse
from signpost.routing.router import Router

logger = logging.getLogger("signpost.routing")


def dispatch(
    raw: RawRequest,
    program: RouteProgram,
    config: RouterConfig | None = None,
    transport: OutboundResponse | None = None,
) -> OutboundResponse:
    """Build a Router for *raw*, run *program* against it, return the response.

    ``ResponseEnded`` (from ``response.end()`` or a 405 rejection) is the
    normal way out and is absorbed here. Any other exception propagates
    to the host.

    If nothing matches, the response is left untouched: ``200`` with no
    headers and an empty body.
    """
    config = config or RouterConfig()
    transport = transport if transport is not None else OutboundResponse()
    try:
        router = Router.from_config(raw, transport, config)
        program(router)
    except ResponseEnded:
        logger.debug("Response ended for %s %s", raw.method.upper(), raw.uri)
    else:
        if not router.resolved:
            logger.debug("No route matched %s %s", raw.method.upper(), raw.uri)
    return transport
