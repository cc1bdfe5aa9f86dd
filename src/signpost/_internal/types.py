"""Shared type aliases used across signpost modules."""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from signpost.http.request import RequestContext
    from signpost.http.response import ResponseWriter
    from signpost.routing.router import Router

# Route handler — receives the request context and the response writer
Handler: TypeAlias = Callable[["RequestContext", "ResponseWriter"], Any]

# Bound registration call — router.get, router.post, ...
Registration: TypeAlias = Callable[[str, Handler], None]

# Route program — issues registration calls against one Router
RouteProgram: TypeAlias = Callable[["Router"], Any]
