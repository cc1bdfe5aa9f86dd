"""Signpost — a tiny Express-style HTTP router.

Each request gets its own Router. A route program issues registration
calls in order; the first pattern that matches runs its handler.

Basic usage::

    from signpost import App

    app = App()

    @app.routes
    def routes(router):
        router.get("/users/:id", lambda req, res: res.json({"id": req.params["id"]}))

Without a server::

    from signpost import RawRequest, dispatch

    response = dispatch(RawRequest.build("GET", "/users/7"), routes)
    assert response.json() == {"id": "7"}
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "ConfigurationError",
    "HTTPError",
    "InternalServerError",
    "MethodNotAllowed",
    "OutboundResponse",
    "RawRequest",
    "RequestContext",
    "ResponseEnded",
    "ResponseWriter",
    "RouteMatch",
    "Router",
    "RouterConfig",
    "SignpostError",
    "dispatch",
    "match",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import signpost`` fast while providing a clean top-level API.
    """
    if name == "App":
        from signpost.app import App

        return App

    if name == "RouterConfig":
        from signpost.config import RouterConfig

        return RouterConfig

    if name == "RawRequest":
        from signpost.http.raw import RawRequest

        return RawRequest

    if name == "RequestContext":
        from signpost.http.request import RequestContext

        return RequestContext

    if name in ("OutboundResponse", "ResponseWriter"):
        from signpost.http import response as _resp

        return getattr(_resp, name)

    if name == "Router":
        from signpost.routing.router import Router

        return Router

    if name == "RouteMatch":
        from signpost.routing.route import RouteMatch

        return RouteMatch

    if name == "match":
        from signpost.routing.matcher import match

        return match

    if name == "dispatch":
        from signpost.server.dispatch import dispatch

        return dispatch

    if name in (
        "ConfigurationError",
        "HTTPError",
        "InternalServerError",
        "MethodNotAllowed",
        "ResponseEnded",
        "SignpostError",
    ):
        from signpost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
