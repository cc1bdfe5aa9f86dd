"""Per-request router with Express-style registration calls.

A Router is built for exactly one request. It snapshots the request at
construction, then each registration call (``router.get(...)``,
``router.post(...)``, ...) is evaluated on the spot, in program order.
There is no route table: "first match wins" falls out of sequential
evaluation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from functools import partial
from types import MappingProxyType

from signpost._internal.types import Handler, Registration
from signpost.config import DEFAULT_METHODS, RouterConfig, normalize_methods
from signpost.errors import MethodNotAllowed
from signpost.http.query import QueryParams
from signpost.http.raw import RawRequest
from signpost.http.request import build_context
from signpost.http.response import ResponseWriter, Transport
from signpost.routing.matcher import match
from signpost.routing.segments import split_path

logger = logging.getLogger("signpost.routing")


class Router:
    """Matches one request against registration calls issued in order.

    Usage::

        router = Router(raw, transport, base_path="/api")
        router.get("/users/:id", show_user)
        router.post("/users", create_user)

    Constructing with ``allowed_methods`` enforces that set: a request
    outside it gets a 405 JSON response and the constructor raises
    ``ResponseEnded``, so no registration call runs.

    Once a handler has run, later registration calls are still evaluated
    but never invoke another handler. Call ``response.end()`` in a handler
    to stop the route program outright.
    """

    __slots__ = (
        "_allowed_methods",
        "_method",
        "_original",
        "_path",
        "_query",
        "_raw",
        "_resolved",
        "_segments",
        "_writer",
    )

    def __init__(
        self,
        raw: RawRequest,
        transport: Transport,
        *,
        base_path: str = "",
        allowed_methods: Iterable[str] | None = None,
    ) -> None:
        self._raw = raw
        self._writer = ResponseWriter(transport)
        self._resolved = False

        original = raw.uri
        if original.startswith(base_path):
            original = original[len(base_path) :]

        path, sep, query_string = original.partition("?")
        self._original = original
        self._path = path
        self._query = QueryParams(query_string if sep else "")
        self._segments = tuple(split_path(path))
        self._method = raw.method.lower()

        if allowed_methods is None:
            self._allowed_methods = DEFAULT_METHODS
            return

        self._allowed_methods = normalize_methods(allowed_methods)
        if self._method not in self._allowed_methods:
            error = MethodNotAllowed(self._allowed_methods)
            logger.info("Rejecting %s %s: %s", self._method.upper(), self._path, error)
            self._writer.set_status(error.status)
            for name, value in error.headers:
                self._writer.set_header(name, value)
            self._writer.json(error.to_payload()).end()

    @classmethod
    def from_config(cls, raw: RawRequest, transport: Transport, config: RouterConfig) -> Router:
        """Construct using the settings in *config*."""
        return cls(
            raw,
            transport,
            base_path=config.base_path,
            allowed_methods=config.allowed_methods,
        )

    # -- Request snapshot --

    @property
    def method(self) -> str:
        """The lower-cased request method."""
        return self._method

    @property
    def path(self) -> str:
        """The request path, base path and query string removed."""
        return self._path

    @property
    def original_url(self) -> str:
        """The request URI with the base path removed, query string kept."""
        return self._original

    @property
    def query(self) -> QueryParams:
        return self._query

    @property
    def segments(self) -> tuple[str, ...]:
        return self._segments

    @property
    def allowed_methods(self) -> frozenset[str]:
        return self._allowed_methods

    @property
    def response(self) -> ResponseWriter:
        """The writer handlers receive, for responses outside any handler."""
        return self._writer

    @property
    def resolved(self) -> bool:
        """True once a handler has been invoked for this request."""
        return self._resolved

    # -- Registration --

    @property
    def registrations(self) -> Mapping[str, Registration]:
        """Explicit map from each allowed method to its registration call.

        ``router.registrations["options"]("/users", handler)`` is the same
        as ``router.handle("options", "/users", handler)``.
        """
        return MappingProxyType(
            {method: partial(self.handle, method) for method in sorted(self._allowed_methods)}
        )

    def handle(self, method: str, pattern: str, handler: Handler) -> None:
        """Evaluate one registration.

        Invokes *handler* only if the request method equals *method*, the
        pattern matches, and no earlier registration already handled the
        request. Methods outside the allowed set never match.
        """
        method = method.lower()
        if method != self._method:
            return
        if method not in self._allowed_methods:
            logger.debug("Ignoring %s %s: method not in allowed set", method.upper(), pattern)
            return

        result = match(pattern, self._segments)
        if not result.matched:
            return

        if self._resolved:
            logger.debug(
                "%s %s also matches %r; already handled, skipping",
                method.upper(),
                self._path,
                pattern,
            )
            return

        self._resolved = True
        logger.debug(
            "%s %s matched %r params=%r",
            method.upper(),
            self._path,
            pattern,
            dict(result.params),
        )
        request = build_context(self._original, self._path, self._query, result.params, self._raw)
        handler(request, self._writer)

    def get(self, pattern: str, handler: Handler) -> None:
        """Register a GET route."""
        self.handle("get", pattern, handler)

    def post(self, pattern: str, handler: Handler) -> None:
        """Register a POST route."""
        self.handle("post", pattern, handler)

    def put(self, pattern: str, handler: Handler) -> None:
        """Register a PUT route."""
        self.handle("put", pattern, handler)

    def patch(self, pattern: str, handler: Handler) -> None:
        """Register a PATCH route."""
        self.handle("patch", pattern, handler)

    def delete(self, pattern: str, handler: Handler) -> None:
        """Register a DELETE route."""
        self.handle("delete", pattern, handler)
