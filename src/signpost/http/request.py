"""Immutable request context handed to route handlers.

Frozen snapshot of the matched request. The body is carried raw; decoding
is something a handler asks for, never something the router guesses.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from signpost.http.headers import Headers
from signpost.http.query import QueryParams
from signpost.http.raw import RawRequest

FORWARDED_FOR = "x-forwarded-for"


@dataclass(frozen=True, slots=True)
class RequestContext:
    """The request as a handler sees it.

    ``original_url`` keeps the query string (minus any base path),
    ``path`` does not. ``params`` holds the bound route parameters and
    ``query`` the parsed query string; the two never interact.
    """

    original_url: str
    path: str
    params: Mapping[str, str]
    query: QueryParams
    headers: Headers
    ip: str
    method: str
    body: bytes = b""

    @property
    def text(self) -> str:
        """The body decoded as UTF-8."""
        return self.body.decode("utf-8")

    def json(self) -> Any:
        """Parse the body as JSON. Raises ``ValueError`` on invalid input."""
        return json_module.loads(self.body)


def client_ip(headers: Headers, client: str | None) -> str:
    """Resolve the caller's address.

    Uses the left-most ``X-Forwarded-For`` entry when present, otherwise
    the direct peer address. Returns ``""`` when neither is known.
    """
    forwarded = headers.get(FORWARDED_FOR)
    if forwarded is not None:
        return forwarded.split(",", 1)[0].strip()
    return client or ""


def build_context(
    original_url: str,
    path: str,
    query: QueryParams,
    params: Mapping[str, str],
    raw: RawRequest,
) -> RequestContext:
    """Assemble the RequestContext for a successful match."""
    return RequestContext(
        original_url=original_url,
        path=path,
        params=MappingProxyType(dict(params)),
        query=query,
        headers=raw.headers,
        ip=client_ip(raw.headers, raw.client),
        body=raw.body,
        method=raw.method.lower(),
    )
