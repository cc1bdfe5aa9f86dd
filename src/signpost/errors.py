"""Signpost exception hierarchy.

Shared across Router, the response writer, and the ASGI adapter so every
module raises and catches the same types.
"""

from dataclasses import dataclass
from typing import Any


class SignpostError(Exception):
    """Base for all signpost-specific errors."""


class ConfigurationError(SignpostError):
    """Raised when router configuration is invalid.

    Typically raised by ``RouterConfig.__post_init__``.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(SignpostError):
    """An error that maps directly to an HTTP status code.

    ``to_payload()`` renders the JSON body clients receive.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)

    def to_payload(self) -> dict[str, Any]:
        """JSON body for this error: ``{"error": status, "msg": detail}``."""
        return {"error": self.status, "msg": self.detail}


class MethodNotAllowed(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """405 — the request method is outside the router's allowed set.

    Includes an ``Allow`` header listing the configured methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "method not allowed") -> None:
        allow_value = ", ".join(sorted(m.upper() for m in allowed))
        super().__init__(
            status=405,
            detail=detail,
            headers=(("Allow", allow_value),),
        )


class InternalServerError(HTTPError):
    """500 — a handler raised while the request was being processed."""

    def __init__(self, detail: str = "internal server error") -> None:
        super().__init__(status=500, detail=detail)


class ResponseEnded(BaseException):  # noqa: N818 — control-flow signal, not an error
    """Raised by ``ResponseWriter.end()`` to halt the route program.

    Derives from ``BaseException`` so a handler's ``except Exception``
    cannot swallow it. ``dispatch()`` absorbs it once the response is final.
    """
