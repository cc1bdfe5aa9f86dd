"""PathSegment and RouteMatch frozen dataclasses."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

PARAM_MARKER = ":"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Literal: ``users`` (is_param=False)
    Param:   ``:id``   (is_param=True, param_name="id")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of matching one pattern against a request path.

    ``params`` is empty unless ``matched`` is true.
    """

    matched: bool
    params: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def __bool__(self) -> bool:
        return self.matched


NO_MATCH = RouteMatch(matched=False)
