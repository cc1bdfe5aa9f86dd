"""Route matching — one pattern against one segmented request path."""

from collections.abc import Sequence
from types import MappingProxyType

from signpost.routing.route import NO_MATCH, RouteMatch
from signpost.routing.segments import parse_pattern


def match(pattern: str, request_segments: Sequence[str]) -> RouteMatch:
    """Match *pattern* against already-split request segments.

    Segment counts must be equal; there is no prefix matching. Parameter
    segments bind whatever value sits at their position (empty strings
    included). Literal segments must be equal; the first difference
    ends the match.

    Examples::

        match("/a/:x/c", ["", "a", "b", "c"])  -> RouteMatch(True, {"x": "b"})
        match("/a/:x/c", ["", "a", "b", "d"])  -> NO_MATCH
        match("/a", ["", "a", "b"])            -> NO_MATCH
    """
    segments = parse_pattern(pattern)
    if len(segments) != len(request_segments):
        return NO_MATCH

    params: dict[str, str] = {}
    for segment, value in zip(segments, request_segments, strict=True):
        if segment.is_param:
            params[segment.param_name or ""] = value
        elif segment.value != value:
            return NO_MATCH

    return RouteMatch(matched=True, params=MappingProxyType(params))
