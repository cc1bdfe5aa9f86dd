"""Path and pattern segmentation.

Request paths and route patterns are split by the same rule, so segment
counts line up position by position::

    ""            -> [""]
    "/"           -> ["", ""]
    "/users/:id"  -> ["", "users", ":id"]
    "/users/42/"  -> ["", "users", "42", ""]

No trimming, no collapsing of repeated slashes.
"""

from signpost.routing.route import PARAM_MARKER, PathSegment


def split_path(path: str) -> list[str]:
    """Split *path* on ``/`` exactly."""
    return path.split("/")


def parse_pattern(pattern: str) -> tuple[PathSegment, ...]:
    """Parse a route pattern into literal and parameter segments.

    A segment is a parameter when it starts with ``:``; its name is the
    segment with the leading markers stripped.
    """
    segments: list[PathSegment] = []
    for part in split_path(pattern):
        if part.startswith(PARAM_MARKER):
            segments.append(
                PathSegment(value=part, is_param=True, param_name=part.lstrip(PARAM_MARKER))
            )
        else:
            segments.append(PathSegment(value=part))
    return tuple(segments)
