"""Immutable query string parameters.

Implements ``Mapping[str, str]``. A repeated key resolves to its last
occurrence; ``get_list`` still exposes every value.
"""

import logging
from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl

logger = logging.getLogger("signpost.routing")


class QueryParams(Mapping[str, str]):
    """Immutable query string parameters.

    Attributes:
        _pairs: Parsed query string as ordered ``(name, value)`` pairs.
        _raw: Raw query string (text after the first ``?``).

    Parsing is best-effort: a query string the parser rejects yields an
    empty mapping rather than an error.
    """

    _pairs: tuple[tuple[str, str], ...]
    _raw: str

    __slots__ = ("_pairs", "_raw")

    def __init__(self, query_string: str = "") -> None:
        object.__setattr__(self, "_raw", query_string)
        try:
            pairs = tuple(parse_qsl(query_string, keep_blank_values=True))
        except ValueError:
            logger.debug("Unparseable query string %r; using empty query", query_string)
            pairs = ()
        object.__setattr__(self, "_pairs", pairs)

    def __getitem__(self, key: str) -> str:
        for name, value in reversed(self._pairs):
            if name == key:
                return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return any(name == key for name, _ in self._pairs)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._pairs:
            if name not in seen:
                seen.add(name)
                yield name

    def __len__(self) -> int:
        return len({name for name, _ in self._pairs})

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"QueryParams({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the last value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*, in query-string order."""
        return [value for name, value in self._pairs if name == key]

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """Return value as int, or *default* if missing or not numeric."""
        value = self.get(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def get_bool(self, key: str, default: bool | None = None) -> bool | None:
        """Return value as bool (``true``/``1``/``yes``/``on`` -> True)."""
        value = self.get(key)
        if value is None:
            return default
        return value.lower() in ("true", "1", "yes", "on")

    @property
    def raw(self) -> str:
        """The query string exactly as received."""
        return self._raw
