"""Request headers as handlers see them.

Names are case-insensitive and a repeated header resolves to its first
value, which is what ``X-Forwarded-For`` lookup relies on. Values are
decoded once, as latin-1, when the headers are built.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Read-only, case-insensitive request headers keyed by lower-cased name."""

    __slots__ = ("_values",)

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        values: dict[str, str] = {}
        for name, value in pairs:
            values.setdefault(name.lower(), value)
        object.__setattr__(self, "_values", values)

    @classmethod
    def from_asgi(cls, raw: Iterable[tuple[bytes, bytes]]) -> Headers:
        """Decode the byte pairs of an ASGI scope's ``headers`` entry."""
        return cls((name.decode("latin-1"), value.decode("latin-1")) for name, value in raw)

    @classmethod
    def from_mapping(cls, headers: Mapping[str, str]) -> Headers:
        """Build from a plain ``{name: value}`` mapping.

        Raises ``ValueError`` for a name or value that could not be sent in
        an HTTP header, i.e. one that is not latin-1 encodable.
        """
        for name, value in headers.items():
            for part in (name, value):
                try:
                    part.encode("latin-1")
                except UnicodeEncodeError as exc:
                    msg = f"Header {name!r} is not latin-1 encodable: {part!r}"
                    raise ValueError(msg) from exc
        return cls(headers.items())

    def __getitem__(self, key: str) -> str:
        try:
            return self._values[key.lower()]
        except KeyError:
            raise KeyError(key) from None

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Headers({self._values!r})"
