"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from signpost.errors import ConfigurationError

DEFAULT_METHODS: frozenset[str] = frozenset({"get", "post", "put", "patch", "delete"})


def normalize_methods(methods: Iterable[str]) -> frozenset[str]:
    """Lower-case a collection of method names.

    Rejects a bare string (``"get"`` would otherwise become ``{"g", "e", "t"}``)
    and an empty collection.
    """
    if isinstance(methods, (str, bytes)):
        msg = f"allowed_methods must be a collection of method names, not {methods!r}."
        raise ConfigurationError(msg)
    normalized = frozenset(m.lower() for m in methods)
    if not normalized:
        msg = "allowed_methods must name at least one HTTP method."
        raise ConfigurationError(msg)
    return normalized


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(base_path="/api", allowed_methods=frozenset({"get"}))

    ``allowed_methods=None`` keeps the default method set without enforcing
    it: requests with other methods pass through unmatched instead of
    receiving a 405.
    """

    # Prefix stripped from the incoming URI before matching
    base_path: str = ""

    # Enforced method set; None means DEFAULT_METHODS, unenforced
    allowed_methods: frozenset[str] | None = None

    # Include exception text in 500 payloads
    debug: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.base_path, str):
            msg = f"base_path must be a string, got {type(self.base_path).__name__}."
            raise ConfigurationError(msg)
        if self.allowed_methods is not None:
            object.__setattr__(self, "allowed_methods", normalize_methods(self.allowed_methods))
