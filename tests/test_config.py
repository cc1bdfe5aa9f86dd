"""Tests for signpost.config — RouterConfig frozen dataclass."""

import pytest

from signpost.config import DEFAULT_METHODS, RouterConfig, normalize_methods
from signpost.errors import ConfigurationError


class TestRouterConfig:
    def test_defaults(self) -> None:
        cfg = RouterConfig()

        assert cfg.base_path == ""
        assert cfg.allowed_methods is None
        assert cfg.debug is False

    def test_override(self) -> None:
        cfg = RouterConfig(base_path="/api", allowed_methods=frozenset({"GET"}), debug=True)

        assert cfg.base_path == "/api"
        assert cfg.allowed_methods == frozenset({"get"})
        assert cfg.debug is True

    def test_frozen(self) -> None:
        cfg = RouterConfig()

        with pytest.raises(AttributeError):
            cfg.debug = True  # type: ignore[misc]

    def test_bare_string_methods_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="collection"):
            RouterConfig(allowed_methods="get")  # type: ignore[arg-type]

    def test_empty_methods_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="at least one"):
            RouterConfig(allowed_methods=frozenset())

    def test_non_string_base_path_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            RouterConfig(base_path=None)  # type: ignore[arg-type]


class TestNormalizeMethods:
    def test_lowercases(self) -> None:
        assert normalize_methods(["GET", "Post"]) == frozenset({"get", "post"})

    def test_default_set(self) -> None:
        assert DEFAULT_METHODS == frozenset({"get", "post", "put", "patch", "delete"})
