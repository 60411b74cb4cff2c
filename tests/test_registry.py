"""
Tests for fixturekit.graph.registry.
"""

import pytest

from fixturekit.graph.registry import DependencyRegistry


class ServerFixture:
    pass


class TlsServerFixture(ServerFixture):
    pass


class TestDependencyRegistry:
    """Tests for DependencyRegistry."""

    def test_empty_registry_finds_nothing(self) -> None:
        registry = DependencyRegistry()
        assert registry.lookup(ServerFixture) is None
        assert len(registry) == 0

    def test_lookup_returns_registered_instance(self) -> None:
        registry = DependencyRegistry()
        server = ServerFixture()
        registry.register(ServerFixture, server)
        assert registry.lookup(ServerFixture) is server
        assert ServerFixture in registry

    def test_lookup_matches_exact_type_only(self) -> None:
        registry = DependencyRegistry()
        registry.register(ServerFixture, ServerFixture())
        assert registry.lookup(TlsServerFixture) is None

    def test_lookup_does_not_match_base_class(self) -> None:
        registry = DependencyRegistry()
        registry.register(TlsServerFixture, TlsServerFixture())
        assert registry.lookup(ServerFixture) is None

    def test_register_twice_raises(self) -> None:
        registry = DependencyRegistry()
        registry.register(ServerFixture, ServerFixture())
        with pytest.raises(ValueError, match="already has an instance"):
            registry.register(ServerFixture, ServerFixture())

    def test_iterates_in_registration_order(self) -> None:
        registry = DependencyRegistry()
        first = ServerFixture()
        second = TlsServerFixture()
        registry.register(ServerFixture, first)
        registry.register(TlsServerFixture, second)
        assert list(registry) == [(ServerFixture, first), (TlsServerFixture, second)]
        assert repr(registry) == "DependencyRegistry([ServerFixture, TlsServerFixture])"

    def test_non_type_is_not_contained(self) -> None:
        registry = DependencyRegistry()
        assert "ServerFixture" not in registry
