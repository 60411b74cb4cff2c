"""
Build-scoped dependency registry.

Records every fixture the walker creates during one build so that later
fields of the same class receive the same instance instead of a second one.
"""

from collections.abc import Iterator
from typing import Any


class DependencyRegistry:
    """Ordered ``(type, instance)`` pairs created during a single build.

    Lookups match the exact class only: a subclass, or another class
    satisfying the same protocol, is not a hit.

    Note: A registry must not outlive the build that created it. The setup
    entry point creates a fresh one on every call.

    Example:
        >>> registry = DependencyRegistry()
        >>> server = ServerFixture()
        >>> registry.register(ServerFixture, server)
        >>> registry.lookup(ServerFixture) is server
        True
    """

    def __init__(self) -> None:
        self._entries: list[tuple[type, Any]] = []

    def lookup(self, cls: type) -> Any | None:
        """Return the instance registered for exactly ``cls``, or None."""
        for registered_type, instance in self._entries:
            if registered_type is cls:
                return instance
        return None

    def register(self, cls: type, instance: Any) -> None:
        """Record a newly created instance of ``cls``.

        Raises:
            ValueError: If ``cls`` already has an instance in this build.
        """
        if self.lookup(cls) is not None:
            raise ValueError(f"{cls.__qualname__} already has an instance in this build")
        self._entries.append((cls, instance))

    def __contains__(self, cls: object) -> bool:
        return isinstance(cls, type) and self.lookup(cls) is not None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[type, Any]]:
        return iter(self._entries)

    def __repr__(self) -> str:
        names = ", ".join(t.__name__ for t, _ in self._entries)
        return f"DependencyRegistry([{names}])"
