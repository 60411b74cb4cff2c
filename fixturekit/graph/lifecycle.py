"""
Lifecycle composition.

Represents "zero or more things with setup/cleanup" as a single thing with
setup/cleanup, so the walker composes results the same way at every depth.
Composites run their children in append order; cleanup is not reversed.
"""

from collections.abc import Iterator
from typing import Any

from fixturekit.graph.capabilities import Cleanuper, Setuper


class NullLifecycle:
    """A setup/cleanup pair that does nothing.

    Returned for ``None`` subtrees so callers never need a presence check.
    """

    def setup(self) -> None:
        pass

    def cleanup(self) -> None:
        pass

    def __repr__(self) -> str:
        return "NullLifecycle()"


# =============================================================================
# Setups
# =============================================================================


class Setups:
    """An ordered list of setupers that is itself a setuper."""

    def __init__(self) -> None:
        self._items: list[Setuper] = []

    def append(self, setup: Setuper) -> None:
        self._items.append(setup)

    def try_append(self, value: Any) -> bool:
        """Append ``value`` if it exposes ``setup``.

        Returns:
            True if the value was appended, False if it has no setup.
        """
        if isinstance(value, Setuper) and callable(value.setup):
            self.append(value)
            return True
        return False

    def setup(self) -> None:
        for item in self._items:
            item.setup()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Setuper]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"Setups({len(self._items)} items)"


# =============================================================================
# Cleanups
# =============================================================================


class Cleanups:
    """An ordered list of cleanupers that is itself a cleanuper."""

    def __init__(self) -> None:
        self._items: list[Cleanuper] = []

    def append(self, cleanup: Cleanuper) -> None:
        self._items.append(cleanup)

    def try_append(self, value: Any) -> bool:
        """Append ``value`` if it exposes ``cleanup``.

        Returns:
            True if the value was appended, False if it has no cleanup.
        """
        if isinstance(value, Cleanuper) and callable(value.cleanup):
            self.append(value)
            return True
        return False

    def cleanup(self) -> None:
        for item in self._items:
            item.cleanup()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Cleanuper]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"Cleanups({len(self._items)} items)"
