"""
Fixture graph walker.

Walks a root value depth-first, creating missing fixtures, reusing shared
ones, injecting the test context and composing every node's setup/cleanup.

For each node:

1. ``None`` is an inert subtree: a no-op setup/cleanup pair, nothing created.
2. Every managed field is processed in declaration order. A reference slot
   (``T | None``) whose class already has an instance in this build is
   pointed at that instance and not visited again. Otherwise a ``None``
   reference slot gets a fresh ``T()``, registered before it is visited so
   that anything below it asking for ``T`` shares it.
3. Value slots (plain ``T``) are visited in place and never created.
4. After its fields, the node receives the test context, then its own setup
   and cleanup are appended after those of its children.
"""

import logging
from collections.abc import Mapping
from typing import Any

from fixturekit.graph.capabilities import ContextAware
from fixturekit.graph.fields import FieldSlot, Include, default_include, is_mutable, iter_fields
from fixturekit.graph.lifecycle import Cleanups, NullLifecycle, Setups
from fixturekit.graph.registry import DependencyRegistry

logger = logging.getLogger(__name__)

Lifecycle = tuple[Setups | NullLifecycle, Cleanups | NullLifecycle]


class FixtureAllocationError(TypeError):
    """Raised when a missing fixture cannot be created without arguments."""

    def __init__(self, slot: FieldSlot, cause: Exception) -> None:
        self.slot = slot
        fixture_name = slot.fixture_type.__qualname__ if slot.fixture_type else "?"
        super().__init__(
            f"Cannot create {fixture_name} for "
            f"{type(slot.owner).__qualname__}.{slot.name}: {cause}"
        )


class GraphWalker:
    """Walks one fixture graph for one build.

    Args:
        context: Test context injected into every ContextAware node.
        include: Predicate deciding which fields are managed fixtures.
        registry: Instances created so far in this build.
        strict_annotations: Raise on unresolvable field annotations instead of
            skipping them.
        localns: Extra names for resolving string annotations, typically the
            locals of the function that defined the fixture classes.
    """

    def __init__(
        self,
        context: Any,
        include: Include | None = None,
        registry: DependencyRegistry | None = None,
        strict_annotations: bool = False,
        localns: Mapping[str, Any] | None = None,
    ) -> None:
        self.context = context
        self.include = include or default_include
        self.registry = registry if registry is not None else DependencyRegistry()
        self.strict_annotations = strict_annotations
        self.localns = localns

    def walk(self, value: Any) -> Lifecycle:
        """Wire ``value`` and everything below it.

        Returns:
            The composed ``(setup, cleanup)`` for the subtree.
        """
        if value is None:
            null = NullLifecycle()
            return null, null

        setups = Setups()
        cleanups = Cleanups()

        child_setups, child_cleanups = self._walk_fields(value)
        setups.append(child_setups)
        cleanups.append(child_cleanups)

        self._try_set_context(value)
        setups.try_append(value)
        cleanups.try_append(value)
        return setups, cleanups

    def _walk_fields(self, node: Any) -> tuple[Setups, Cleanups]:
        setups = Setups()
        cleanups = Cleanups()
        writable = is_mutable(node)

        for slot in iter_fields(node, self.strict_annotations, self.localns):
            if not self.include(slot):
                continue

            if slot.is_reference and writable:
                shared = self.registry.lookup(slot.fixture_type)
                if shared is not None:
                    logger.debug("Sharing %s with %r", slot.fixture_type.__name__, slot)
                    slot.assign(shared)
                    continue
                if slot.value is None:
                    self._allocate(slot)
            elif slot.value is None:
                logger.debug("Leaving %r unset", slot)

            child_setup, child_cleanup = self.walk(slot.value)
            setups.append(child_setup)
            cleanups.append(child_cleanup)

        return setups, cleanups

    def _allocate(self, slot: FieldSlot) -> None:
        fixture_type = slot.fixture_type
        try:
            instance = fixture_type()
        except TypeError as e:
            raise FixtureAllocationError(slot, e) from e
        slot.assign(instance)
        # Registered before the walk descends into it, so nested fields of the
        # same class resolve to this instance.
        self.registry.register(fixture_type, instance)
        logger.debug("Created %s for %r", fixture_type.__name__, slot)

    def _try_set_context(self, value: Any) -> None:
        if isinstance(value, ContextAware) and callable(value.set_context):
            value.set_context(self.context)
