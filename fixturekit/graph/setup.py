"""
Entry point for building a fixture graph.

    fix, ctrl = init(context, Root())
    ctrl.setup()

``init`` walks the root, registers the combined cleanup with the test context
and returns the root together with the combined setup. The setup is not run
automatically, so a test can prepare more state before calling it.

Both ``set_context`` and ``setup`` implementations should be idempotent. When
a fixture inherits either method from a base that is visited separately, the
method runs once for each.
"""

import inspect
import logging
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from fixturekit.config import FixtureSetupConfig
from fixturekit.graph.capabilities import Setuper
from fixturekit.graph.fields import Include, is_mutable, suffix_include
from fixturekit.graph.lifecycle import NullLifecycle
from fixturekit.graph.registry import DependencyRegistry
from fixturekit.graph.walker import GraphWalker

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FixtureSetup(Generic[T]):
    """Builds one fixture graph.

    Exposed for callers that need to override which fields are fixtures;
    prefer :func:`init` otherwise.

    Args:
        context: Test context passed to fixtures and used for failures and
            cleanup registration.
        fixture: The root fixture. Must be a mutable instance.
        include: Predicate replacing the default name-suffix classification.
        config: Build settings; ``config.designator`` is ignored when
            ``include`` is given.
        localns: Names for resolving string annotations of fixture classes
            defined inside a function.
    """

    def __init__(
        self,
        context: Any,
        fixture: T,
        include: Include | None = None,
        config: FixtureSetupConfig | None = None,
        localns: Mapping[str, Any] | None = None,
    ) -> None:
        self.context = context
        self.localns = localns
        self.fixture = fixture
        self.config = config or FixtureSetupConfig()
        self.include = include or suffix_include(self.config.designator)

    def init(self) -> Setuper:
        """Wire the root fixture and return the combined setup.

        A root that is not a mutable instance is reported through
        ``context.fatal`` and nothing is traversed.
        """
        if not is_mutable(self.fixture):
            self.context.fatal(
                "InitFixture: Fixture must be a mutable instance. "
                f"Actual type: {type(self.fixture).__name__}"
            )
            return NullLifecycle()

        walker = GraphWalker(
            self.context,
            include=self.include,
            registry=DependencyRegistry(),
            strict_annotations=self.config.strict_annotations,
            localns=self.localns,
        )
        setups, cleanups = walker.walk(self.fixture)
        logger.debug(
            "Built %s with %d created fixture(s)",
            type(self.fixture).__name__,
            len(walker.registry),
        )
        self.context.add_cleanup(cleanups.cleanup)
        return setups


def init(
    context: Any,
    fixture: T,
    *,
    include: Include | None = None,
    config: FixtureSetupConfig | None = None,
    localns: Mapping[str, Any] | None = None,
) -> tuple[T, Setuper]:
    """Initialize ``fixture`` and every fixture reachable from it.

    For every fixture node this creates missing fixtures for ``None``
    reference fields, reuses instances already created in this build, calls
    ``set_context`` where implemented and collects ``setup``/``cleanup``.

    A fixture is any field whose declared class name ends with "Fixture",
    unless ``include`` says otherwise.

    String annotations that the defining module cannot resolve are looked up
    in ``localns``, which defaults to the caller's locals. This covers fixture
    classes declared inside a test under ``from __future__ import annotations``.

    Returns:
        The same root, now wired, and the combined setup. The combined cleanup
        is already registered with the context.
    """
    if localns is None:
        localns = caller_locals()
    setup = FixtureSetup(context, fixture, include=include, config=config, localns=localns)
    return fixture, setup.init()


build = init


def caller_locals(depth: int = 1) -> dict[str, Any]:
    """Copy the locals of the function ``depth`` frames above the caller."""
    frame = inspect.currentframe()
    try:
        for _ in range(depth + 1):
            if frame is None:
                return {}
            frame = frame.f_back
        return dict(frame.f_locals) if frame is not None else {}
    finally:
        del frame
