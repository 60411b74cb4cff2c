"""
fixturekit - Fixture graph assembly for tests.

Builds a test's fixture graph from a single root value: nested fixtures are
discovered from annotations, missing ones are created, shared dependencies
are reused, and all setup/cleanup hooks are combined into one handle.

Usage:
    fix, ctrl = fixturekit.init(context, Root())
    ctrl.setup()
"""

from fixturekit.graph import (
    Cleanuper,
    ContextAware,
    FixtureAllocationError,
    FixtureDefinitionError,
    FixtureSetup,
    Setuper,
    build,
    init,
)
from fixturekit.testing import (
    Fixture,
    FixtureFatalError,
    PytestContext,
    RecordingContext,
    TestContext,
    UnitTestContext,
)

__version__ = "0.1.0"

__all__ = [
    "Cleanuper",
    "ContextAware",
    "Fixture",
    "FixtureAllocationError",
    "FixtureDefinitionError",
    "FixtureFatalError",
    "FixtureSetup",
    "PytestContext",
    "RecordingContext",
    "Setuper",
    "TestContext",
    "UnitTestContext",
    "build",
    "init",
]
