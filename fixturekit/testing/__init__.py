"""
Test runner integration.

Test contexts for pytest and unittest, a recording context for testing
fixtures, and the Fixture convenience base.
"""

from fixturekit.testing.context import (
    Fixture,
    FixtureFatalError,
    PytestContext,
    RecordingContext,
    TestContext,
    UnitTestContext,
)

__all__ = [
    "Fixture",
    "FixtureFatalError",
    "PytestContext",
    "RecordingContext",
    "TestContext",
    "UnitTestContext",
]
