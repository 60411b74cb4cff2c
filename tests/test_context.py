"""
Tests for fixturekit.testing.context.
"""

import unittest

import pytest

from fixturekit.testing.context import (
    Fixture,
    FixtureFatalError,
    PytestContext,
    RecordingContext,
    UnitTestContext,
)


class _Case(unittest.TestCase):
    def test_noop(self) -> None:
        pass


class TestPytestContext:
    """Tests for PytestContext."""

    def test_fatal_fails_the_test(self, request: pytest.FixtureRequest) -> None:
        context = PytestContext(request)
        with pytest.raises(pytest.fail.Exception, match="broken"):
            context.fatal("broken")

    def test_name_is_test_name(self, request: pytest.FixtureRequest) -> None:
        assert PytestContext(request).name == "test_name_is_test_name"


class TestUnitTestContext:
    """Tests for UnitTestContext."""

    def test_fatal_uses_failure_exception(self) -> None:
        case = _Case("test_noop")
        context = UnitTestContext(case)
        with pytest.raises(case.failureException, match="broken"):
            context.fatal("broken")

    def test_cleanups_run_with_testcase(self) -> None:
        case = _Case("test_noop")
        calls: list[str] = []
        UnitTestContext(case).add_cleanup(lambda: calls.append("done"))
        case.doCleanups()
        assert calls == ["done"]


class TestRecordingContext:
    """Tests for RecordingContext."""

    def test_replay_runs_in_registration_order(self) -> None:
        recorder = RecordingContext()
        calls: list[int] = []
        recorder.add_cleanup(lambda: calls.append(1))
        recorder.add_cleanup(lambda: calls.append(2))

        recorder.replay()

        assert calls == [1, 2]
        assert recorder.cleanups == []

    def test_fatal_without_parent_raises(self) -> None:
        recorder = RecordingContext()
        with pytest.raises(FixtureFatalError, match="broken"):
            recorder.fatal("broken")
        assert recorder.failures == ["broken"]

    def test_fatal_delegates_to_parent(self) -> None:
        parent = RecordingContext()
        recorder = RecordingContext(parent=parent)
        with pytest.raises(FixtureFatalError):
            recorder.fatal("broken")
        assert parent.failures == ["broken"]


class TestFixtureBase:
    """Tests for the Fixture convenience base."""

    def test_forwards_to_context(self) -> None:
        recorder = RecordingContext()
        fixture = Fixture()
        fixture.set_context(recorder)
        fixture.add_cleanup(lambda: None)

        assert fixture.context is recorder
        assert len(recorder.cleanups) == 1
        with pytest.raises(FixtureFatalError):
            fixture.fatal("broken")

    def test_without_context_raises(self) -> None:
        fixture = Fixture()
        with pytest.raises(FixtureFatalError, match="before a test context was set"):
            fixture.add_cleanup(lambda: None)
        with pytest.raises(FixtureFatalError, match="broken"):
            fixture.fatal("broken")
