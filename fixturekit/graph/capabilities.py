"""
Structural capabilities a fixture node may expose.

A node is never required to subclass anything. The walker checks each node
against these protocols and uses whatever it finds:

- Setuper: ``setup()`` performs one-time, idempotent initialization
- Cleanuper: ``cleanup()`` releases resources at test teardown
- ContextAware: ``set_context(context)`` receives the ambient test context

A data attribute of the same name does not count; the member must be
callable.

Whether a field is a fixture at all is decided separately by an include
predicate (see fixturekit.graph.fields), not by these protocols.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Setuper(Protocol):
    """Anything with a no-argument ``setup``."""

    def setup(self) -> None: ...


@runtime_checkable
class Cleanuper(Protocol):
    """Anything with a no-argument ``cleanup``."""

    def cleanup(self) -> None: ...


@runtime_checkable
class ContextAware(Protocol):
    """Anything that accepts the test context before its own setup runs.

    Implementations must be idempotent: a fixture inheriting ``set_context``
    from a base that is also visited on its own receives the call twice.
    """

    def set_context(self, context: Any) -> None: ...
