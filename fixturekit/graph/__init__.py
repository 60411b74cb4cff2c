"""
Fixture graph building.

Walks a root fixture, creates and shares nested fixtures, and composes their
lifecycle hooks.
"""

from fixturekit.graph.capabilities import Cleanuper, ContextAware, Setuper
from fixturekit.graph.fields import (
    DEFAULT_DESIGNATOR,
    FieldSlot,
    FixtureDefinitionError,
    Include,
    default_include,
    iter_fields,
    suffix_include,
)
from fixturekit.graph.lifecycle import Cleanups, NullLifecycle, Setups
from fixturekit.graph.registry import DependencyRegistry
from fixturekit.graph.setup import FixtureSetup, build, caller_locals, init
from fixturekit.graph.walker import FixtureAllocationError, GraphWalker

__all__ = [
    # Capabilities
    "Cleanuper",
    "ContextAware",
    "Setuper",
    # Composition
    "Cleanups",
    "NullLifecycle",
    "Setups",
    # Fields and classification
    "DEFAULT_DESIGNATOR",
    "FieldSlot",
    "Include",
    "default_include",
    "iter_fields",
    "suffix_include",
    # Building
    "DependencyRegistry",
    "FixtureSetup",
    "GraphWalker",
    "build",
    "caller_locals",
    "init",
    # Errors
    "FixtureAllocationError",
    "FixtureDefinitionError",
]
