"""
Field discovery for fixture nodes.

A node's fields are its annotated attributes: plain classes with class-level
annotations, dataclasses, pydantic models and NamedTuples all qualify. Only
public names are considered, and ``ClassVar`` annotations are not fields.

A field annotated ``T | None`` (or ``Optional[T]``) is a *reference slot*:
when it holds ``None`` the walker may create a ``T`` for it. A field annotated
plainly ``T`` is a *value slot*: the walker visits whatever it holds but never
creates one.
"""

import dataclasses
import inspect
import logging
import types
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_DESIGNATOR = "Fixture"

# Builtin values that can never own fixture fields.
_IMMUTABLE_BUILTINS = (str, bytes, int, float, complex, bool, tuple, frozenset, type)


class FixtureDefinitionError(TypeError):
    """Raised when a fixture class declares a field whose type cannot be resolved."""

    def __init__(self, owner: type, field_name: str, reason: str) -> None:
        self.owner = owner
        self.field_name = field_name
        super().__init__(
            f"Cannot resolve annotation of {owner.__qualname__}.{field_name}: {reason}"
        )


@dataclass(frozen=True)
class FieldSlot:
    """One declared field of one node.

    Attributes:
        owner: The node instance the field belongs to.
        name: Attribute name.
        annotation: The declared annotation as resolved from the class.
        fixture_type: The declared class with one level of ``Optional``
            stripped, or None when the annotation is not a single class.
        nullable: True for reference slots (``T | None``).
    """

    owner: Any
    name: str
    annotation: Any
    fixture_type: type | None
    nullable: bool

    @property
    def value(self) -> Any:
        """Current value of the field; unset attributes read as None."""
        return getattr(self.owner, self.name, None)

    @property
    def is_reference(self) -> bool:
        return self.nullable and self.fixture_type is not None

    def assign(self, value: Any) -> None:
        """Write ``value`` back to the owner.

        Uses plain ``setattr`` so pydantic models and slotted classes keep
        their own assignment rules.
        """
        setattr(self.owner, self.name, value)

    def __repr__(self) -> str:
        type_name = self.fixture_type.__name__ if self.fixture_type else repr(self.annotation)
        kind = "ref" if self.nullable else "value"
        return f"FieldSlot({type(self.owner).__name__}.{self.name}: {type_name} [{kind}])"


def unwrap_optional(annotation: Any) -> tuple[type | None, bool]:
    """Strip one level of ``Optional`` from an annotation.

    Returns:
        ``(cls, nullable)`` where ``cls`` is the single remaining class or None
        when the annotation is not a plain class (generics, multi-member
        unions, strings).
    """
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        nullable = len(members) < len(get_args(annotation))
        if len(members) == 1 and isinstance(members[0], type):
            return members[0], nullable
        return None, nullable
    if isinstance(annotation, type) and origin is None:
        return annotation, False
    return None, False


def is_mutable(value: Any) -> bool:
    """Whether fields of ``value`` may be assigned by the walker.

    Immutable instances (frozen dataclasses, frozen pydantic models, tuples and
    other builtin values) are still visited, but nothing is written into them.
    """
    if value is None or isinstance(value, _IMMUTABLE_BUILTINS):
        return False
    if dataclasses.is_dataclass(value):
        params = getattr(type(value), "__dataclass_params__", None)
        if params is not None and params.frozen:
            return False
    if isinstance(value, BaseModel) and value.model_config.get("frozen", False):
        return False
    return hasattr(value, "__dict__") or bool(getattr(type(value), "__slots__", ()))


def _is_public(name: str) -> bool:
    return not name.startswith("_")


def _is_classvar(annotation: Any) -> bool:
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _resolve_one(klass: type, name: str, raw: str, namespace: dict[str, Any]) -> Any:
    """Resolve one string annotation of ``klass`` with the typing machinery."""
    holder = type(
        klass.__name__,
        (),
        {"__annotations__": {name: raw}, "__module__": klass.__module__},
    )
    return get_type_hints(holder, localns=namespace)[name]


def _resolve_each(
    cls: type, strict: bool, localns: Mapping[str, Any] | None = None
) -> dict[str, Any]:
    """Resolve annotations field by field, skipping the ones that fail.

    Names are looked up in the class body first, then in ``localns``, then in
    the defining module.
    """
    hints: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        namespace = {**(localns or {}), **vars(klass)}
        for name, raw in inspect.get_annotations(klass).items():
            if not _is_public(name):
                continue
            if not isinstance(raw, str):
                hints[name] = raw
                continue
            try:
                hints[name] = _resolve_one(klass, name, raw, namespace)
            except Exception as e:
                if strict:
                    raise FixtureDefinitionError(klass, name, str(e)) from e
                logger.warning(
                    "Skipping field %s.%s: annotation %r cannot be resolved (%s)",
                    klass.__qualname__,
                    name,
                    raw,
                    e,
                )
    return hints


def declared_annotations(
    cls: type, strict: bool = False, localns: Mapping[str, Any] | None = None
) -> dict[str, Any]:
    """Return the public field annotations of ``cls`` in declaration order.

    Base class fields come first, as ``dataclasses`` orders them. Pydantic
    models report their model fields only. ``localns`` supplies names for
    classes defined inside a function of a ``from __future__ import
    annotations`` module.
    """
    if issubclass(cls, BaseModel):
        return {
            name: info.annotation
            for name, info in cls.model_fields.items()
            if _is_public(name)
        }
    try:
        hints = get_type_hints(cls)
    except Exception:
        hints = _resolve_each(cls, strict, localns)
    return {
        name: annotation
        for name, annotation in hints.items()
        if _is_public(name) and not _is_classvar(annotation)
    }


def iter_fields(
    node: Any, strict: bool = False, localns: Mapping[str, Any] | None = None
) -> Iterator[FieldSlot]:
    """Yield a FieldSlot for every public declared field of ``node``."""
    if node is None or isinstance(node, type):
        return
    for name, annotation in declared_annotations(type(node), strict, localns).items():
        fixture_type, nullable = unwrap_optional(annotation)
        yield FieldSlot(
            owner=node,
            name=name,
            annotation=annotation,
            fixture_type=fixture_type,
            nullable=nullable,
        )


# =============================================================================
# Classification
# =============================================================================

Include = Callable[[FieldSlot], bool]


def default_include(slot: FieldSlot, designator: str = DEFAULT_DESIGNATOR) -> bool:
    """A field is a fixture when its declared class name ends with ``designator``."""
    if slot.fixture_type is None:
        return False
    return slot.fixture_type.__name__.endswith(designator)


def suffix_include(designator: str) -> Include:
    """Build an include predicate for a custom name designator."""

    def include(slot: FieldSlot) -> bool:
        return default_include(slot, designator)

    return include
