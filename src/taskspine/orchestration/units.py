"""Units — the nodes of the task composition graph.

A ``Unit`` is either a *leaf* wrapping one callable or a *composite*
(series/parallel) whose children are ``UnitRef`` values.  Units are created
once and never rebuilt; only ``description`` and ``flag`` may be attached
after construction.

ARCHITECTURE
────────────
::

    UnitKind           LEAF | SERIES | PARALLEL
    Unit               kind, canonical_label, func, children, description, flag
    UnitRef            NameRef(name)   ─ resolved against the registry at render
                       DirectRef(unit) ─ bound at composition time
    UnitCatalog        callable identity → owning leaf Unit (write-once)
    derive_label(fn)   display_name → __name__ → ANONYMOUS_LABEL

Canonical labels are bound once:

- a leaf gets its label when it is created (the registration name, or one
  derived from the callable when it first shows up inside a combinator);
- a composite gets the first name it is registered under.  Until then it
  displays as ``<series>`` / ``<parallel>``.

Executor contract (``taskspine.core.protocols.ExecutorProtocol``): a
``LEAF`` is run by invoking its callable, a ``SERIES`` runs its children
strictly in order and stops on the first failure, a ``PARALLEL`` runs its
children concurrently and aggregates failures.  Nothing in this package
executes units.

Related modules:
    composition.py  — series()/parallel() build composite Units
    registry.py     — name → Unit mapping
    labels.py       — label resolution at one tree position
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from taskspine.core.logging import get_logger

logger = get_logger(__name__)

#: Label shown for callables that have neither a registration name, a
#: ``display_name`` attribute, nor an intrinsic ``__name__``.
ANONYMOUS_LABEL = "<anonymous>"

#: Attribute a caller may set on a callable to override its display label.
DISPLAY_NAME_ATTR = "display_name"

# Python gives every lambda this __name__; it identifies nothing.
_LAMBDA_NAME = "<lambda>"


class UnitKind(str, Enum):
    """Kind of graph node."""

    LEAF = "leaf"
    SERIES = "series"
    PARALLEL = "parallel"

    @property
    def is_composite(self) -> bool:
        return self is not UnitKind.LEAF

    @property
    def placeholder(self) -> str:
        """Label of a composite that was never registered."""
        return f"<{self.value}>"


@dataclass(frozen=True)
class NameRef:
    """Child reference resolved by registry name at render time."""

    name: str


@dataclass(frozen=True)
class DirectRef:
    """Child reference bound to a specific Unit at composition time."""

    unit: Unit


UnitRef = Union[NameRef, DirectRef]


class Unit:
    """One node of the composition graph.

    Units compare and hash by identity: two leaves wrapping equal-looking
    callables are still different nodes.  ``kind``, ``func`` and
    ``children`` are read-only; ``description`` and ``flag`` are plain
    attributes the caller may set before rendering.
    """

    def __init__(
        self,
        kind: UnitKind,
        *,
        label: str | None = None,
        func: Callable[..., Any] | None = None,
        children: Iterable[UnitRef] = (),
    ) -> None:
        children = tuple(children)
        if kind is UnitKind.LEAF:
            if func is None:
                raise ValueError("Leaf units require a callable")
            if children:
                raise ValueError("Leaf units cannot have children")
            if not label:
                raise ValueError("Leaf units require a label")
        elif func is not None:
            raise ValueError(f"{kind.value} units do not wrap a callable")

        self._kind = kind
        self._func = func
        self._children = children
        self._label = label
        self.description: str | None = None
        self.flag: dict[str, str] | None = None

    @classmethod
    def leaf(cls, func: Callable[..., Any], label: str) -> Unit:
        return cls(UnitKind.LEAF, label=label, func=func)

    @property
    def kind(self) -> UnitKind:
        return self._kind

    @property
    def func(self) -> Callable[..., Any] | None:
        return self._func

    @property
    def children(self) -> tuple[UnitRef, ...]:
        return self._children

    @property
    def is_composite(self) -> bool:
        return self._kind.is_composite

    @property
    def canonical_label(self) -> str:
        if self._label is None:
            return self._kind.placeholder
        return self._label

    @property
    def has_canonical_label(self) -> bool:
        return self._label is not None

    def bind_label(self, name: str) -> bool:
        """Bind ``name`` as the canonical label unless one is already bound.

        Returns True if the label was bound by this call.
        """
        if self._label is not None:
            return False
        self._label = name
        return True

    def __repr__(self) -> str:
        return f"Unit({self._kind.value}, {self.canonical_label!r}, children={len(self._children)})"


def derive_label(func: Callable[..., Any]) -> str:
    """Derive a display label for a callable that has no registration name.

    Priority: ``display_name`` attribute → ``__name__`` → ``ANONYMOUS_LABEL``.
    """
    override = getattr(func, DISPLAY_NAME_ATTR, None)
    if isinstance(override, str) and override:
        return override
    name = getattr(func, "__name__", None)
    if isinstance(name, str) and name and name != _LAMBDA_NAME:
        return name
    return ANONYMOUS_LABEL


def derive_name(func: Callable[..., Any]) -> str | None:
    """Return the registration name a callable implies, or None if anonymous."""
    label = derive_label(func)
    return None if label == ANONYMOUS_LABEL else label


def _identity(func: Callable[..., Any]) -> Hashable:
    # Every attribute access builds a new bound method, so key those on the
    # instance and the underlying function instead.
    if inspect.ismethod(func):
        return (id(func.__self__), id(func.__func__))
    return id(func)


class UnitCatalog:
    """Side map from callable identity to the leaf Unit that owns it.

    The first sighting of a callable creates its Unit; every later sighting
    (registration under another name, use inside a combinator) returns the
    same Unit.  Callables themselves are never modified.
    """

    def __init__(self) -> None:
        # id() keys stay valid because the entry keeps the callable (and a
        # bound method's instance) alive.
        self._units: dict[Hashable, tuple[Callable[..., Any], Unit]] = {}

    def lookup(self, func: Callable[..., Any]) -> Unit | None:
        entry = self._units.get(_identity(func))
        return entry[1] if entry is not None else None

    def leaf_for(self, func: Callable[..., Any], name: str | None = None) -> Unit:
        """Return the Unit owning ``func``, creating it on first sighting.

        ``name`` becomes the canonical label only when the Unit is created
        here; an existing Unit keeps its label.
        """
        unit = self.lookup(func)
        if unit is not None:
            return unit

        unit = Unit.leaf(func, name if name is not None else derive_label(func))
        self._units[_identity(func)] = (func, unit)
        logger.debug(
            "leaf_created",
            label=unit.canonical_label,
            explicit_name=name is not None,
        )
        return unit

    def merge(self, other: UnitCatalog) -> None:
        """Adopt ``other``'s entries for callables this catalog has not seen."""
        for key, entry in other._units.items():
            self._units.setdefault(key, entry)

    def __contains__(self, func: object) -> bool:
        return callable(func) and _identity(func) in self._units

    def __len__(self) -> int:
        return len(self._units)
