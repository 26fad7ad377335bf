"""Composition Operators — series() and parallel().

WHY
───
Build files describe *how* tasks combine, not just which tasks exist.  The
two combinators turn an ordered list of references into one composite Unit
that can itself be registered, nested, or handed to an executor.

ARCHITECTURE
────────────
::

    series(catalog, *refs)    → Unit(kind=SERIES)
    parallel(catalog, *refs)  → Unit(kind=PARALLEL)

    Each ref is converted once, here:
      "name"     → NameRef("name")   resolved at render time (forward refs ok)
      Unit       → DirectRef(unit)
      callable   → DirectRef(catalog.leaf_for(fn))  label derived on first sight
      otherwise  → InvalidReferenceError

Combinators never touch a registry's name mapping; callers decide whether
to register the result.  ``description`` and ``flag`` may be assigned on the
returned Unit afterwards.

Example::

    catalog = UnitCatalog()
    build = series(catalog, "clean", parallel(catalog, scripts, styles))
    build.description = "Build everything."
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Union

from taskspine.core.logging import get_logger
from taskspine.orchestration.exceptions import InvalidReferenceError
from taskspine.orchestration.units import (
    DirectRef,
    NameRef,
    Unit,
    UnitCatalog,
    UnitKind,
    UnitRef,
)

logger = get_logger(__name__)

TaskRef = Union[str, Unit, Callable[..., Any]]


def to_ref(catalog: UnitCatalog, ref: TaskRef, position: int | None = None) -> UnitRef:
    """Convert one combinator argument into a ``UnitRef``."""
    if isinstance(ref, str):
        if not ref:
            raise InvalidReferenceError(ref, position)
        return NameRef(ref)
    if isinstance(ref, Unit):
        return DirectRef(ref)
    if callable(ref):
        return DirectRef(catalog.leaf_for(ref))
    raise InvalidReferenceError(ref, position)


def _compose(catalog: UnitCatalog, kind: UnitKind, refs: tuple[TaskRef, ...]) -> Unit:
    children = tuple(to_ref(catalog, ref, i) for i, ref in enumerate(refs))
    unit = Unit(kind, children=children)

    logger.debug(
        "composite_created",
        kind=kind.value,
        child_count=len(children),
        forward_refs=sum(1 for c in children if isinstance(c, NameRef)),
    )
    return unit


def series(catalog: UnitCatalog, *refs: TaskRef) -> Unit:
    """Compose tasks that run one after another.

    Parameters
    ----------
    catalog
        Identity catalog shared with the registry, so a callable used here
        and registered elsewhere maps to one Unit.
    *refs
        Task names, Units, or callables, in execution order.

    Returns
    -------
    Unit
        A new ``SERIES`` Unit.

    Raises
    ------
    InvalidReferenceError
        If a ref is not a name, Unit, or callable.
    """
    return _compose(catalog, UnitKind.SERIES, refs)


def parallel(catalog: UnitCatalog, *refs: TaskRef) -> Unit:
    """Compose tasks that run concurrently.

    Same reference rules as :func:`series`; returns a new ``PARALLEL`` Unit.
    """
    return _compose(catalog, UnitKind.PARALLEL, refs)
