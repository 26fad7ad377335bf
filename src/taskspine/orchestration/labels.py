"""Label resolution for one position in the task tree.

Two rules, in order:

1. A unit shown directly under a registry entry (a root) is labelled with
   that entry's name, so two aliases of the same work appear as two
   distinct roots.
2. Everywhere else the unit's canonical label is used, so a unit nested
   inside several composites shows one stable identity.

The canonical label itself is bound once, when the unit is created or first
registered (see ``units.py``); it is never recomputed here.
"""

from __future__ import annotations

from taskspine.orchestration.units import Unit


def resolve_label(unit: Unit, context_name: str | None = None) -> str:
    """Return the display label of ``unit`` at one tree position."""
    if context_name is not None:
        return context_name
    return unit.canonical_label
