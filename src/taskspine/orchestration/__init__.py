"""
taskspine orchestration — task registry, composition and task trees.

MODULE MAP (recommended reading order)
──────────────────────────────────────
1. exceptions.py   ─ error hierarchy
2. units.py        ─ Unit, UnitRef, UnitCatalog, label derivation
3. registry.py     ─ name → Unit lookup
4. composition.py  ─ series() / parallel()
5. labels.py       ─ label at one tree position
6. tree.py         ─ depth-bounded TreeRenderer
7. spine.py        ─ TaskSpine facade used by build files
8. visualizer.py   ─ rich / plain-text tree output
9. loader.py       ─ import a taskfile
"""

from taskspine.orchestration.composition import TaskRef, parallel, series
from taskspine.orchestration.exceptions import (
    CyclicCompositionError,
    InvalidReferenceError,
    InvalidTaskNameError,
    InvalidTreeOptionsError,
    MissingTaskNameError,
    TaskError,
    TaskfileError,
    TaskNotFoundError,
    UnresolvedReferenceError,
)
from taskspine.orchestration.labels import resolve_label
from taskspine.orchestration.loader import load_taskfile
from taskspine.orchestration.registry import TaskRegistry
from taskspine.orchestration.spine import TaskSpine
from taskspine.orchestration.tree import TreeNode, TreeOptions, TreeRenderer
from taskspine.orchestration.units import (
    ANONYMOUS_LABEL,
    DirectRef,
    NameRef,
    Unit,
    UnitCatalog,
    UnitKind,
    UnitRef,
    derive_label,
)
from taskspine.orchestration.visualizer import to_rich_tree, to_text

__all__ = [
    # Units
    "ANONYMOUS_LABEL",
    "DirectRef",
    "NameRef",
    "Unit",
    "UnitCatalog",
    "UnitKind",
    "UnitRef",
    "derive_label",
    # Registry / composition
    "TaskRegistry",
    "TaskRef",
    "series",
    "parallel",
    "resolve_label",
    # Rendering
    "TreeNode",
    "TreeOptions",
    "TreeRenderer",
    "to_rich_tree",
    "to_text",
    # Facade
    "TaskSpine",
    "load_taskfile",
    # Errors
    "TaskError",
    "TaskNotFoundError",
    "InvalidTaskNameError",
    "MissingTaskNameError",
    "InvalidReferenceError",
    "UnresolvedReferenceError",
    "CyclicCompositionError",
    "InvalidTreeOptionsError",
    "TaskfileError",
]
