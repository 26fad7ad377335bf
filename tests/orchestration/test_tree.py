"""Tests for task tree rendering — labels, aliases, depth and metadata.

Covers shallow and deep rendering, alias labelling at root and nested
positions, depth truncation on a three-level graph, description/flag
pass-through, overwrite semantics, forward references, and render-time
errors (unresolved names, cycles, bad options).
"""

from __future__ import annotations

import pytest

from taskspine import TaskSpine
from taskspine.orchestration.exceptions import (
    CyclicCompositionError,
    InvalidTreeOptionsError,
    TaskNotFoundError,
    UnresolvedReferenceError,
)
from taskspine.orchestration.tree import TreeNode, TreeOptions, TreeRenderer


def noop():
    pass


def _dicts(nodes: list[TreeNode]) -> list[dict]:
    return [n.to_dict() for n in nodes]


# ── Expected trees ───────────────────────────────────────────────────


def _parallel_of_leaves(label: str) -> dict:
    return {
        "label": label,
        "type": "parallel",
        "nodes": [{"label": "<anonymous>"}, {"label": "noop"}],
    }


TRIPLE_LEVEL = [
    _parallel_of_leaves("fn1"),
    _parallel_of_leaves("fn2"),
    {
        "label": "fn3",
        "type": "series",
        "nodes": [_parallel_of_leaves("fn1"), _parallel_of_leaves("fn2")],
    },
]

DEPTH_1_OF_TRIPLE_LEVEL = [
    {"label": "fn1", "type": "parallel"},
    {"label": "fn2", "type": "parallel"},
    {"label": "fn3", "type": "series"},
]

DEPTH_2_OF_TRIPLE_LEVEL = [
    _parallel_of_leaves("fn1"),
    _parallel_of_leaves("fn2"),
    {
        "label": "fn3",
        "type": "series",
        "nodes": [
            {"label": "fn1", "type": "parallel"},
            {"label": "fn2", "type": "parallel"},
        ],
    },
]


# ── Shallow rendering ────────────────────────────────────────────────


class TestShallowTree:
    def test_simple_tree_by_default(self, spine: TaskSpine):
        spine.task("test1", lambda: None)
        spine.task("test2", lambda: None)
        spine.task("test3", lambda: None)
        spine.task("error", lambda: None)

        ser = spine.series("test1", "test2")

        def anon():
            pass

        anon.display_name = "<display name>"

        spine.task("ser", spine.series("test1", "test2"))
        spine.task("par", spine.parallel("test1", "test2", "test3"))
        spine.task("serpar", spine.series("ser", "par"))
        spine.task("serpar2", spine.series(ser, anon))
        spine.task(anon)

        assert _dicts(spine.render_tree()) == [
            {"label": "test1"},
            {"label": "test2"},
            {"label": "test3"},
            {"label": "error"},
            {"label": "ser", "type": "series"},
            {"label": "par", "type": "parallel"},
            {"label": "serpar", "type": "series"},
            {"label": "serpar2", "type": "series"},
            {"label": "<display name>"},
        ]

    def test_roots_in_registration_order(self, spine: TaskSpine):
        for name in ["zeta", "alpha", "mid"]:
            spine.task(name, lambda: None)

        labels = [n.label for n in spine.render_tree()]
        assert labels == ["zeta", "alpha", "mid"]
        assert all(n.nodes is None for n in spine.render_tree())

    def test_shallow_ignores_depth(self, triple_level: TaskSpine):
        assert _dicts(triple_level.render_tree(depth=3)) == DEPTH_1_OF_TRIPLE_LEVEL

    def test_empty_registry(self, spine: TaskSpine):
        assert spine.render_tree(deep=True) == []


# ── Deep rendering ───────────────────────────────────────────────────


class TestDeepTree:
    def test_single_level_tree(self, spine: TaskSpine):
        spine.task("fn1", lambda: None)
        spine.task("fn2", lambda: None)

        assert _dicts(spine.render_tree(deep=True)) == [
            {"label": "fn1"},
            {"label": "fn2"},
        ]

    def test_leaves_never_expand(self, spine: TaskSpine):
        spine.task("fn1", lambda: None)
        spine.task(noop)

        for depth in (None, 1, 2, 10):
            for node in spine.render_tree(deep=True, depth=depth):
                assert node.nodes is None

    def test_double_level_tree(self, spine: TaskSpine):
        spine.task("fn1", lambda: None)
        spine.task("fn2", lambda: None)
        spine.task("fn3", spine.series("fn1", "fn2"))

        assert _dicts(spine.render_tree(deep=True)) == [
            {"label": "fn1"},
            {"label": "fn2"},
            {
                "label": "fn3",
                "type": "series",
                "nodes": [{"label": "fn1"}, {"label": "fn2"}],
            },
        ]

    def test_triple_level_tree(self, triple_level: TaskSpine):
        assert _dicts(triple_level.render_tree(deep=True)) == TRIPLE_LEVEL

    def test_nested_label_is_canonical(self, spine: TaskSpine):
        spine.task("A", lambda: None)
        spine.task("B", spine.series("A"))

        assert _dicts(spine.render_tree(deep=True)) == [
            {"label": "A"},
            {"label": "B", "type": "series", "nodes": [{"label": "A"}]},
        ]

    def test_unregistered_composite_shows_placeholder(self, spine: TaskSpine):
        spine.task("a", noop)
        spine.task("outer", spine.series(spine.parallel("a"), "a"))

        outer = spine.render_tree(deep=True)[1].to_dict()
        assert outer["nodes"][0] == {
            "label": "<parallel>",
            "type": "parallel",
            "nodes": [{"label": "a"}],
        }


# ── Aliases ──────────────────────────────────────────────────────────


class TestAliasLabels:
    def test_aliased_tasks_simple(self, spine: TaskSpine, anon):
        spine.task(noop)
        spine.task("fn1", noop)
        spine.task("fn2", spine.task("noop"))
        spine.task("fn3", anon)
        spine.task("fn4", spine.task("fn3"))

        assert _dicts(spine.render_tree(deep=True)) == [
            {"label": "noop"},
            {"label": "fn1"},
            {"label": "fn2"},
            {"label": "fn3"},
            {"label": "fn4"},
        ]

    def test_aliased_tasks_nested(self, spine: TaskSpine, anon):
        spine.task(noop)
        spine.task("fn1", noop)
        spine.task("fn2", spine.task("noop"))
        spine.task("fn3", anon)
        spine.task("ser", spine.series(noop, anon, "fn1", "fn2", "fn3"))
        spine.task("par", spine.parallel(noop, anon, "fn1", "fn2", "fn3"))

        nested = [
            {"label": "noop"},
            {"label": "fn3"},
            {"label": "noop"},
            {"label": "noop"},
            {"label": "fn3"},
        ]
        assert _dicts(spine.render_tree(deep=True)) == [
            {"label": "noop"},
            {"label": "fn1"},
            {"label": "fn2"},
            {"label": "fn3"},
            {"label": "ser", "type": "series", "nodes": nested},
            {"label": "par", "type": "parallel", "nodes": nested},
        ]

    def test_composite_alias_keeps_first_name_when_nested(self, spine: TaskSpine):
        build = spine.task("build", spine.series(noop))
        spine.task("default", build)
        spine.task("ci", spine.series("default"))

        roots = {n.label: n for n in spine.render_tree(deep=True)}
        assert set(roots) == {"build", "default", "ci"}
        assert roots["ci"].nodes[0].label == "build"

    def test_derived_label_survives_later_registration(self, spine: TaskSpine):
        spine.task("wrap", spine.series(noop))
        spine.task("renamed", noop)

        tree = _dicts(spine.render_tree(deep=True))
        assert tree[0]["nodes"] == [{"label": "noop"}]
        assert tree[1] == {"label": "renamed"}


# ── Depth ────────────────────────────────────────────────────────────


class TestDepth:
    def test_depth_1(self, triple_level: TaskSpine):
        assert _dicts(triple_level.render_tree(deep=True, depth=1)) == DEPTH_1_OF_TRIPLE_LEVEL

    def test_depth_2(self, triple_level: TaskSpine):
        assert _dicts(triple_level.render_tree(deep=True, depth=2)) == DEPTH_2_OF_TRIPLE_LEVEL

    def test_depth_3(self, triple_level: TaskSpine):
        assert _dicts(triple_level.render_tree(deep=True, depth=3)) == TRIPLE_LEVEL

    @pytest.mark.parametrize("depth", [4, 5, 6, 100])
    def test_depth_beyond_graph_matches_unbounded(self, triple_level: TaskSpine, depth):
        assert _dicts(triple_level.render_tree(deep=True, depth=depth)) == TRIPLE_LEVEL

    @pytest.mark.parametrize("depth", [0, -1])
    def test_depth_below_one_rejected(self, spine: TaskSpine, depth):
        with pytest.raises(InvalidTreeOptionsError) as exc_info:
            spine.render_tree(deep=True, depth=depth)
        assert exc_info.value.field == "depth"


# ── Metadata ─────────────────────────────────────────────────────────


class TestMetadata:
    def test_description_and_flag_from_registered_function(self, spine: TaskSpine, anon):
        f1 = spine.parallel(anon, noop)
        f1.description = "Task #1."
        f1.flag = {"--opt1": "Option 1.", "--opt2": "Option 2."}
        spine.task("fn1", f1)

        f2 = spine.parallel(anon, noop)
        f2.description = "Task #2."
        spine.task("fn2", f2)

        f3 = spine.series("fn1", "fn2")
        f3.flag = {"--opt3": "Option 3.", "--opt4": "Option 4."}
        spine.task("fn3", f3)

        fn1 = {
            "label": "fn1",
            "type": "parallel",
            "description": "Task #1.",
            "flag": {"--opt1": "Option 1.", "--opt2": "Option 2."},
            "nodes": [{"label": "<anonymous>"}, {"label": "noop"}],
        }
        fn2 = {
            "label": "fn2",
            "type": "parallel",
            "description": "Task #2.",
            "nodes": [{"label": "<anonymous>"}, {"label": "noop"}],
        }
        assert _dicts(spine.render_tree(deep=True)) == [
            fn1,
            fn2,
            {
                "label": "fn3",
                "type": "series",
                "flag": {"--opt3": "Option 3.", "--opt4": "Option 4."},
                "nodes": [fn1, fn2],
            },
        ]

    def test_metadata_on_leaf(self, spine: TaskSpine):
        unit = spine.task(noop)
        unit.description = "Does nothing."

        assert _dicts(spine.render_tree()) == [{"label": "noop", "description": "Does nothing."}]

    def test_metadata_read_at_render_time(self, spine: TaskSpine):
        unit = spine.task("fn1", noop)
        unit.description = "first"
        first = _dicts(spine.render_tree())
        unit.description = "second"

        assert first == [{"label": "fn1", "description": "first"}]
        assert _dicts(spine.render_tree()) == [{"label": "fn1", "description": "second"}]

    def test_flag_is_copied(self, spine: TaskSpine):
        unit = spine.task("fn1", noop)
        unit.flag = {"--x": "X"}
        node = spine.render_tree()[0]
        node.flag["--y"] = "Y"

        assert unit.flag == {"--x": "X"}


# ── Overwrites, forward references, stability ────────────────────────


class TestRegistryInteraction:
    def test_overwrite_keeps_direct_reference(self, spine: TaskSpine):
        def a():
            pass

        def b():
            pass

        def c():
            pass

        spine.task("X", spine.parallel(a, b))
        spine.task("C", spine.series(spine.get_task("X")))
        spine.task("X", c)

        assert spine.get_task("X").func is c
        assert _dicts(spine.render_tree(deep=True)) == [
            {"label": "X"},
            {
                "label": "C",
                "type": "series",
                "nodes": [
                    {
                        "label": "X",
                        "type": "parallel",
                        "nodes": [{"label": "a"}, {"label": "b"}],
                    }
                ],
            },
        ]

    def test_overwrite_followed_by_name_reference(self, spine: TaskSpine):
        def first():
            pass

        def second():
            pass

        spine.task("X", first)
        spine.task("C", spine.series("X"))
        spine.task("X", second)

        tree = _dicts(spine.render_tree(deep=True))
        # the name ref now reaches the second callable's unit
        assert tree[1]["nodes"] == [{"label": "X"}]
        assert spine.get_task("C").children[0].name == "X"
        assert spine.get_task("X").func is second

    def test_forward_reference(self, spine: TaskSpine):
        spine.task("all", spine.series("later"))
        spine.task("later", noop)

        assert _dicts(spine.render_tree(deep=True))[0] == {
            "label": "all",
            "type": "series",
            "nodes": [{"label": "later"}],
        }

    def test_render_is_stable(self, triple_level: TaskSpine):
        first = _dicts(triple_level.render_tree(deep=True))
        second = _dicts(triple_level.render_tree(deep=True))
        assert first == second

    def test_shared_child_is_not_a_cycle(self, spine: TaskSpine):
        spine.task("leaf", noop)
        spine.task("diamond", spine.parallel(spine.series("leaf"), spine.series("leaf")))

        diamond = spine.render_tree(deep=True)[1]
        assert [n.nodes[0].label for n in diamond.nodes] == ["leaf", "leaf"]


# ── Render-time errors ───────────────────────────────────────────────


class TestRenderErrors:
    def test_unresolved_reference(self, spine: TaskSpine):
        spine.task("build", spine.series("compile", "missing"))
        spine.task("compile", noop)

        with pytest.raises(UnresolvedReferenceError) as exc_info:
            spine.render_tree(deep=True)
        assert exc_info.value.task_name == "missing"
        assert exc_info.value.path == ["build"]

    def test_unresolved_reference_not_checked_when_shallow(self, spine: TaskSpine):
        spine.task("build", spine.series("missing"))
        assert _dicts(spine.render_tree()) == [{"label": "build", "type": "series"}]

    def test_cycle_detected(self, spine: TaskSpine):
        spine.task("a", spine.series("b"))
        spine.task("b", spine.series("a"))

        with pytest.raises(CyclicCompositionError) as exc_info:
            spine.render_tree(deep=True)
        assert exc_info.value.cycle == ["a", "b", "a"]

    def test_self_reference_detected(self, spine: TaskSpine):
        spine.task("loop", spine.series(noop, "loop"))

        with pytest.raises(CyclicCompositionError) as exc_info:
            spine.render_tree(deep=True)
        assert exc_info.value.cycle == ["loop", "loop"]

    def test_cycle_outside_depth_limit_not_visited(self, spine: TaskSpine):
        spine.task("a", spine.series("b"))
        spine.task("b", spine.series("a"))

        tree = _dicts(spine.render_tree(deep=True, depth=2))
        assert tree[0] == {
            "label": "a",
            "type": "series",
            "nodes": [{"label": "b", "type": "series"}],
        }


# ── TreeRenderer / TreeOptions directly ──────────────────────────────


class TestTreeRenderer:
    def test_render_task(self, triple_level: TaskSpine):
        renderer = TreeRenderer(triple_level.registry)
        node = renderer.render_task("fn3", TreeOptions(deep=True, depth=2))

        assert node.to_dict() == DEPTH_2_OF_TRIPLE_LEVEL[2]

    def test_render_task_missing(self, spine: TaskSpine):
        with pytest.raises(TaskNotFoundError):
            TreeRenderer(spine.registry).render_task("nope")

    def test_default_options(self):
        options = TreeOptions()
        assert options.deep is False
        assert options.depth is None

    def test_options_reject_non_bool_deep(self):
        with pytest.raises(InvalidTreeOptionsError):
            TreeOptions.build(deep="yes", depth=None)  # type: ignore[arg-type]

    def test_node_count(self, triple_level: TaskSpine):
        fn3 = triple_level.render_task("fn3")
        assert fn3.count() == 7
