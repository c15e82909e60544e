"""Level/column layout tests."""

from __future__ import annotations

import orjson

from conftest import make_tasks
from layout import LayoutSettings, compute_layout
from shared.graph import build_dependency_graph
from tasks.task_stages import compute_levels, group_by_level


def _layout(tasks, settings=None):
    levels = compute_levels(build_dependency_graph(tasks), tasks)
    return compute_layout(tasks, levels, settings)


def test_linear_chain_positions_and_edges(chain) -> None:
    layout = _layout(chain)
    assert [(n.level, n.column, n.x, n.y) for n in layout.nodes.values()] == [
        (0, 0, 400.0, 60.0),
        (1, 0, 400.0, 180.0),
        (2, 0, 400.0, 300.0),
    ]
    assert [(e.from_id, e.to_id) for e in layout.edges] == [(1, 2), (2, 3)]
    assert layout.edges[0].points == [[400.0, 90.0], [400.0, 150.0]]
    assert layout.level_count == 3
    assert layout.height == 480
    assert layout.width == 800


def test_diamond_row_is_centred(diamond) -> None:
    layout = _layout(diamond)
    assert layout.nodes[2].column == 0
    assert layout.nodes[3].column == 1
    assert (layout.nodes[2].x, layout.nodes[3].x) == (300.0, 500.0)
    # symmetric about the canvas midpoint
    assert layout.nodes[2].x + layout.nodes[3].x == 2 * 400
    assert len(layout.edges) == 4
    assert layout.nodes[4].level == 2


def test_empty_input_gives_empty_layout() -> None:
    layout = _layout([])
    assert layout.nodes == {}
    assert layout.edges == []
    assert layout.level_count == 0
    assert layout.height == 400


def test_every_task_placed_once_including_bad_references() -> None:
    tasks = make_tasks(("a", ["ghost-id"]), ("b", ["b"]), ("c", []), ("a", ["c"]))
    layout = _layout(tasks)
    assert list(layout.nodes) == ["a", "b", "c"]
    assert [(e.from_id, e.to_id) for e in layout.edges] == [("c", "a")]


def test_dangling_reference_produces_no_edge() -> None:
    layout = _layout(make_tasks(("t1", ["ghost-id"])))
    assert layout.nodes["t1"].level == 0
    assert layout.edges == []


def test_cycle_members_are_flagged(cyclic) -> None:
    layout = _layout(cyclic)
    assert {tid for tid, n in layout.nodes.items() if n.fallback} == {"A", "B", "C"}
    assert layout.cycle_members == ["A", "B", "C"]
    assert [n.column for n in layout.nodes.values()] == [0, 1, 2, 3]


def test_plain_level_mapping_and_missing_levels(chain) -> None:
    layout = compute_layout(chain, {1: 0, 2: 1})
    assert layout.nodes[3].level == 0
    assert layout.nodes[3].column == 1
    assert layout.fallback == []


def test_layout_is_byte_identical_across_runs(diamond) -> None:
    first = orjson.dumps(_layout(diamond).to_dict(), option=orjson.OPT_NON_STR_KEYS)
    second = orjson.dumps(_layout(list(diamond)).to_dict(), option=orjson.OPT_NON_STR_KEYS)
    assert first == second


def test_settings_move_nodes_without_changing_structure(diamond) -> None:
    settings = LayoutSettings(canvasWidth=1000, columnGap=100, levelGap=50, baseOffset=10)
    layout = _layout(diamond, settings)
    assert (layout.nodes[2].x, layout.nodes[3].x) == (450.0, 550.0)
    assert layout.nodes[4].y == 110.0
    assert [n.column for n in layout.nodes.values()] == [0, 0, 1, 0]


def test_to_dict_payload(chain) -> None:
    payload = _layout(chain).to_dict()
    assert payload["levels"] == 3
    assert payload["edges"][1] == {"from": 2, "to": 3, "points": [[400.0, 210.0], [400.0, 270.0]]}
    node = payload["nodes"][1]
    assert node["id"] == 2
    assert node["typeLabel"] == "WORK"
    assert node["dependencyCount"] == 1
    assert node["status"] == "pending"


def test_rows_follow_group_by_level(diamond) -> None:
    levels = compute_levels(build_dependency_graph(diamond), diamond)
    layout = compute_layout(diamond, levels)
    rows = [[tid for tid, n in layout.nodes.items() if n.level == lvl] for lvl in range(layout.level_count)]
    assert rows == group_by_level(levels.levels)


def test_sparse_level_mapping_keeps_empty_rows(chain) -> None:
    layout = compute_layout(chain, {1: 0, 2: 2, 3: 2})
    assert layout.level_count == 3
    assert [(n.level, n.column) for n in layout.nodes.values()] == [(0, 0), (2, 0), (2, 1)]
