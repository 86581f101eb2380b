from __future__ import annotations

import pytest

from host.drawing import DrawingArtwork
from remap import ColorUsageIndexer, DrawingUsage, SceneAccessError
from tests._utils.scenes import BG, C1, C2, C3, line


def _indexer(project) -> ColorUsageIndexer:
    return ColorUsageIndexer(
        project, project, element_attr=project.element_attr, timing_attr=project.timing_attr
    )


def test_shared_content_reported_once(char_a) -> None:
    usages = _indexer(char_a.project).find_drawing_usages(C1)
    assert usages == {DrawingUsage("Top/Body", ("Body", "1"), 1)}


def test_distinct_contents_on_one_node_reported_separately(char_a) -> None:
    usages = _indexer(char_a.project).find_drawing_usages(C2)
    assert {(u.node, u.content, u.frame) for u in usages} == {
        ("Top/Body", ("Body", "1"), 1),
        ("Top/Eyes", ("Eyes", "a"), 1),
        ("Top/Eyes", ("Eyes", "b"), 2),
    }


def test_usage_equality_ignores_frame() -> None:
    a = DrawingUsage("n", ("col", "1"), 1)
    b = DrawingUsage("n", ("col", "1"), 4)
    assert a == b and len({a, b}) == 1


def test_distinct_contents_cached_in_frame_order(char_a) -> None:
    indexer = _indexer(char_a.project)
    assert indexer.distinct_contents("Top/Eyes") == [(1, ("Eyes", "a")), (2, ("Eyes", "b"))]
    # カラムを差し替えてもキャッシュが返る（色ごとにタイムラインを再走査しない）
    char_a.project.set_exposures("Eyes", ["b", "b"])
    assert indexer.distinct_contents("Top/Eyes") == [(1, ("Eyes", "a")), (2, ("Eyes", "b"))]
    indexer.invalidate()
    assert indexer.distinct_contents("Top/Eyes") == [(1, ("Eyes", "b"))]


def test_loop_back_to_earlier_cel_is_not_revisited(char_a) -> None:
    project = char_a.project
    project.set_exposures("Eyes", ["a", "b", "a", "b", "a"])
    assert _indexer(project).distinct_contents("Top/Eyes") == [
        (1, ("Eyes", "a")),
        (2, ("Eyes", "b")),
    ]


def test_timing_mode_selects_attribute(char_a) -> None:
    project = char_a.project
    indexer = ColorUsageIndexer(
        project, project, element_attr="other.attr", timing_attr=project.timing_attr
    )
    # エレメントモードのノードは別属性を見るのでカラムが解決できずスキップされる
    assert indexer.linked_column("Top/Body") is None
    assert indexer.linked_column("Top/Eyes") == "Eyes"
    assert {u.node for u in indexer.find_drawing_usages(C2)} == {"Top/Eyes"}


def test_unlinked_node_and_blank_frames_are_skipped(char_a) -> None:
    project = char_a.project
    project.add_node("Top/Empty", None)
    project.add_node("Top/Sparse", "Sparse")
    project.set_exposures("Sparse", [None, None, "x"])
    project.add_drawing("Sparse", "x", DrawingArtwork.from_strokes([line(C3)]))
    indexer = _indexer(project)
    assert indexer.distinct_contents("Top/Empty") == []
    assert {(u.node, u.frame) for u in indexer.find_drawing_usages(C3)} == {
        ("Top/Eyes", 2),
        ("Top/Sparse", 3),
    }


def test_unused_color_has_no_usages(char_a) -> None:
    assert _indexer(char_a.project).find_drawing_usages("ffffffffffffffff") == set()
    assert {u.node for u in _indexer(char_a.project).find_drawing_usages(BG)} == {"Top/Backdrop"}


def test_scene_errors_carry_node_and_frame(char_a) -> None:
    project = char_a.project
    project.add_node("Top/Orphan", "Missing")
    with pytest.raises(SceneAccessError) as ei:
        _indexer(project).find_drawing_usages(C1)
    assert ei.value.node == "Top/Orphan"
    assert ei.value.frame == 1
