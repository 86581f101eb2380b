from __future__ import annotations

import pytest

from remap import ColorSubstitution, DrawingRewriteFailed, DrawingRewriter, DrawingUsage
from tests._utils.scenes import C1, C2


def test_rewrite_delegates_single_substitution(char_a) -> None:
    project = char_a.project
    DrawingRewriter(project).rewrite(DrawingUsage("Top/Body", ("Body", "1"), 1), C2, "1" * 16)

    [call] = project.recolor_calls
    assert call.node == "Top/Body" and call.frame == 1
    assert call.substitutions == (ColorSubstitution(C2, "1" * 16),)
    assert call.strokes_changed == 1
    # 同じセルを表示する他フレームにも反映される
    assert project.drawing_at("Top/Body", 5).used_color_ids() == {C1, "1" * 16}


def test_rewrite_is_idempotent_per_occurrence(char_a) -> None:
    project = char_a.project
    usage = DrawingUsage("Top/Body", ("Body", "1"), 1)
    rewriter = DrawingRewriter(project)
    rewriter.rewrite(usage, C2, "1" * 16)
    rewriter.rewrite(usage, C2, "1" * 16)
    assert [c.strokes_changed for c in project.recolor_calls] == [1, 0]


def test_renderer_failure_wrapped(char_a) -> None:
    usage = DrawingUsage("Top/Eyes", ("Eyes", "z"), 9)
    with pytest.raises(DrawingRewriteFailed) as ei:
        DrawingRewriter(char_a.project).rewrite(usage, C2, "1" * 16)
    assert ei.value.node == "Top/Eyes"
    assert ei.value.content == ("Eyes", "z")
    assert ei.value.new_id == "1" * 16
