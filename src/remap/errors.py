"""
どこで: `remap.errors`。
何を: パレット複製（新 ID 付与）処理の例外型。いずれも `RemapError` を基底とし、
      パレット名・色 ID・ノード/モジュールなど、呼び出し側が対処に使える文脈を属性で持つ。
なぜ: 致命的な失敗（中断）と、報告して継続する失敗（不正な Colour Selector）を型で区別するため。
"""

from __future__ import annotations

from typing import Hashable


class RemapError(Exception):
    """パレット複製処理の基底例外。"""


class EmptyPalette(RemapError):
    """複製元パレットに色が無い（前提条件違反、処理は一切行わない）。"""

    def __init__(self, palette_name: str) -> None:
        super().__init__(f"palette '{palette_name}' does not have colors to copy")
        self.palette_name = palette_name


class AllocationFailed(RemapError):
    """複製先パレットへ新しい色を登録できなかった（致命的）。"""

    def __init__(self, palette_name: str, color_id: str, reason: str) -> None:
        super().__init__(
            f"cannot allocate a copy of color {color_id} in palette '{palette_name}': {reason}"
        )
        self.palette_name = palette_name
        self.color_id = color_id
        self.reason = reason


class MalformedOverrideData(RemapError):
    """override モジュールの参照リストが期待する形に解釈できない（当該モジュールのみスキップ）。"""

    def __init__(self, module: str, field: str, reason: str) -> None:
        super().__init__(f"override module '{module}' ({field}) is malformed: {reason}")
        self.module = module
        self.field = field
        self.reason = reason


class OverrideRewriteFailed(RemapError):
    """override モジュールの属性の読み書きがストア側で失敗した（致命的）。"""

    def __init__(self, module: str, field: str, reason: str) -> None:
        super().__init__(f"override module '{module}' ({field}) could not be accessed: {reason}")
        self.module = module
        self.field = field
        self.reason = reason


class DrawingRewriteFailed(RemapError):
    """描画内容の色置換が描画側で失敗した（致命的）。"""

    def __init__(self, node: str, content: Hashable, old_id: str, new_id: str) -> None:
        super().__init__(
            f"recolor {old_id} -> {new_id} failed on node '{node}' (content {content!r})"
        )
        self.node = node
        self.content = content
        self.old_id = old_id
        self.new_id = new_id


class SceneAccessError(RemapError):
    """使用色の走査中にシーン/描画側の問い合わせが失敗した（致命的）。"""

    def __init__(self, node: str, frame: int | None, reason: str) -> None:
        where = f"node '{node}'" if frame is None else f"node '{node}' frame {frame}"
        super().__init__(f"scene access failed at {where}: {reason}")
        self.node = node
        self.frame = frame
        self.reason = reason


__all__ = [
    "RemapError",
    "EmptyPalette",
    "AllocationFailed",
    "MalformedOverrideData",
    "OverrideRewriteFailed",
    "DrawingRewriteFailed",
    "SceneAccessError",
]
