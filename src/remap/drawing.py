"""
どこで: `remap.drawing`。
何を: 描画内容 1 件について、描画エンジンへ旧 ID → 新 ID の色置換を依頼する。
なぜ: 描画側の失敗を文脈付きの `DrawingRewriteFailed` に変換し、実行全体を中断させるため。
"""

from __future__ import annotations

import logging

from .errors import DrawingRewriteFailed
from .interfaces import ColorSubstitution, RenderingEngine
from .usage import DrawingUsage

logger = logging.getLogger(__name__)


class DrawingRewriter:
    def __init__(self, renderer: RenderingEngine) -> None:
        self._renderer = renderer

    def rewrite(self, usage: DrawingUsage, old_id: str, new_id: str) -> None:
        """`usage` の描画内容に含まれる `old_id` をすべて `new_id` へ置換する。"""
        try:
            self._renderer.recolor(usage.node, usage.frame, [ColorSubstitution(old_id, new_id)])
        except Exception as exc:
            raise DrawingRewriteFailed(usage.node, usage.content, old_id, new_id) from exc
        logger.debug("recolored %s frame %d: %s -> %s", usage.node, usage.frame, old_id, new_id)


__all__ = ["DrawingRewriter"]
