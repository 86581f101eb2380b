"""
どこで: `remap.usage`。
何を: 描画ノードのタイムラインを走査し、指定色 ID を使っている (ノード, 描画内容) の組を集める。
なぜ: 同じ描画内容（ホールド/ループで複数フレームが共有するセル）を 1 回だけ書き換えるため。

走査の要点:
- ノードごとにエレメントモードか否かでリンク先カラムの属性を切り替える。
- フレーム 1..frame_count を歩き、既出の描画内容はスキップ（ノード単位で重複排除）。
- ノード → 重複排除済み (frame, content) 一覧は初回にキャッシュし、色ごとの再走査を避ける。
  使用色の問い合わせは色ごとに行う（前の色の置換で内容が変わるため）。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from .errors import SceneAccessError
from .interfaces import ColumnRef, ContentRef, NodeRef, RenderingEngine, SceneGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrawingUsage:
    """色を使っている描画内容 1 件。

    等価性/ハッシュは (node, content) のみ。`frame` は描画側 API 呼び出しに使う代表フレーム
    （その内容が最初に現れるフレーム）。
    """

    node: NodeRef
    content: ContentRef
    frame: int = field(compare=False)


class ColorUsageIndexer:
    """描画ノードの使用色インデクサ。"""

    def __init__(
        self,
        scene: SceneGraph,
        renderer: RenderingEngine,
        *,
        element_attr: str = "drawing.element",
        timing_attr: str = "drawing.customName.timing",
    ) -> None:
        self._scene = scene
        self._renderer = renderer
        self._element_attr = element_attr
        self._timing_attr = timing_attr
        self._distinct: dict[NodeRef, list[tuple[int, ContentRef]]] = {}
        self._nodes: Optional[list[NodeRef]] = None

    def nodes(self) -> list[NodeRef]:
        if self._nodes is None:
            self._nodes = list(self._scene.list_drawing_nodes())
        return self._nodes

    def linked_column(self, node: NodeRef) -> Optional[ColumnRef]:
        """ノードのタイミング方式に応じたリンク先カラムを返す（未リンクは None）。"""
        try:
            per_frame = self._scene.is_per_frame_timing(node)
            attr = self._element_attr if per_frame else self._timing_attr
            return self._scene.resolve_linked_column(node, attr)
        except Exception as exc:
            raise SceneAccessError(node, None, str(exc)) from exc

    def distinct_contents(self, node: NodeRef) -> list[tuple[int, ContentRef]]:
        """ノードが表示する描画内容を初出フレーム付きで返す（重複なし・フレーム順）。"""
        cached = self._distinct.get(node)
        if cached is not None:
            return cached

        column = self.linked_column(node)
        out: list[tuple[int, ContentRef]] = []
        if column is None:
            logger.debug("node %s has no linked drawing column; skipped", node)
            self._distinct[node] = out
            return out

        seen: set[ContentRef] = set()
        for frame in range(1, self._scene.frame_count() + 1):
            try:
                content = self._scene.resolve_content_reference(column, frame)
            except Exception as exc:
                raise SceneAccessError(node, frame, str(exc)) from exc
            if content is None or content in seen:
                continue
            seen.add(content)
            out.append((frame, content))
        self._distinct[node] = out
        return out

    def find_drawing_usages(self, color_id: str) -> set[DrawingUsage]:
        """`color_id` を使う (ノード, 描画内容) の集合を返す。"""
        found: set[DrawingUsage] = set()
        for node in self.nodes():
            for frame, content in self.distinct_contents(node):
                try:
                    used = self._renderer.used_color_ids(node, frame)
                except Exception as exc:
                    raise SceneAccessError(node, frame, str(exc)) from exc
                if color_id in used:
                    found.add(DrawingUsage(node=node, content=content, frame=frame))
        logger.debug("color %s is used by %d drawing(s)", color_id, len(found))
        return found

    def invalidate(self) -> None:
        """キャッシュを破棄する（シーン構成が変わった場合）。"""
        self._distinct.clear()
        self._nodes = None


__all__ = ["DrawingUsage", "ColorUsageIndexer"]
