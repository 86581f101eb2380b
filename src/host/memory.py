"""
どこで: `host.memory`。
何を: 複製エンジンの全コラボレータ（PaletteStore/ColorMinter/SceneGraph/RenderingEngine/
      OverrideStore/TransactionLog）をメモリ上で実装した `MemoryProject`。
なぜ: ホストアプリ無しでエンジンを実行・検証し、YAML プロジェクト文書（`host.document`）と CLI の
      土台にするため。

ホストの挙動に合わせている点:
- 新規パレットには "Default" のプレースホルダ色が 1 つ自動で入る。
- 描画内容は (カラム, 露出名) 単位で保持し、同じ露出を表示するフレームは内容を共有する。
- 同じ保存先のパレットを再作成すると名前に `_2`, `_3` ... を付けて別パレットにする。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Collection, Optional, Sequence

from common.settings import get as get_settings
from palette import Color, ColorValue, Palette, new_color_id
from remap.interfaces import ColorSubstitution, HostContext

from .drawing import DrawingArtwork

logger = logging.getLogger(__name__)

PLACEHOLDER_COLOR_NAME = "Default"


class StorageFull(RuntimeError):
    """パレットの容量を超えて色を追加しようとした。"""


@dataclass
class MemoryNode:
    """描画ノード（READ 相当）。`column` は描画カラム名、`element_mode` でリンク属性が変わる。"""

    path: str
    column: Optional[str]
    element_mode: bool = True


@dataclass
class MemoryModule:
    """override モジュール（Colour Selector 等）。"""

    path: str
    kind: str
    attrs: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RecolorCall:
    node: str
    frame: int
    substitutions: tuple[ColorSubstitution, ...]
    strokes_changed: int


class MemoryProject:
    """メモリ上のプロジェクト（パレット一覧 + シーン + 描画 + override）。"""

    def __init__(
        self,
        *,
        library_path: str = "/project",
        frame_count: int = 1,
        element_attr: Optional[str] = None,
        timing_attr: Optional[str] = None,
        id_retries: Optional[int] = None,
        new_palette_capacity: Optional[int] = None,
    ) -> None:
        s = get_settings()
        self._library_path = library_path
        self._frame_count = max(0, int(frame_count))
        self.element_attr = element_attr or s.ELEMENT_ATTR
        self.timing_attr = timing_attr or s.TIMING_ATTR
        self._id_retries = id_retries if id_retries is not None else s.ID_MINT_RETRIES
        self.new_palette_capacity = new_palette_capacity

        self.palettes: list[Palette] = []
        self.nodes: dict[str, MemoryNode] = {}
        self.columns: dict[str, list[Optional[str]]] = {}
        self.drawings: dict[tuple[str, str], DrawingArtwork] = {}
        self.modules: dict[str, MemoryModule] = {}

        # 観測用
        self.recolor_calls: list[RecolorCall] = []
        self.transaction_history: list[str] = []
        self.open_transactions = 0

    # --- 構築ヘルパ ---
    def context(self, prompt=None) -> HostContext:
        """自身を全コラボレータとして束ねた `HostContext` を返す。"""
        return HostContext(
            palettes=self,
            scene=self,
            renderer=self,
            overrides=self,
            transactions=self,
            prompt=prompt,
        )

    def add_palette(
        self,
        name: str,
        *,
        palette_id: Optional[str] = None,
        location: Optional[str] = None,
        capacity: Optional[int] = None,
    ) -> Palette:
        """空のパレットを登録する（プレースホルダ色は入れない）。"""
        pid = palette_id or new_color_id({p.id for p in self.palettes}, retries=self._id_retries)
        if any(p.id == pid for p in self.palettes):
            raise ValueError(f"duplicate palette id: {pid}")
        pal = Palette(
            id=pid,
            name=name,
            location=location or f"{self._library_path}/{name}",
            capacity=capacity,
        )
        self.palettes.append(pal)
        return pal

    def add_color(
        self,
        palette: Palette,
        name: str,
        value: ColorValue,
        *,
        color_id: Optional[str] = None,
    ) -> Color:
        """色を登録する。`color_id` 省略時は新規採番（プロジェクト内で一意であること）。"""
        cid = color_id or self._mint_id()
        if cid in self.all_color_ids():
            raise ValueError(f"duplicate color id: {cid}")
        color = Color(id=cid, name=name, value=value)
        self._append(palette, color)
        return color

    def palette_by_name(self, name: str) -> Palette:
        for p in self.palettes:
            if p.name == name:
                return p
        raise KeyError(f"palette not found: {name}")

    def palette_by_id(self, palette_id: str) -> Palette:
        for p in self.palettes:
            if p.id == palette_id:
                return p
        raise KeyError(f"palette not found: {palette_id}")

    def add_node(self, path: str, column: Optional[str], *, element_mode: bool = True) -> MemoryNode:
        node = MemoryNode(path=path, column=column, element_mode=element_mode)
        self.nodes[path] = node
        return node

    def set_exposures(self, column: str, exposures: Sequence[Optional[str]]) -> None:
        """カラムの露出列（フレーム 1 から順、None は空セル）を設定する。"""
        self.columns[column] = [None if e is None else str(e) for e in exposures]
        self._frame_count = max(self._frame_count, len(exposures))

    def add_drawing(self, column: str, exposure: str, artwork: DrawingArtwork) -> None:
        self.drawings[(column, str(exposure))] = artwork

    def add_module(self, path: str, kind: str, attrs: Optional[dict[str, str]] = None) -> MemoryModule:
        module = MemoryModule(path=path, kind=kind, attrs=dict(attrs or {}))
        self.modules[path] = module
        return module

    def drawing_at(self, node: str, frame: int) -> Optional[DrawingArtwork]:
        """ノードがフレームで表示している描画内容（空セルは None）。"""
        n = self._node(node)
        if n.column is None:
            return None
        content = self.resolve_content_reference(n.column, frame)
        if content is None:
            return None
        try:
            return self.drawings[content]
        except KeyError:
            raise KeyError(f"no drawing for {content!r} (node {node}, frame {frame})") from None

    # --- PaletteStore / ColorMinter ---
    def create_palette(self, name: str, location: str) -> Palette:
        taken = {p.location for p in self.palettes}
        final_name, final_location = name, location
        n = 2
        while final_location in taken:
            final_name, final_location = f"{name}_{n}", f"{location}_{n}"
            n += 1
        pal = self.add_palette(
            final_name, location=final_location, capacity=self.new_palette_capacity
        )
        self.add_color(pal, PLACEHOLDER_COLOR_NAME, ColorValue.solid(0, 0, 0, 255))
        logger.debug("created palette %s at %s", final_name, final_location)
        return pal

    def color_at(self, palette: Palette, index: int) -> Color:
        return palette.colors[index]

    def remove_color(self, palette: Palette, color_id: str) -> None:
        del palette.colors[palette.index_of(color_id)]

    def duplicate_color(self, palette: Palette, color: Color) -> Color:
        copied = color.with_id(self._mint_id())
        self._append(palette, copied)
        return copied

    def clone_color_into(self, color: Color, palette: Palette) -> Color:
        if palette.find(color.id) is not None:
            raise ValueError(f"color {color.id} already exists in palette '{palette.name}'")
        self._append(palette, color)
        return color

    def mint_color(self, source: Color, palette: Palette) -> Color:
        created = source.with_id(self._mint_id())
        self._append(palette, created)
        return created

    def all_color_ids(self) -> set[str]:
        return {c.id for p in self.palettes for c in p.colors}

    def library_path(self) -> str:
        return self._library_path

    # --- SceneGraph ---
    def list_drawing_nodes(self) -> Sequence[str]:
        return list(self.nodes)

    def is_per_frame_timing(self, node: str) -> bool:
        return self._node(node).element_mode

    def resolve_linked_column(self, node: str, attribute: str) -> Optional[str]:
        n = self._node(node)
        linked_attr = self.element_attr if n.element_mode else self.timing_attr
        return n.column if attribute == linked_attr else None

    def frame_count(self) -> int:
        return self._frame_count

    def resolve_content_reference(self, column: str, frame: int) -> Optional[tuple[str, str]]:
        try:
            exposures = self.columns[column]
        except KeyError:
            raise KeyError(f"unknown column: {column}") from None
        if frame < 1 or frame > len(exposures):
            return None
        exposure = exposures[frame - 1]
        return None if exposure is None else (column, exposure)

    # --- RenderingEngine ---
    def used_color_ids(self, node: str, frame: int) -> Collection[str]:
        artwork = self.drawing_at(node, frame)
        return set() if artwork is None else artwork.used_color_ids()

    def recolor(self, node: str, frame: int, substitutions: Sequence[ColorSubstitution]) -> None:
        artwork = self.drawing_at(node, frame)
        if artwork is None:
            raise ValueError(f"node {node} exposes no drawing at frame {frame}")
        changed = artwork.recolor(substitutions)
        self.recolor_calls.append(RecolorCall(node, frame, tuple(substitutions), changed))

    # --- OverrideStore ---
    def list_modules(self, kind: str) -> Sequence[str]:
        return [m.path for m in self.modules.values() if m.kind == kind]

    def get_config_text(self, module: str, field: str) -> str:
        return self._module(module).attrs.get(field, "")

    def set_config_text(self, module: str, field: str, text: str) -> None:
        self._module(module).attrs[field] = text

    # --- TransactionLog ---
    def begin(self, label: str) -> None:
        self.open_transactions += 1
        self.transaction_history.append(label)

    def end(self) -> None:
        if self.open_transactions <= 0:
            raise RuntimeError("end() without a matching begin()")
        self.open_transactions -= 1

    # --- 内部 ---
    def _mint_id(self) -> str:
        return new_color_id(self.all_color_ids(), retries=self._id_retries)

    def _append(self, palette: Palette, color: Color) -> None:
        if palette.is_full:
            raise StorageFull(f"palette '{palette.name}' is full ({palette.capacity} colors)")
        palette.colors.append(color)

    def _node(self, node: str) -> MemoryNode:
        try:
            return self.nodes[node]
        except KeyError:
            raise KeyError(f"unknown node: {node}") from None

    def _module(self, module: str) -> MemoryModule:
        try:
            return self.modules[module]
        except KeyError:
            raise KeyError(f"unknown module: {module}") from None

    def colors_used_in_scene(self) -> set[str]:
        """いずれかのノードが表示している描画内容の使用色（検証用）。"""
        used: set[str] = set()
        for path in self.nodes:
            for frame in range(1, self._frame_count + 1):
                artwork = self.drawing_at(path, frame)
                if artwork is not None:
                    used |= artwork.used_color_ids()
        return used


__all__ = [
    "MemoryProject",
    "MemoryNode",
    "MemoryModule",
    "RecolorCall",
    "StorageFull",
    "PLACEHOLDER_COLOR_NAME",
]
