"""
どこで: `remap.interfaces`。
何を: 複製エンジンが呼び出すホスト側コラボレータの Protocol と、それらを束ねる `HostContext`。
なぜ: 「現在のシーン」「選択中パレット」などの暗黙グローバルに依存せず、
      実行に必要な依存をすべて引数で渡すため（テストではメモリ実装を差し込む）。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, Hashable, Optional, Protocol, Sequence, runtime_checkable

from palette import Color, Palette

NodeRef = str
ColumnRef = str
ModuleRef = str
ContentRef = Hashable


@dataclass(frozen=True)
class ColorSubstitution:
    """描画内の色 ID 置換 1 件（`from_id` → `to_id`）。"""

    from_id: str
    to_id: str


class PaletteStore(Protocol):
    """パレット/色の保存先。"""

    def create_palette(self, name: str, location: str) -> Palette: ...

    def color_at(self, palette: Palette, index: int) -> Color: ...

    def remove_color(self, palette: Palette, color_id: str) -> None: ...

    def duplicate_color(self, palette: Palette, color: Color) -> Color: ...

    def clone_color_into(self, color: Color, palette: Palette) -> Color: ...

    def all_color_ids(self) -> set[str]: ...

    def library_path(self) -> str: ...


@runtime_checkable
class ColorMinter(Protocol):
    """新しい ID を直接採番できるストアの追加能力。"""

    def mint_color(self, source: Color, palette: Palette) -> Color: ...


class SceneGraph(Protocol):
    """描画ノードとタイムラインの参照。"""

    def list_drawing_nodes(self) -> Sequence[NodeRef]: ...

    def is_per_frame_timing(self, node: NodeRef) -> bool: ...

    def resolve_linked_column(self, node: NodeRef, attribute: str) -> Optional[ColumnRef]: ...

    def frame_count(self) -> int: ...

    def resolve_content_reference(self, column: ColumnRef, frame: int) -> Optional[ContentRef]: ...


class RenderingEngine(Protocol):
    """描画内容の使用色の問い合わせと色置換。"""

    def used_color_ids(self, node: NodeRef, frame: int) -> Collection[str]: ...

    def recolor(
        self, node: NodeRef, frame: int, substitutions: Sequence[ColorSubstitution]
    ) -> None: ...


class OverrideStore(Protocol):
    """Colour Selector など override モジュールの属性テキスト。"""

    def list_modules(self, kind: str) -> Sequence[ModuleRef]: ...

    def get_config_text(self, module: ModuleRef, field: str) -> str: ...

    def set_config_text(self, module: ModuleRef, field: str, text: str) -> None: ...


class TransactionLog(Protocol):
    """Undo/Redo の積算境界。"""

    def begin(self, label: str) -> None: ...

    def end(self) -> None: ...


class ConfirmationPrompt(Protocol):
    """実行前の確認（False で中止）。"""

    def confirm(self, summary: str) -> bool: ...


@dataclass
class HostContext:
    """1 回の実行で使うコラボレータ一式。"""

    palettes: PaletteStore
    scene: SceneGraph
    renderer: RenderingEngine
    overrides: OverrideStore
    transactions: TransactionLog
    prompt: Optional[ConfirmationPrompt] = None


__all__ = [
    "NodeRef",
    "ColumnRef",
    "ModuleRef",
    "ContentRef",
    "ColorSubstitution",
    "PaletteStore",
    "ColorMinter",
    "SceneGraph",
    "RenderingEngine",
    "OverrideStore",
    "TransactionLog",
    "ConfirmationPrompt",
    "HostContext",
]
