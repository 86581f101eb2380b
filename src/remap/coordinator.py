"""
どこで: `remap.coordinator`。
何を: パレット全体の複製（新 ID 付与）と、描画/Colour Selector の参照付け替えを 1 回の Undo 単位で実行する。
なぜ: 元パレットを残したまま、シーン内の参照だけを新しい色へ移し、元パレットを安全に削除可能にするため。

手順（`RemapCoordinator.run`）:
1. 色が無ければ `EmptyPalette`（Undo 境界もパレットも作らない）。
2. Undo 境界を開き、`<名前>_NewID` パレットを作成して自動生成のプレースホルダ色を取り除く。
3. override モジュール候補をパレット単位で 1 回だけ求める。
4. 元パレットの順に: 新 ID 色を確保 → 対応表へ登録 → 描画を置換 → override を置換。
5. 複製先の色数が複製元と一致することを確認して Undo 境界を閉じる。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from common.settings import _Settings
from common.settings import get as get_settings
from palette import Palette

from .allocator import ColorAllocator
from .drawing import DrawingRewriter
from .errors import AllocationFailed, EmptyPalette, MalformedOverrideData
from .interfaces import HostContext, ModuleRef
from .overrides import OverrideRewriter, OverrideUsageIndexer
from .substitution import SubstitutionMap
from .transaction import undo_transaction
from .usage import ColorUsageIndexer

logger = logging.getLogger(__name__)


@dataclass
class RemapReport:
    """1 回の実行結果（失敗時も途中までの件数を保持する）。"""

    source: Palette
    destination: Optional[Palette] = None
    substitutions: SubstitutionMap = field(default_factory=SubstitutionMap)
    drawing_rewrites: int = 0
    override_rewrites: int = 0
    skipped_modules: list[MalformedOverrideData] = field(default_factory=list)
    completed: bool = False


class RemapCoordinator:
    """パレット複製の実行役。

    Parameters
    ----------
    context : HostContext
        ホスト側コラボレータ一式。
    settings : _Settings | None
        命名・属性名などの設定。None なら `common.settings.get()`。
    """

    def __init__(self, context: HostContext, settings: Optional[_Settings] = None) -> None:
        self._ctx = context
        self._settings = settings if settings is not None else get_settings()
        self.report: Optional[RemapReport] = None

    def destination_name(self, source: Palette) -> str:
        return f"{source.name}{self._settings.NEW_PALETTE_SUFFIX}"

    def destination_location(self, name: str) -> str:
        root = self._ctx.palettes.library_path().rstrip("/")
        return f"{root}/{self._settings.PALETTE_LIBRARY_DIR}/{name}"

    def run(self, source: Palette) -> Palette:
        """`source` を新 ID で複製し、シーン内の参照を付け替えた複製先パレットを返す。"""
        return self._execute(source)[0]

    def execute(self, source: Palette) -> RemapReport:
        """`run` と同じ処理を行い、完了した実行レポートを返す。"""
        return self._execute(source)[1]

    # --- 内部 ---
    def _execute(self, source: Palette) -> tuple[Palette, RemapReport]:
        if source.color_count == 0:
            raise EmptyPalette(source.name)

        s = self._settings
        report = RemapReport(source=source)
        self.report = report

        # 色ごとのループ中に元パレットが一時的に増減しても影響しないよう、順序を先に固定する
        source_colors = list(source.colors)
        logger.info("copying palette '%s' (%d colors) with new ids", source.name, len(source_colors))

        usage_indexer = ColorUsageIndexer(
            self._ctx.scene,
            self._ctx.renderer,
            element_attr=s.ELEMENT_ATTR,
            timing_attr=s.TIMING_ATTR,
        )
        drawing_rewriter = DrawingRewriter(self._ctx.renderer)
        override_indexer = OverrideUsageIndexer(
            self._ctx.overrides, kind=s.OVERRIDE_MODULE_KIND, field=s.OVERRIDE_FIELD
        )
        override_rewriter = OverrideRewriter(self._ctx.overrides, field=s.OVERRIDE_FIELD)

        with undo_transaction(self._ctx.transactions, s.UNDO_LABEL):
            allocator = ColorAllocator(self._ctx.palettes)
            destination = self._create_destination(source)
            report.destination = destination

            candidates = override_indexer.find_override_modules(c.id for c in source_colors)

            for color in source_colors:
                created = allocator.allocate(color, destination, origin=source)
                report.substitutions.add(color.id, created.id)

                usages = sorted(
                    usage_indexer.find_drawing_usages(color.id), key=lambda u: (u.node, u.frame)
                )
                for usage in usages:
                    drawing_rewriter.rewrite(usage, color.id, created.id)
                    report.drawing_rewrites += 1

                if candidates:
                    candidates = self._rewrite_overrides(
                        override_rewriter, candidates, color.id, created.id, report
                    )

            if destination.color_count != len(source_colors):
                raise AllocationFailed(
                    destination.name,
                    source_colors[-1].id,
                    f"destination holds {destination.color_count} colors, "
                    f"expected {len(source_colors)}",
                )

        report.completed = True
        logger.info(
            "palette '%s' created: %d colors, %d drawing rewrite(s), %d selector record(s), "
            "%d module(s) skipped",
            destination.name,
            destination.color_count,
            report.drawing_rewrites,
            report.override_rewrites,
            len(report.skipped_modules),
        )
        return destination, report

    def _create_destination(self, source: Palette) -> Palette:
        store = self._ctx.palettes
        name = self.destination_name(source)
        try:
            destination = store.create_palette(name, self.destination_location(name))
            # ホストが自動生成する "Default" 色などを取り除く
            for placeholder in list(destination.colors):
                store.remove_color(destination, placeholder.id)
        except Exception as exc:
            raise AllocationFailed(
                name, source.colors[0].id, f"cannot create destination palette: {exc}"
            ) from exc
        return destination

    def _rewrite_overrides(
        self,
        rewriter: OverrideRewriter,
        candidates: list[ModuleRef],
        old_id: str,
        new_id: str,
        report: RemapReport,
    ) -> list[ModuleRef]:
        """候補モジュールを書き換え、不正データのモジュールを除いた候補を返す。"""
        remaining: list[ModuleRef] = []
        for module in candidates:
            try:
                report.override_rewrites += rewriter.rewrite(module, old_id, new_id)
            except MalformedOverrideData as exc:
                logger.warning("skipping override module %s: %s", module, exc.reason)
                report.skipped_modules.append(exc)
                continue
            remaining.append(module)
        return remaining


__all__ = ["RemapCoordinator", "RemapReport"]
