"""
どこで: `remap.allocator`。
何を: 複製元の色と同じ名前・値を持ち、プロジェクト全体で一意な新 ID の色を複製先パレットへ登録する。
なぜ: 「新 ID を採番する」能力を 1 か所にまとめ、ホストに直接の採番手段があればそれを、
      無ければ複製→クローン→削除の 3 手順を使い分けるため。

不変条件:
- 新 ID は、アロケータ生成時点でいずれかのパレットに存在した ID とも、
  このアロケータが既に発行した ID とも一致しない。
- 新しい色の値は複製元の値とフィールド単位で等しい。
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from palette import Color, Palette

from .errors import AllocationFailed
from .interfaces import ColorMinter, PaletteStore

logger = logging.getLogger(__name__)


class ColorAllocator:
    """色 1 件ごとに新しい ID の複製を作るアロケータ（1 回の実行につき 1 インスタンス）。"""

    def __init__(self, store: PaletteStore, *, reserved_ids: Optional[Iterable[str]] = None) -> None:
        self._store = store
        # 実行開始時点の全 ID（以後発行分は _issued で追跡）
        self._reserved: frozenset[str] = frozenset(
            store.all_color_ids() if reserved_ids is None else reserved_ids
        )
        self._issued: set[str] = set()

    @property
    def issued_ids(self) -> frozenset[str]:
        return frozenset(self._issued)

    def allocate(
        self, source: Color, destination: Palette, *, origin: Optional[Palette] = None
    ) -> Color:
        """`source` の新 ID 版を `destination` の末尾へ追加し、それを返す。

        Parameters
        ----------
        source : Color
            複製元の色。
        destination : Palette
            追加先パレット。
        origin : Palette | None
            `source` を所有するパレット。ストアが `ColorMinter` でない場合は必須。

        Raises
        ------
        AllocationFailed
            追加先が満杯、ストアが失敗、または結果が一意性/値の同一性を満たさない場合。
        """
        if destination.is_full:
            raise AllocationFailed(destination.name, source.id, "destination palette is full")

        try:
            if isinstance(self._store, ColorMinter):
                created = self._store.mint_color(source, destination)
            else:
                created = self._duplicate_clone_remove(source, destination, origin)
        except AllocationFailed:
            raise
        except Exception as exc:
            raise AllocationFailed(destination.name, source.id, str(exc) or type(exc).__name__) from exc

        self._verify(source, created, destination)
        self._issued.add(created.id)
        logger.debug("allocated %s -> %s (%s)", source.id, created.id, source.name)
        return created

    # --- 内部 ---
    def _duplicate_clone_remove(
        self, source: Color, destination: Palette, origin: Optional[Palette]
    ) -> Color:
        """直接の採番手段が無いホスト向け: 元パレット内で複製 → 複製先へクローン → 元から削除。"""
        if origin is None:
            raise AllocationFailed(
                destination.name, source.id, "origin palette is required without a minting store"
            )
        copied = self._store.duplicate_color(origin, source)
        try:
            created = self._store.clone_color_into(copied, destination)
        finally:
            # 複製元パレットには一時的な複製を残さない
            self._store.remove_color(origin, copied.id)
        return created

    def _verify(self, source: Color, created: Color, destination: Palette) -> None:
        if created.id == source.id:
            raise AllocationFailed(destination.name, source.id, "store reused the source id")
        if created.id in self._reserved or created.id in self._issued:
            raise AllocationFailed(
                destination.name, source.id, f"id {created.id} collides with an existing color"
            )
        if created.value != source.value:
            raise AllocationFailed(destination.name, source.id, "copied value differs from source")
        if destination.find(created.id) is None:
            raise AllocationFailed(
                destination.name, source.id, "copy was not registered in the destination palette"
            )


__all__ = ["ColorAllocator"]
