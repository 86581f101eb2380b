"""
どこで: `host.drawing`。
何を: メモリ上の描画内容（ストローク列）。座標は `coords`(N,2) と `offsets`(M+1) の NumPy 配列、
      色はストロークごとの色 ID 配列（object dtype）で保持する。
なぜ: 使用色の列挙と色 ID 置換をベクトル化し、描画内容 1 件の置換を 1 回の配列演算で済ませるため。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from remap.interfaces import ColorSubstitution

Stroke = tuple[Sequence[Sequence[float]], str]


@dataclass
class DrawingArtwork:
    """1 セル分の描画内容。

    Attributes
    ----------
    coords : np.ndarray
        全ストロークの頂点を連結した (N, 2) float32 配列。
    offsets : np.ndarray
        ストローク境界（長さ M+1、先頭 0・末尾 N）の int32 配列。
    color_ids : np.ndarray
        ストロークごとの色 ID（長さ M、object dtype）。
    """

    coords: np.ndarray
    offsets: np.ndarray
    color_ids: np.ndarray

    def __post_init__(self) -> None:
        self.coords = np.asarray(self.coords, dtype=np.float32)
        self.offsets = np.asarray(self.offsets, dtype=np.int32)
        # 固定幅の文字列 dtype だと置換時に新 ID が切り詰められる
        self.color_ids = np.asarray(self.color_ids).astype(object, copy=False)
        if self.offsets.ndim != 1 or self.offsets.size < 1 or int(self.offsets[0]) != 0:
            raise ValueError("offsets must be a 1-D array starting at 0")
        if int(self.offsets[-1]) != self.coords.shape[0]:
            raise ValueError("offsets[-1] must equal the number of vertices")
        if self.color_ids.shape != (self.offsets.size - 1,):
            raise ValueError("color_ids must hold exactly one id per stroke")

    @classmethod
    def empty(cls) -> "DrawingArtwork":
        return cls(
            coords=np.zeros((0, 2), dtype=np.float32),
            offsets=np.zeros(1, dtype=np.int32),
            color_ids=np.empty(0, dtype=object),
        )

    @classmethod
    def from_strokes(cls, strokes: Iterable[Stroke]) -> "DrawingArtwork":
        """(頂点列, 色 ID) の列から描画内容を作る。"""
        points: list[np.ndarray] = []
        offsets = [0]
        ids: list[str] = []
        for pts, color_id in strokes:
            arr = np.asarray(pts, dtype=np.float32).reshape(-1, 2)
            points.append(arr)
            offsets.append(offsets[-1] + arr.shape[0])
            ids.append(str(color_id))
        if not ids:
            return cls.empty()
        color_ids = np.empty(len(ids), dtype=object)
        color_ids[:] = ids
        return cls(
            coords=np.concatenate(points, axis=0),
            offsets=np.asarray(offsets, dtype=np.int32),
            color_ids=color_ids,
        )

    @property
    def n_strokes(self) -> int:
        return int(self.color_ids.size)

    def strokes(self) -> list[tuple[np.ndarray, str]]:
        """(頂点配列, 色 ID) のリストへ展開する。"""
        out: list[tuple[np.ndarray, str]] = []
        for i in range(self.n_strokes):
            start, end = int(self.offsets[i]), int(self.offsets[i + 1])
            out.append((self.coords[start:end], str(self.color_ids[i])))
        return out

    def used_color_ids(self) -> set[str]:
        if self.color_ids.size == 0:
            return set()
        return {str(c) for c in np.unique(self.color_ids)}

    def recolor(self, substitutions: Sequence[ColorSubstitution]) -> int:
        """置換を同時適用し、色が変わったストローク数を返す。

        各置換の一致判定は適用前の配列に対して行う（A→B と B→A を同時に渡しても入れ替わる）。
        """
        if self.color_ids.size == 0 or not substitutions:
            return 0
        original = self.color_ids.copy()
        changed = np.zeros(original.shape, dtype=bool)
        for sub in substitutions:
            mask = original == sub.from_id
            self.color_ids[mask] = sub.to_id
            changed |= mask
        return int(np.count_nonzero(changed))


__all__ = ["DrawingArtwork", "Stroke"]
