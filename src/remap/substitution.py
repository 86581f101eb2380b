"""
どこで: `remap.substitution`。
何を: 1 回の実行で作られる旧 ID → 新 ID の対応表。
なぜ: 単射性（異なる旧 ID が同じ新 ID に写らない）を登録時点で保証するため。
"""

from __future__ import annotations

from typing import Iterator


class SubstitutionMap:
    """旧 ID → 新 ID の単射マップ（1 色処理ごとに 1 件ずつ追加）。"""

    __slots__ = ("_forward", "_targets")

    def __init__(self) -> None:
        self._forward: dict[str, str] = {}
        self._targets: set[str] = set()

    def add(self, old_id: str, new_id: str) -> None:
        """対応を 1 件追加する。

        - 旧 ID の再登録、新 ID の重複、旧 ID と同じ新 ID は `ValueError`。
        """
        if old_id == new_id:
            raise ValueError(f"new id equals old id: {old_id}")
        if old_id in self._forward:
            raise ValueError(f"color {old_id} is already mapped to {self._forward[old_id]}")
        if new_id in self._targets:
            raise ValueError(f"new id {new_id} is already assigned")
        self._forward[old_id] = new_id
        self._targets.add(new_id)

    def __getitem__(self, old_id: str) -> str:
        return self._forward[old_id]

    def __contains__(self, old_id: object) -> bool:
        return old_id in self._forward

    def __len__(self) -> int:
        return len(self._forward)

    def __iter__(self) -> Iterator[str]:
        return iter(self._forward)

    def items(self) -> list[tuple[str, str]]:
        return list(self._forward.items())

    def issued(self) -> frozenset[str]:
        """これまでに割り当てた新 ID。"""
        return frozenset(self._targets)

    def as_dict(self) -> dict[str, str]:
        return dict(self._forward)


__all__ = ["SubstitutionMap"]
