"""
プロジェクト向けの軽量ロギングユーティリティ。

要点:
- 各モジュールは `logging.getLogger(__name__)` でロガーを取得する。
- CLI などの入口からのみ、最小構成を 1 度だけ適用するヘルパーを呼ぶ。
"""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_level(level: int | str) -> int:
    """`"debug"` などの名前または数値をロギングレベルへ変換する（不明名は INFO）。"""
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        return resolved if isinstance(resolved, int) else logging.INFO
    return int(level)


def setup_default_logging(level: int | str = "INFO") -> None:
    """最小限のロギング設定を 1 度だけ適用する。

    - ルートロガーにハンドラが既にあればレベルのみ合わせる
    - 上位のランナー/CLI から呼び出す想定
    """
    lvl = resolve_level(level)
    root = logging.getLogger()
    if root.handlers:
        # Assume the app has configured logging
        root.setLevel(lvl)
        return
    logging.basicConfig(level=lvl, format=_FORMAT)


__all__ = ["resolve_level", "setup_default_logging"]
