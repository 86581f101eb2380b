"""
どこで: `api.fork`。
何を: 「選択パレットを新 ID で複製する」操作の入口。空パレット判定 → 確認 → `RemapCoordinator.run`。
なぜ: 確認 UI（外部コラボレータ）と複製エンジンの境界を 1 関数にまとめるため。
"""

from __future__ import annotations

import logging
from typing import Optional

from common.settings import _Settings
from palette import Palette
from remap import EmptyPalette, HostContext, RemapCoordinator, RemapReport

from .confirm import build_summary

logger = logging.getLogger(__name__)


def fork_palette(
    context: HostContext,
    palette: Palette,
    *,
    settings: Optional[_Settings] = None,
) -> Optional[RemapReport]:
    """`palette` を新しい色 ID で複製し、シーン内の参照を付け替える。

    - 色が無いパレットは確認前に `EmptyPalette`。
    - `context.prompt` があれば確認し、拒否されたら何もせず None を返す。
    - 成功時は実行レポート（`report.destination` が複製先パレット）を返す。
    """
    if palette.color_count == 0:
        raise EmptyPalette(palette.name)

    if context.prompt is not None and not context.prompt.confirm(build_summary(palette.name)):
        logger.info("copy of palette '%s' declined", palette.name)
        return None

    return RemapCoordinator(context, settings).execute(palette)


__all__ = ["fork_palette"]
