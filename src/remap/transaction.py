"""
どこで: `remap.transaction`。
何を: ホストの Undo 積算境界（begin/end）を with 文で扱うコンテキストマネージャ。
なぜ: 途中で例外が出ても必ず `end()` を呼び、ユーザーから見て 1 回の Undo 単位に収めるため。
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from .interfaces import TransactionLog

logger = logging.getLogger(__name__)


@contextmanager
def undo_transaction(log: TransactionLog, label: str) -> Iterator[None]:
    """`log.begin(label)` から `log.end()` までを 1 つの Undo 単位にする。

    ロールバックは行わない。失敗時にどこまで残るかはホストの Undo 境界が決める。
    """
    log.begin(label)
    logger.debug("undo transaction opened: %s", label)
    try:
        yield
    finally:
        log.end()
        logger.debug("undo transaction closed: %s", label)


__all__ = ["undo_transaction"]
