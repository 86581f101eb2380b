"""
どこで: `remap` パッケージ（ドメイン層）。
何を: パレットを新しい色 ID で複製し、描画と Colour Selector の参照を付け替えるエンジン。
なぜ: 入口（api）とホスト実装（host）から同じ部品を使うため、公開名をここに集約する。
"""

from .allocator import ColorAllocator
from .coordinator import RemapCoordinator, RemapReport
from .drawing import DrawingRewriter
from .errors import (
    AllocationFailed,
    DrawingRewriteFailed,
    EmptyPalette,
    MalformedOverrideData,
    OverrideRewriteFailed,
    RemapError,
    SceneAccessError,
)
from .interfaces import ColorSubstitution, HostContext
from .overrides import ColorReferenceRecord, OverrideRewriter, OverrideUsageIndexer
from .substitution import SubstitutionMap
from .transaction import undo_transaction
from .usage import ColorUsageIndexer, DrawingUsage

__all__ = [
    "ColorAllocator",
    "ColorUsageIndexer",
    "DrawingUsage",
    "DrawingRewriter",
    "OverrideUsageIndexer",
    "OverrideRewriter",
    "ColorReferenceRecord",
    "RemapCoordinator",
    "RemapReport",
    "SubstitutionMap",
    "ColorSubstitution",
    "HostContext",
    "undo_transaction",
    "RemapError",
    "EmptyPalette",
    "AllocationFailed",
    "MalformedOverrideData",
    "OverrideRewriteFailed",
    "DrawingRewriteFailed",
    "SceneAccessError",
]
