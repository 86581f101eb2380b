"""
どこで: `api` 入口（高レベル公開 API）。
何を: パレット複製操作 `fork_palette`、確認プロンプト、エンジンの主要型を再輸出。
なぜ: 利用者が単一名前空間から「確認 → 複製 → 参照付け替え」まで完結できるようにするため。

Usage:
    from api import fork_palette, AutoConfirm
    from host import load_document

    project = load_document("scene.yaml")
    report = fork_palette(project.context(AutoConfirm()), project.palette_by_name("Char_A"))
    print(report.destination.name)  # "Char_A_NewID"
"""

from remap import (
    AllocationFailed,
    EmptyPalette,
    HostContext,
    MalformedOverrideData,
    RemapCoordinator,
    RemapError,
    RemapReport,
)

from .confirm import AutoConfirm, ConsolePrompt, build_summary
from .fork import fork_palette

__all__ = [
    "fork_palette",
    "build_summary",
    "AutoConfirm",
    "ConsolePrompt",
    "HostContext",
    "RemapCoordinator",
    "RemapReport",
    "RemapError",
    "EmptyPalette",
    "AllocationFailed",
    "MalformedOverrideData",
]

__version__ = "2026.10"
