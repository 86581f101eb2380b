"""
どこで: `api.confirm`。
何を: 実行前の確認メッセージ生成と、確認プロンプトの実装（対話 y/N・自動承認）。
なぜ: 元パレットのどの色が複製され、何が書き換わるのかを実行前に利用者へ示すため。
"""

from __future__ import annotations

from typing import Callable

TITLE = "Copy Palette With New Color IDs"


def build_summary(palette_name: str) -> str:
    """確認ダイアログ本文（パレット名と影響範囲）を返す。"""
    return (
        "You are about to make a copy of:\n\n"
        f"{palette_name}\n\n\n"
        "All colors in the copied palette will have new color IDs.\n\n"
        "All drawings and Colour Selector modules that use colors on the original palette "
        "will be recolored with colors on the copied palette."
    )


class ConsolePrompt:
    """標準入出力で y/N を尋ねるプロンプト（既定は No）。"""

    def __init__(
        self,
        *,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        self._input = input_fn
        self._output = output_fn

    def confirm(self, summary: str) -> bool:
        self._output(f"{TITLE}\n\n{summary}\n")
        try:
            answer = self._input("Proceed? [y/N] ")
        except EOFError:
            return False
        return answer.strip().lower() in {"y", "yes"}


class AutoConfirm:
    """常に同じ答えを返すプロンプト（`--yes` やテスト用）。"""

    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.summaries: list[str] = []

    def confirm(self, summary: str) -> bool:
        self.summaries.append(summary)
        return self.answer


__all__ = ["TITLE", "build_summary", "ConsolePrompt", "AutoConfirm"]
