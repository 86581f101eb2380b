"""YAML プロジェクト文書内のパレットを新しい色 ID で複製する CLI。

使い方::

    palette-fork scene.yaml --palette Char_A [--yes] [--output out.yaml]

終了コード: 0 = 成功/確認で中止, 1 = 空パレット, 2 = 複製失敗/文書エラー。
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from common.logging import setup_default_logging
from common.settings import get as get_settings
from host import DocumentError, load_document, save_document
from remap import EmptyPalette, RemapError

from .confirm import AutoConfirm, ConsolePrompt
from .fork import fork_palette

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="palette-fork",
        description="Copy a palette with new color IDs and recolor every drawing and "
        "Colour Selector that uses it.",
    )
    parser.add_argument("document", type=Path, help="project document (YAML)")
    parser.add_argument("--palette", required=True, help="name of the palette to copy")
    parser.add_argument("--output", type=Path, default=None, help="write here instead of in place")
    parser.add_argument("-y", "--yes", action="store_true", help="skip the confirmation prompt (also PXF_CONFIRM=0)")
    parser.add_argument("--log-level", default=None, help="logging level (default: settings)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    setup_default_logging(args.log_level or get_settings().LOG_LEVEL)

    try:
        project = load_document(args.document)
    except (OSError, DocumentError) as exc:
        logger.error("cannot load %s: %s", args.document, exc)
        return 2

    try:
        source = project.palette_by_name(args.palette)
    except KeyError:
        logger.error("palette '%s' not found in %s", args.palette, args.document)
        return 2

    prompt = AutoConfirm(True) if args.yes or not get_settings().CONFIRM else ConsolePrompt()
    try:
        report = fork_palette(project.context(prompt), source)
    except EmptyPalette as exc:
        print(f"Selected palette does not have colors to copy: {exc.palette_name}")
        return 1
    except RemapError as exc:
        logger.error("%s", exc)
        return 2

    if report is None:
        print("Cancelled.")
        return 0

    out = save_document(project, args.output or args.document)
    dest = report.destination
    print(
        f"Created '{dest.name}' ({dest.color_count} colors); "
        f"{report.drawing_rewrites} drawing(s) and {report.override_rewrites} selector record(s) "
        f"recolored -> {out}"
    )
    for skipped in report.skipped_modules:
        print(f"Skipped {skipped.module}: {skipped.reason}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
