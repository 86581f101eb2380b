"""
どこで: `util.color`。
何を: プロジェクト文書上の色表記（Hex, RGBA 0–255 の列）と 8bit RGBA タプルの相互変換。
なぜ: パレット値を文書⇔メモリ間で「ビット単位で同一」に往復させるため（浮動小数を経由しない）。
"""

from __future__ import annotations

from typing import Sequence

RGBA8 = tuple[int, int, int, int]


def parse_hex_rgba(s: str) -> RGBA8:
    """Hex 文字列から RGBA(0–255) を返す。

    受理形式: "#RRGGBB", "#RRGGBBAA", "0xRRGGBB", "0xRRGGBBAA", "RRGGBB", "RRGGBBAA"。
    大文字/小文字は不問。アルファ省略時は 255。
    """
    t = s.strip()
    if t.startswith("#"):
        t = t[1:]
    elif t.lower().startswith("0x"):
        t = t[2:]
    if len(t) not in (6, 8):
        raise ValueError(f"invalid hex color length: '{s}' (expected RRGGBB or RRGGBBAA)")
    try:
        r = int(t[0:2], 16)
        g = int(t[2:4], 16)
        b = int(t[4:6], 16)
        a = int(t[6:8], 16) if len(t) == 8 else 255
    except ValueError as e:
        raise ValueError(f"invalid hex color: '{s}'") from e
    return (r, g, b, a)


def format_hex_rgba(rgba: Sequence[int]) -> str:
    """RGBA(0–255) を "#rrggbbaa" に整形する。"""
    r, g, b, a = to_rgba8(rgba)
    return f"#{r:02x}{g:02x}{b:02x}{a:02x}"


def to_rgba8(value: object) -> RGBA8:
    """色指定を RGBA(0–255) の int タプルへ正規化する。

    - 受理: Hex 文字列, (r,g,b[,a]) の int 列（0–255）
    - 浮動小数は受け付けない（値の同一性を保つため丸めを行わない）
    """
    if isinstance(value, str):
        return parse_hex_rgba(value)
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"unsupported color type: {type(value)!r}")
    if len(value) not in (3, 4):
        raise ValueError("color tuple/list must be length 3 or 4")
    out: list[int] = []
    for v in value:
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValueError(f"color channels must be ints in 0..255: {value!r}")
        if not 0 <= v <= 255:
            raise ValueError(f"color channel out of range 0..255: {value!r}")
        out.append(v)
    if len(out) == 3:
        out.append(255)
    return (out[0], out[1], out[2], out[3])


__all__ = ["RGBA8", "parse_hex_rgba", "format_hex_rgba", "to_rgba8"]
