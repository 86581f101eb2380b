"""
どこで: `host.document`。
何を: YAML のプロジェクト文書 ⇔ `MemoryProject` の読み書き。
なぜ: ホストアプリ無しで CLI からパレット複製を実行し、結果を文書として保存・比較できるようにするため。

文書の形（キーはすべて任意、色 ID は文字列として引用すること）::

    project:
      library_path: /projects/ep101
      frame_count: 12
    palettes:
      - name: Char_A
        id: pal0001
        colors:
          - {id: "0a1b2c3d4e5f6071", name: Red, rgba: "#ff0000ff"}
          - id: "..."
            name: Sky
            gradient: {type: linear, stops: [{position: 0.0, rgba: "#..."}, ...]}
    nodes:
      - {path: Top/CharA, column: CharA, element_mode: true}
    columns:
      CharA: ["1", "1", "2", null]          # フレーム 1 から順の露出名（null は空セル）
    drawings:
      CharA:
        "1":
          - {color: "0a1b2c3d4e5f6071", points: [[0, 0], [10, 0]]}
    modules:
      - path: Top/Selector
        kind: TbdColorSelector
        attrs: {selectedcolors: '[{"colorId":"0a1b2c3d4e5f6071"}]'}
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml

from palette import ColorValue, GradientStop, Palette
from util.color import format_hex_rgba, to_rgba8
from util.utils import dump_yaml_document, load_yaml_document

from .drawing import DrawingArtwork
from .memory import MemoryProject


class DocumentError(ValueError):
    """プロジェクト文書の内容が不正。`where` に該当箇所を持つ。"""

    def __init__(self, where: str, message: str) -> None:
        super().__init__(f"{where}: {message}")
        self.where = where


def _require_str(value: Any, where: str) -> str:
    if not isinstance(value, str) or not value:
        raise DocumentError(where, f"expected a non-empty string, got {value!r} (quote ids in YAML)")
    return value


def _as_list(value: Any, where: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise DocumentError(where, "expected a list")
    return value


def _as_mapping(value: Any, where: str) -> Mapping:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise DocumentError(where, "expected a mapping")
    return value


def _parse_value(entry: Mapping[str, Any], where: str) -> ColorValue:
    try:
        if "gradient" in entry:
            g = _as_mapping(entry["gradient"], f"{where}.gradient")
            kind = str(g.get("type", "linear")).lower()
            if kind not in ("linear", "radial"):
                raise DocumentError(f"{where}.gradient.type", f"unknown gradient type {kind!r}")
            stops = [
                GradientStop(position=float(s["position"]), rgba=to_rgba8(s["rgba"]))
                for s in _as_list(g.get("stops"), f"{where}.gradient.stops")
            ]
            return ColorValue.gradient(stops, radial=kind == "radial")
        r, g_, b, a = to_rgba8(entry.get("rgba"))
        return ColorValue.solid(r, g_, b, a)
    except DocumentError:
        raise
    except (KeyError, TypeError, ValueError) as exc:
        raise DocumentError(where, str(exc)) from exc


def _dump_value(value: ColorValue) -> dict[str, Any]:
    if not value.is_gradient:
        return {"rgba": format_hex_rgba(value.rgba)}
    return {
        "gradient": {
            "type": "radial" if value.kind == "radial_gradient" else "linear",
            "stops": [
                {"position": s.position, "rgba": format_hex_rgba(s.rgba)} for s in value.stops
            ],
        }
    }


def project_from_dict(data: Mapping[str, Any]) -> MemoryProject:
    """文書の辞書表現から `MemoryProject` を構築する。"""
    meta = _as_mapping(data.get("project"), "project")
    try:
        frame_count = int(meta.get("frame_count", 1))
    except (TypeError, ValueError) as exc:
        raise DocumentError("project.frame_count", str(exc)) from exc
    project = MemoryProject(
        library_path=str(meta.get("library_path", "/project")),
        frame_count=frame_count,
    )

    for i, pal in enumerate(_as_list(data.get("palettes"), "palettes")):
        where = f"palettes[{i}]"
        pal = _as_mapping(pal, where)
        name = _require_str(pal.get("name"), f"{where}.name")
        capacity = pal.get("capacity")
        if capacity is not None and (isinstance(capacity, bool) or not isinstance(capacity, int)):
            raise DocumentError(f"{where}.capacity", f"expected an integer, got {capacity!r}")
        try:
            palette = project.add_palette(
                name,
                palette_id=None if pal.get("id") is None else str(pal["id"]),
                location=pal.get("location"),
                capacity=capacity,
            )
        except ValueError as exc:
            raise DocumentError(where, str(exc)) from exc
        for j, entry in enumerate(_as_list(pal.get("colors"), f"{where}.colors")):
            cwhere = f"{where}.colors[{j}]"
            entry = _as_mapping(entry, cwhere)
            try:
                project.add_color(
                    palette,
                    str(entry.get("name", "")),
                    _parse_value(entry, cwhere),
                    color_id=_require_str(entry.get("id"), f"{cwhere}.id"),
                )
            except ValueError as exc:
                if isinstance(exc, DocumentError):
                    raise
                raise DocumentError(cwhere, str(exc)) from exc

    for i, node in enumerate(_as_list(data.get("nodes"), "nodes")):
        node = _as_mapping(node, f"nodes[{i}]")
        column = node.get("column")
        project.add_node(
            _require_str(node.get("path"), f"nodes[{i}].path"),
            None if column is None else str(column),
            element_mode=bool(node.get("element_mode", True)),
        )

    for column, exposures in _as_mapping(data.get("columns"), "columns").items():
        project.set_exposures(str(column), _as_list(exposures, f"columns.{column}"))

    for column, cels in _as_mapping(data.get("drawings"), "drawings").items():
        for exposure, strokes in _as_mapping(cels, f"drawings.{column}").items():
            where = f"drawings.{column}.{exposure}"
            try:
                artwork = DrawingArtwork.from_strokes(
                    (s.get("points", []), _require_str(s.get("color"), f"{where}.color"))
                    for s in _as_list(strokes, where)
                )
            except (AttributeError, TypeError, ValueError) as exc:
                if isinstance(exc, DocumentError):
                    raise
                raise DocumentError(where, str(exc)) from exc
            project.add_drawing(str(column), str(exposure), artwork)

    for i, module in enumerate(_as_list(data.get("modules"), "modules")):
        module = _as_mapping(module, f"modules[{i}]")
        attrs = _as_mapping(module.get("attrs"), f"modules[{i}].attrs")
        project.add_module(
            _require_str(module.get("path"), f"modules[{i}].path"),
            _require_str(module.get("kind"), f"modules[{i}].kind"),
            {str(k): str(v) for k, v in attrs.items()},
        )
    return project


def _dump_palette(palette: Palette) -> dict[str, Any]:
    out: dict[str, Any] = {"name": palette.name, "id": palette.id, "location": palette.location}
    if palette.capacity is not None:
        out["capacity"] = palette.capacity
    out["colors"] = [{"id": c.id, "name": c.name, **_dump_value(c.value)} for c in palette.colors]
    return out


def project_to_dict(project: MemoryProject) -> dict[str, Any]:
    """`MemoryProject` を文書の辞書表現へ変換する。"""
    drawings: dict[str, dict[str, list]] = {}
    for (column, exposure), artwork in project.drawings.items():
        drawings.setdefault(column, {})[exposure] = [
            {"color": color_id, "points": pts.tolist()} for pts, color_id in artwork.strokes()
        ]
    return {
        "project": {
            "library_path": project.library_path(),
            "frame_count": project.frame_count(),
        },
        "palettes": [_dump_palette(p) for p in project.palettes],
        "nodes": [
            {"path": n.path, "column": n.column, "element_mode": n.element_mode}
            for n in project.nodes.values()
        ],
        "columns": {c: list(e) for c, e in project.columns.items()},
        "drawings": drawings,
        "modules": [
            {"path": m.path, "kind": m.kind, "attrs": dict(m.attrs)}
            for m in project.modules.values()
        ],
    }


def load_document(path: str | Path) -> MemoryProject:
    """YAML 文書を読み込んで `MemoryProject` を返す。"""
    p = Path(path)
    try:
        data = load_yaml_document(p)
    except (ValueError, yaml.YAMLError) as exc:
        raise DocumentError(str(p), str(exc)) from exc
    return project_from_dict(data)


def save_document(project: MemoryProject, path: str | Path) -> Path:
    """`MemoryProject` を YAML 文書として保存し、書き込んだパスを返す。"""
    return dump_yaml_document(project_to_dict(project), Path(path))


__all__ = [
    "DocumentError",
    "project_from_dict",
    "project_to_dict",
    "load_document",
    "save_document",
]
