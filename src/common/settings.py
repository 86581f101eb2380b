"""
どこで: `common.settings`
何を: パレット複製（新 ID 付与）の設定値を型付きで一元管理し、起動時に読み込む。
なぜ: YAML 設定と環境変数の優先順位を 1 か所に閉じ込め、テストから差し替えやすくするため。

優先順: dataclass 既定値 < `configs/default.yaml`/`config.yaml` の `remap:` < `PXF_*` 環境変数。
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from util.utils import load_config

from .env import env_bool, env_int, env_str


@dataclass(frozen=True)
class _Settings:
    # 複製先パレット
    NEW_PALETTE_SUFFIX: str = "_NewID"
    PALETTE_LIBRARY_DIR: str = "palette-library"
    UNDO_LABEL: str = "Copy Palette With New Color IDs"

    # 描画ノードのカラム解決
    ELEMENT_ATTR: str = "drawing.element"
    TIMING_ATTR: str = "drawing.customName.timing"

    # Colour Selector（override モジュール）
    OVERRIDE_MODULE_KIND: str = "TbdColorSelector"
    OVERRIDE_FIELD: str = "selectedcolors"

    # 実行前の確認（False なら CLI は確認せずに実行する）
    CONFIRM: bool = True

    # ID 採番
    ID_MINT_RETRIES: int = 16

    # Misc
    LOG_LEVEL: str = "INFO"


# YAML キー（小文字）→ フィールド名
_YAML_KEYS = {f.name.lower(): f.name for f in fields(_Settings)}

_settings = _Settings()


def _from_mapping(base: _Settings, data: Mapping[str, Any]) -> _Settings:
    """`remap:` セクションの値を型に合わせて取り込む（不明キー/不正値は無視）。"""
    updates: dict[str, Any] = {}
    for key, value in data.items():
        name = _YAML_KEYS.get(str(key).lower())
        if name is None or value is None:
            continue
        current = getattr(base, name)
        if isinstance(current, bool):
            if isinstance(value, bool):
                updates[name] = value
            elif str(value).strip().lower() in {"1", "true", "yes", "on"}:
                updates[name] = True
            elif str(value).strip().lower() in {"0", "false", "no", "off"}:
                updates[name] = False
            continue
        if isinstance(current, int):
            try:
                updates[name] = max(1, int(value))
            except (TypeError, ValueError):
                continue
        else:
            updates[name] = str(value)
    return replace(base, **updates)


def reload_from_env() -> _Settings:
    """YAML 設定 → 環境変数の順に再読込し、新しいスナップショットを返す。"""
    global _settings

    cfg = load_config() or {}
    section = cfg.get("remap", {}) if isinstance(cfg, dict) else {}
    s = _Settings()
    if isinstance(section, Mapping):
        s = _from_mapping(s, section)

    s = replace(
        s,
        NEW_PALETTE_SUFFIX=env_str("PXF_NEW_PALETTE_SUFFIX", s.NEW_PALETTE_SUFFIX) or "",
        PALETTE_LIBRARY_DIR=env_str("PXF_PALETTE_LIBRARY_DIR", s.PALETTE_LIBRARY_DIR)
        or s.PALETTE_LIBRARY_DIR,
        UNDO_LABEL=env_str("PXF_UNDO_LABEL", s.UNDO_LABEL) or s.UNDO_LABEL,
        ELEMENT_ATTR=env_str("PXF_ELEMENT_ATTR", s.ELEMENT_ATTR) or s.ELEMENT_ATTR,
        TIMING_ATTR=env_str("PXF_TIMING_ATTR", s.TIMING_ATTR) or s.TIMING_ATTR,
        OVERRIDE_MODULE_KIND=env_str("PXF_OVERRIDE_MODULE_KIND", s.OVERRIDE_MODULE_KIND)
        or s.OVERRIDE_MODULE_KIND,
        OVERRIDE_FIELD=env_str("PXF_OVERRIDE_FIELD", s.OVERRIDE_FIELD) or s.OVERRIDE_FIELD,
        ID_MINT_RETRIES=env_int("PXF_ID_MINT_RETRIES", s.ID_MINT_RETRIES, min_value=1)
        or s.ID_MINT_RETRIES,
        CONFIRM=env_bool("PXF_CONFIRM", s.CONFIRM),
        LOG_LEVEL=env_str("PXF_LOG_LEVEL", s.LOG_LEVEL) or s.LOG_LEVEL,
    )
    _settings = s
    return _settings


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
