"""
どこで: `remap.overrides`。
何を: Colour Selector など、色参照を JSON 配列として属性に保持する override モジュールの
      検出（テキスト一致）と書き換え（パース → colorId 置換 → 再シリアライズ）。
なぜ: 描画とは別経路で色 ID を保持するモジュールも新しい色を指すようにするため。

参照リストの形: `[{"colorId": "<id>", ...その他のフィールド}, ...]`
- `colorId` 以外のフィールドは中身を解釈せず、キー順ごとそのまま書き戻す。
- 書き戻しは空白なしの JSON（`JSON.stringify` 相当）。
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from .errors import MalformedOverrideData, OverrideRewriteFailed
from .interfaces import ModuleRef, OverrideStore

logger = logging.getLogger(__name__)

COLOR_ID_KEY = "colorId"


@dataclass
class ColorReferenceRecord:
    """参照リストの 1 レコード（既知の `color_id` + 不透明なその他フィールド）。"""

    color_id: str
    extra: dict[str, Any] = field(default_factory=dict)
    # `colorId` が元のオブジェクトで何番目のキーだったか（キー順の保持用）
    key_index: int = 0

    @classmethod
    def from_json_object(cls, obj: Any) -> "ColorReferenceRecord":
        if not isinstance(obj, dict):
            raise ValueError(f"record must be an object, got {type(obj).__name__}")
        if COLOR_ID_KEY not in obj:
            raise ValueError(f"record has no '{COLOR_ID_KEY}' field")
        color_id = obj[COLOR_ID_KEY]
        if not isinstance(color_id, str):
            raise ValueError(f"'{COLOR_ID_KEY}' must be a string, got {type(color_id).__name__}")
        keys = list(obj.keys())
        extra = {k: v for k, v in obj.items() if k != COLOR_ID_KEY}
        return cls(color_id=color_id, extra=extra, key_index=keys.index(COLOR_ID_KEY))

    def to_json_object(self) -> dict[str, Any]:
        items = list(self.extra.items())
        items.insert(min(self.key_index, len(items)), (COLOR_ID_KEY, self.color_id))
        return dict(items)


def parse_reference_list(text: str) -> list[ColorReferenceRecord]:
    """参照リストのテキストをレコード列へ変換する（形が違えば `ValueError`）。"""
    if not isinstance(text, str):
        raise ValueError(f"expected text, got {type(text).__name__}")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON: {exc.msg} at position {exc.pos}") from exc
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array, got {type(data).__name__}")
    return [ColorReferenceRecord.from_json_object(item) for item in data]


def dump_reference_list(records: Iterable[ColorReferenceRecord]) -> str:
    """レコード列を空白なしの JSON テキストへ戻す。"""
    return json.dumps(
        [r.to_json_object() for r in records], separators=(",", ":"), ensure_ascii=False
    )


class OverrideUsageIndexer:
    """パレットの色 ID をいずれか含む override モジュールを列挙する（パレットにつき 1 回）。"""

    def __init__(self, store: OverrideStore, *, kind: str, field: str) -> None:
        self._store = store
        self._kind = kind
        self._field = field

    def find_override_modules(self, palette_color_ids: Iterable[str]) -> list[ModuleRef]:
        """属性テキストに色 ID のいずれかを含むモジュールを、ストアの列挙順で返す。"""
        ids = [cid for cid in palette_color_ids if cid]
        if not ids:
            return []
        found: list[ModuleRef] = []
        for module in self._store.list_modules(self._kind):
            if module in found:
                continue
            try:
                text = self._store.get_config_text(module, self._field) or ""
            except Exception as exc:
                raise OverrideRewriteFailed(
                    module, self._field, str(exc) or type(exc).__name__
                ) from exc
            if any(cid in text for cid in ids):
                found.append(module)
        logger.debug("%d %s module(s) reference the palette", len(found), self._kind)
        return found


class OverrideRewriter:
    """override モジュールの参照リスト内の色 ID を置換する。"""

    def __init__(self, store: OverrideStore, *, field: str) -> None:
        self._store = store
        self._field = field

    def read_records(self, module: ModuleRef) -> list[ColorReferenceRecord]:
        try:
            text = self._store.get_config_text(module, self._field)
        except Exception as exc:
            raise OverrideRewriteFailed(
                module, self._field, str(exc) or type(exc).__name__
            ) from exc
        try:
            return parse_reference_list(text)
        except ValueError as exc:
            raise MalformedOverrideData(module, self._field, str(exc)) from exc

    def rewrite(self, module: ModuleRef, old_id: str, new_id: str) -> int:
        """`old_id` を持つレコードを `new_id` に置き換え、置換件数を返す。

        - 1 件も一致しなければ属性は書き換えない。
        - レコード順・その他フィールドは変更しない。
        """
        records = self.read_records(module)
        changed = 0
        for record in records:
            if record.color_id == old_id:
                record.color_id = new_id
                changed += 1
        if changed:
            try:
                self._store.set_config_text(module, self._field, dump_reference_list(records))
            except Exception as exc:
                raise OverrideRewriteFailed(
                    module, self._field, str(exc) or type(exc).__name__
                ) from exc
            logger.debug("module %s: %d record(s) %s -> %s", module, changed, old_id, new_id)
        return changed


__all__ = [
    "COLOR_ID_KEY",
    "ColorReferenceRecord",
    "parse_reference_list",
    "dump_reference_list",
    "OverrideUsageIndexer",
    "OverrideRewriter",
]
