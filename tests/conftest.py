"""共通フィクスチャ。

- 設定の既定値化（PXF_* 環境変数を除去して再読込）
- 仕様シナリオ相当の小さなシーン
"""

from __future__ import annotations

import os
from typing import Iterator

import pytest

from common.settings import reload_from_env
from tests._utils.scenes import CharAScene, build_char_a


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """テスト間で PXF_* 環境変数の影響を残さない。"""
    for key in list(os.environ):
        if key.startswith("PXF_"):
            monkeypatch.delenv(key, raising=False)
    reload_from_env()
    yield
    reload_from_env()


@pytest.fixture()
def char_a() -> CharAScene:
    return build_char_a()
