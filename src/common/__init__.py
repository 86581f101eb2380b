"""
どこで: `common` パッケージ。
何を: 設定・環境変数・ロギングの共通基盤。
なぜ: remap/host/api の各層から同じ設定スナップショットを参照するため。
"""

from .settings import get as get_settings
from .settings import reload_from_env

__all__ = [
    "get_settings",
    "reload_from_env",
]
