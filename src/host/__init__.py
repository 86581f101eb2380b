"""
どこで: `host` パッケージ（インフラ層）。
何を: 複製エンジンのコラボレータのメモリ実装と、YAML プロジェクト文書の読み書き。
"""

from .document import DocumentError, load_document, save_document
from .drawing import DrawingArtwork
from .memory import MemoryProject, StorageFull

__all__ = [
    "DrawingArtwork",
    "MemoryProject",
    "StorageFull",
    "DocumentError",
    "load_document",
    "save_document",
]
