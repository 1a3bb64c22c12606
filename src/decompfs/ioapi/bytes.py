"""
bytes — базовые операции чтения поверх FileStore.

Если store не передан, используется активное хранилище runtime
(уже обёрнутое распаковкой).
"""

from __future__ import annotations

from typing import BinaryIO

from decompfs.filestore.base import FileStore
from decompfs.runtime import get_filestore


def open_read(path: str, store: FileStore | None = None) -> BinaryIO:
    store = store or get_filestore()
    return store.open_read(path)


def read_bytes(path: str, store: FileStore | None = None) -> bytes:
    store = store or get_filestore()
    return store.read_bytes(path)


def iter_chunks(path: str, chunk_size: int = 64 * 1024, store: FileStore | None = None):
    """Читает файл порциями по chunk_size байт (последняя может быть короче)."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    f = open_read(path, store=store)
    try:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                return
            yield chunk
    finally:
        f.close()
