"""
txt — чтение текстовых файлов поверх FileStore.

Полезно для конфигов, логов и выгрузок, которые лежат как .txt.gz/.log.zst:
вызывающий код передаёт имя без расширения сжатия.

Примечание:
- кодировка по умолчанию utf-8. Другую (cp1251 и т.п.) можно передать явно.
"""

from __future__ import annotations

import io
from typing import Iterator

from decompfs.filestore.base import FileStore
from decompfs.ioapi.bytes import open_read, read_bytes


def read_text(path: str, encoding: str = "utf-8", store: FileStore | None = None) -> str:
    """Читает текстовый файл целиком и возвращает строку."""
    data = read_bytes(path, store=store)
    return data.decode(encoding, errors="replace")


def iter_lines(path: str, encoding: str = "utf-8", store: FileStore | None = None) -> Iterator[str]:
    """Построчное чтение без загрузки файла целиком. Переводы строк сохраняются."""
    raw = open_read(path, store=store)
    buf = raw if isinstance(raw, io.BufferedIOBase) else io.BufferedReader(raw)
    with io.TextIOWrapper(buf, encoding=encoding, errors="replace", newline="") as f:
        yield from f
