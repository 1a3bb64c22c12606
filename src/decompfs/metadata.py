"""
metadata — переименование метаданных без потери остальных полей.

FileStat неизменяемый, поэтому rewrite() возвращает новый объект,
а все поля, кроме name, копируются dataclasses.replace автоматически
(включая поля, которые появятся в FileStat позже).
"""

from __future__ import annotations

from dataclasses import replace

from decompfs.filestore.types import DirEntry, FileStat


def rewrite(info: FileStat, name: str) -> FileStat:
    """Копия info с другим именем."""
    return replace(info, name=name)


def rewrite_entry(entry: DirEntry, name: str) -> DirEntry:
    """Элемент листинга с другим именем.

    Метаданные читаются сразу: ошибка info() должна всплыть при листинге.
    """
    info = rewrite(entry.info(), name)
    return DirEntry(name=name, is_dir=entry.is_dir, _info=lambda: info)
