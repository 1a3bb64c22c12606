"""
LocalFileStore — реализация FileStore для локальной файловой системы.

Требования:
- реализовать read-only контракт FileStore
- работать как на Windows, так и на Linux/macOS

Замечание:
- LocalFileStore принимает POSIX-разделители ('/') в путях — pathlib это допускает.
- ошибки ОС не перехватываются: FileNotFoundError, PermissionError и т.д. уходят вызывающему.
"""

from __future__ import annotations

import errno
import io
import os
import stat as stat_mod
from functools import partial
from pathlib import Path

from decompfs.filestore.base import FileStore
from decompfs.filestore.types import DirEntry, FileStat


def _to_filestat(name: str, st: os.stat_result) -> FileStat:
    return FileStat(
        name=name,
        is_dir=stat_mod.S_ISDIR(st.st_mode),
        size=int(st.st_size),
        mode=stat_mod.S_IMODE(st.st_mode),
        mtime=float(st.st_mtime),
        atime=float(st.st_atime),
        ctime=float(st.st_ctime),
    )


class LocalFile(io.FileIO):
    """Открытый локальный файл + stat() по дескриптору."""

    def __init__(self, path: Path):
        super().__init__(str(path), "r")
        self._base_name = path.name

    def stat(self) -> FileStat:
        return _to_filestat(self._base_name, os.fstat(self.fileno()))


class LocalFileStore(FileStore):
    """Локальная реализация FileStore."""

    def __init__(self, root: str | None = None):
        # root используется как базовый каталог для относительных путей
        self._root = Path(root).expanduser().resolve() if root else None

    def _abs(self, path: str) -> Path:
        # Нормализация: обратные слэши приводятся к '/', pathlib на Windows это понимает.
        p = Path(str(path).replace("\\", "/"))
        if self._root and not p.is_absolute():
            p = self._root / p
        return p

    def open_read(self, path: str) -> LocalFile:
        p = self._abs(path)
        if p.is_dir():
            raise IsADirectoryError(errno.EISDIR, "Is a directory", path)
        return LocalFile(p)

    def stat(self, path: str) -> FileStat:
        p = self._abs(path)
        return _to_filestat(p.name, p.stat())

    def read_dir(self, path: str) -> list[DirEntry]:
        p = self._abs(path)
        out: list[DirEntry] = []
        # Порядок — по имени: os.scandir его не гарантирует.
        with os.scandir(p) as it:
            items = sorted(it, key=lambda x: x.name)
        for item in items:
            out.append(
                DirEntry(
                    name=item.name,
                    is_dir=item.is_dir(),
                    _info=partial(self.stat, os.path.join(str(p), item.name)),
                )
            )
        return out
