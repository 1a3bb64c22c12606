"""
MemoryFileStore — FileStore поверх словаря {путь: данные}.

Используется:
- в тестах и примерах, когда не нужен диск
- как backend для небольших наборов файлов, уже лежащих в памяти

Каталоги явно не хранятся: каталог существует, если в нём есть хотя бы один файл.
Пути — POSIX, относительно корня; ведущие "/" и "./" игнорируются.
"""

from __future__ import annotations

import errno
import io
from dataclasses import dataclass
from functools import partial
from typing import Mapping

from decompfs.filestore.base import FileStore
from decompfs.filestore.types import DirEntry, FileStat


@dataclass(frozen=True)
class MemoryEntry:
    """Файл в памяти с метаданными."""

    data: bytes = b""
    mode: int = 0o644
    mtime: float = 0.0


class MemoryStream(io.BytesIO):
    """Открытый поток чтения MemoryFileStore."""

    def __init__(self, data: bytes, info: FileStat):
        super().__init__(data)
        self._info = info

    def stat(self) -> FileStat:
        return self._info


def _norm(path: str) -> str:
    p = str(path).replace("\\", "/")
    while p.startswith("./"):
        p = p[2:]
    p = p.strip("/")
    return "" if p == "." else p


def _base(path: str) -> str:
    return path.rsplit("/", 1)[-1] if path else "."


def _not_found(path: str) -> FileNotFoundError:
    return FileNotFoundError(errno.ENOENT, "No such file or directory", path)


class MemoryFileStore(FileStore):
    """In-memory реализация FileStore."""

    def __init__(self, files: Mapping[str, bytes | MemoryEntry] | None = None):
        self._files: dict[str, MemoryEntry] = {}
        self._dirs: set[str] = {""}
        for path, value in (files or {}).items():
            key = _norm(path)
            if not key:
                raise ValueError(f"Invalid file path: {path!r}")
            entry = value if isinstance(value, MemoryEntry) else MemoryEntry(data=bytes(value))
            self._files[key] = entry
            parts = key.split("/")
            for i in range(1, len(parts)):
                self._dirs.add("/".join(parts[:i]))

    def _file_stat(self, key: str) -> FileStat:
        entry = self._files[key]
        return FileStat(
            name=_base(key),
            is_dir=False,
            size=len(entry.data),
            mode=entry.mode,
            mtime=entry.mtime,
        )

    def open_read(self, path: str) -> MemoryStream:
        key = _norm(path)
        if key in self._files:
            return MemoryStream(self._files[key].data, self._file_stat(key))
        if key in self._dirs:
            raise IsADirectoryError(errno.EISDIR, "Is a directory", path)
        raise _not_found(path)

    def stat(self, path: str) -> FileStat:
        key = _norm(path)
        if key in self._files:
            return self._file_stat(key)
        if key in self._dirs:
            return FileStat(name=_base(key), is_dir=True, size=0, mode=0o755)
        raise _not_found(path)

    def read_dir(self, path: str) -> list[DirEntry]:
        key = _norm(path)
        if key in self._files:
            raise NotADirectoryError(errno.ENOTDIR, "Not a directory", path)
        if key not in self._dirs:
            raise _not_found(path)

        prefix = f"{key}/" if key else ""
        children: dict[str, bool] = {}
        for candidate in list(self._files) + list(self._dirs):
            if not candidate or not candidate.startswith(prefix):
                continue
            rest = candidate[len(prefix):]
            if not rest or "/" in rest:
                continue
            children[rest] = candidate in self._dirs

        return [
            DirEntry(name=name, is_dir=is_dir, _info=partial(self.stat, prefix + name))
            for name, is_dir in sorted(children.items())
        ]
