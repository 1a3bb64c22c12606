"""
DecompressFileStore — прозрачная распаковка поверх любого FileStore.

Открытие файла:
- сначала буквальный путь; если он есть — отдаётся как есть, без декодера
- если его нет (и только в этом случае) — пробуются path + ".gz", ".bz2", ".zst", ".lz4"
  в порядке реестра; первый найденный распаковывается на лету
- если не нашлось ничего — поднимается исходная ошибка "не найдено" для буквального пути
- любая другая ошибка буквального пути (нет прав, сбой I/O) пробрасывается сразу

Листинг каталога:
- подкаталоги не трогаются
- у файлов с известным расширением имя отдаётся без расширения
- порядок бэкенда сохраняется; дубли (a.txt и a.txt.gz -> два "a.txt") не схлопываются

Важно:
- overlay сам реализует FileStore, поэтому listdir/exists/walk/read_bytes работают через него
- ничего не кэшируется: каждый вызов идёт в бэкенд
"""

from __future__ import annotations

from decompfs.adapter import VirtualFile, adapt
from decompfs.codecs import REGISTRY, Codec, codec_for_name, strip_suffix
from decompfs.errors import is_not_found
from decompfs.filestore.base import FileStore
from decompfs.filestore.types import DirEntry, FileStat
from decompfs.metadata import rewrite, rewrite_entry
from decompfs.utils.debug import debug


class DecompressFileStore(FileStore):
    """FileStore, который отдаёт сжатые файлы распакованными."""

    def __init__(self, store: FileStore):
        self._store = store

    @property
    def store(self) -> FileStore:
        return self._store

    def open_read(self, path: str) -> VirtualFile:
        try:
            raw = self._store.open_read(path)
        except Exception as e:
            if not is_not_found(e):
                raise
            not_found = e
        else:
            return adapt(Codec.NONE, raw, path=path)

        for spec in REGISTRY:
            candidate = path + spec.suffix
            try:
                raw = self._store.open_read(candidate)
            except Exception as probe_error:
                debug(f"probe {candidate!r} failed: {probe_error!r}")
                continue
            debug(f"resolved {path!r} -> {candidate!r}")
            return adapt(spec.codec, raw, path=candidate)

        raise not_found

    def stat(self, path: str) -> FileStat:
        try:
            return self._store.stat(path)
        except Exception as e:
            if not is_not_found(e):
                raise
            not_found = e

        for spec in REGISTRY:
            try:
                info = self._store.stat(path + spec.suffix)
            except Exception:
                continue
            if info.is_dir:
                continue
            return rewrite(info, strip_suffix(info.name, spec.codec))

        raise not_found

    def read_dir(self, path: str) -> list[DirEntry]:
        entries = self._store.read_dir(path)
        out: list[DirEntry] = []
        for entry in entries:
            if entry.is_dir:
                out.append(entry)
                continue
            codec = codec_for_name(entry.name)
            if codec is Codec.NONE:
                out.append(entry)
                continue
            out.append(rewrite_entry(entry, strip_suffix(entry.name, codec)))
        return out
