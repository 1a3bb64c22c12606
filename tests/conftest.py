import bz2
import gzip

import lz4.frame
import zstandard
from pytest import fixture

from decompfs.filestore import FileStore, MemoryFileStore


def compress_gzip(data: bytes) -> bytes:
    return gzip.compress(data)


def compress_bzip2(data: bytes) -> bytes:
    return bz2.compress(data)


def compress_zstd(data: bytes) -> bytes:
    return zstandard.ZstdCompressor().compress(data)


def compress_lz4(data: bytes) -> bytes:
    return lz4.frame.compress(data)


COMPRESSORS = {
    ".gz": compress_gzip,
    ".bz2": compress_bzip2,
    ".zst": compress_zstd,
    ".lz4": compress_lz4,
}


class TrackedFile:
    """Поток, который сообщает хранилищу о каждом close()."""

    def __init__(self, inner, store: "CountingStore", path: str):
        self._inner = inner
        self._store = store
        self.path = path

    def read(self, size: int = -1) -> bytes:
        return self._inner.read(size)

    def stat(self):
        return self._inner.stat()

    def close(self) -> None:
        self._store.closed.append(self.path)
        self._inner.close()


class CountingStore(FileStore):
    """Обёртка над FileStore, считающая открытия и закрытия."""

    def __init__(self, inner: FileStore):
        self._inner = inner
        self.attempts: list[str] = []
        self.opened: list[str] = []
        self.closed: list[str] = []

    @property
    def open_handles(self) -> int:
        return len(self.opened) - len(self.closed)

    def open_read(self, path: str) -> TrackedFile:
        self.attempts.append(path)
        f = self._inner.open_read(path)
        self.opened.append(path)
        return TrackedFile(f, self, path)

    def stat(self, path: str):
        return self._inner.stat(path)

    def read_dir(self, path: str):
        return self._inner.read_dir(path)


@fixture
def counting_store():
    def build(files: dict) -> CountingStore:
        return CountingStore(MemoryFileStore(files))

    return build


@fixture
def no_plugin_env(monkeypatch):
    monkeypatch.setenv("DECOMPFS_USE_PLUGIN", "0")
    monkeypatch.delenv("DECOMPFS_DEBUG", raising=False)
