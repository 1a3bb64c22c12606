"""
decompfs — прозрачная распаковка поверх read-only хранилища файлов.

Пример:
    from decompfs import DecompressFileStore, LocalFileStore

    fs = DecompressFileStore(LocalFileStore("data"))
    with fs.open_read("report.csv") as f:   # лежит report.csv.gz
        head = f.read(1024)
"""

from decompfs.adapter import VirtualFile, adapt, release_all
from decompfs.codecs import REGISTRY, Codec, codec_for_name, strip_suffix
from decompfs.errors import DecodeError, is_not_found
from decompfs.filestore import DirEntry, FileStat, FileStore, LocalFileStore, MemoryEntry, MemoryFileStore
from decompfs.overlay import DecompressFileStore

__all__ = [
    "DecompressFileStore",
    "VirtualFile",
    "adapt",
    "release_all",
    "Codec",
    "REGISTRY",
    "codec_for_name",
    "strip_suffix",
    "DecodeError",
    "is_not_found",
    "FileStore",
    "FileStat",
    "DirEntry",
    "LocalFileStore",
    "MemoryFileStore",
    "MemoryEntry",
]
