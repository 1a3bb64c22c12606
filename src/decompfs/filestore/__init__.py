from decompfs.filestore.base import FileStore, StoreFile
from decompfs.filestore.local import LocalFileStore
from decompfs.filestore.memory import MemoryEntry, MemoryFileStore
from decompfs.filestore.types import DirEntry, FileStat

__all__ = [
    "FileStore",
    "StoreFile",
    "LocalFileStore",
    "MemoryFileStore",
    "MemoryEntry",
    "FileStat",
    "DirEntry",
]
