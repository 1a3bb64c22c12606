"""
FileStore — интерфейс read-only хранилища файлов и каталогов.

Принцип:
- FileStore отвечает только за чтение: открыть поток, получить метаданные, прочитать каталог
- распаковка и прочие преобразования живут выше (в overlay)

Ошибки:
- "не найдено" — FileNotFoundError (или OSError с errno ENOENT)
- всё остальное — сбой хранилища, пробрасывается как есть

Важно:
- read_bytes/listdir/exists/walk имеют дефолтные реализации поверх базовых методов,
  чтобы бэкенды можно было реализовать минимально.
"""

from __future__ import annotations

from typing import Iterator, Protocol, Tuple

from decompfs.errors import is_not_found
from decompfs.filestore.types import DirEntry, FileStat


def join_path(parent: str, name: str) -> str:
    """Склейка POSIX-путей с учётом корня "/" и "."."""
    if parent == "/":
        return f"/{name}"
    p = parent.rstrip("/")
    if not p or p == ".":
        return name
    return f"{p}/{name}"


class StoreFile(Protocol):
    """Открытый бинарный поток чтения с доступом к метаданным."""

    def read(self, size: int = -1) -> bytes:
        ...

    def close(self) -> None:
        """Освобождает дескриптор. Повторный вызов — no-op."""
        ...

    def stat(self) -> FileStat:
        ...


class FileStore(Protocol):
    """Read-only транспорт файлов и каталогов."""

    # --- Базовые операции ---

    def open_read(self, path: str) -> StoreFile:
        """Открывает бинарный поток чтения."""
        ...

    def stat(self, path: str) -> FileStat:
        """Возвращает метаданные файла/каталога."""
        ...

    def read_dir(self, path: str) -> list[DirEntry]:
        """Возвращает элементы каталога в порядке бэкенда."""
        ...

    # --- Дефолтные "удобные" методы ---

    def read_bytes(self, path: str) -> bytes:
        """Читает файл целиком (байтами)."""
        f = self.open_read(path)
        try:
            return f.read()
        finally:
            f.close()

    def listdir(self, path: str) -> list[str]:
        """Возвращает список имён (без путей) внутри каталога."""
        return [e.name for e in self.read_dir(path)]

    def exists(self, path: str) -> bool:
        try:
            self.stat(path)
        except Exception as e:
            if is_not_found(e):
                return False
            raise
        return True

    def is_file(self, path: str) -> bool:
        return self.exists(path) and self.stat(path).is_file

    def is_dir(self, path: str) -> bool:
        return self.exists(path) and self.stat(path).is_dir

    def walk(self, top: str) -> Iterator[Tuple[str, list[str], list[str]]]:
        """Рекурсивный обход каталога (аналог os.walk).

        Возвращает:
        - dirpath: путь каталога
        - dirnames: имена подкаталогов
        - filenames: имена файлов

        Дефолтная реализация построена поверх read_dir.
        Порядок имён — порядок бэкенда, без сортировки и без удаления дублей.
        """
        stack: list[str] = [top]

        while stack:
            dirpath = stack.pop()

            dirnames: list[str] = []
            filenames: list[str] = []

            for entry in self.read_dir(dirpath):
                if entry.name in (".", ".."):
                    continue
                if entry.is_dir:
                    dirnames.append(entry.name)
                else:
                    filenames.append(entry.name)

            yield dirpath, dirnames, filenames

            for d in reversed(dirnames):
                stack.append(join_path(dirpath, d))
