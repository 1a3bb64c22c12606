"""
types — типы для FileStore.

Назначение:
- дать единый переносимый тип метаданных файла/каталога
- дать единый тип элемента листинга каталога
- не привязываться к конкретному backend (local/memory/и т.д.)

Принцип:
- часть полей опциональна: разные бэкенды могут отдавать разный объём метаданных
- FileStat неизменяемый: переименование делается через dataclasses.replace
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable


@dataclass(frozen=True, slots=True)
class FileStat:
    """Метаданные файла/каталога.

    name — только имя (без пути).
    Для распакованного файла size/mode/mtime берутся у сжатого оригинала.
    """

    name: str
    is_dir: bool
    size: int | None = None
    mode: int | None = None
    mtime: float | None = None
    atime: float | None = None
    ctime: float | None = None

    @property
    def is_file(self) -> bool:
        return not self.is_dir


@dataclass(frozen=True)
class DirEntry:
    """Элемент листинга каталога.

    Метаданные ленивые: info() обращается к бэкенду только при вызове.
    """

    name: str
    is_dir: bool
    _info: Callable[[], FileStat] = field(repr=False, compare=False)

    def info(self) -> FileStat:
        return self._info()
