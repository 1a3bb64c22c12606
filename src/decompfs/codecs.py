"""
codecs — реестр поддерживаемых форматов сжатия.

Таблица REGISTRY упорядочена: именно в этом порядке перебираются расширения,
когда файла с буквальным именем нет (.gz, .bz2, .zst, .lz4).

Добавить формат = добавить член Codec и одну строку в REGISTRY.

Зависимости:
- gzip/bz2 — стандартная библиотека
- zstandard, lz4 — необязательные (extras "zstd", "lz4"), импортируются при первом открытии файла формата
"""

from __future__ import annotations

import bz2
import gzip
import zlib
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Callable

from decompfs.utils.optional_deps import ensure_import


class Codec(Enum):
    """Формат сжатия; значение — расширение имени файла."""

    NONE = ""
    GZIP = ".gz"
    BZIP2 = ".bz2"
    ZSTD = ".zst"
    LZ4 = ".lz4"

    @property
    def suffix(self) -> str:
        return self.value


@dataclass(frozen=True)
class CodecSpec:
    """Строка реестра: формат + как построить декодер + какие ошибки значат битые данные.

    Декодер никогда не закрывает переданный ему поток: исходным дескриптором
    владеет VirtualFile.
    """

    codec: Codec
    open_decoder: Callable[[BinaryIO], BinaryIO]
    is_decode_error: Callable[[BaseException], bool]

    @property
    def suffix(self) -> str:
        return self.codec.suffix


# --- gzip ---

def _open_gzip(raw: BinaryIO) -> BinaryIO:
    return gzip.GzipFile(fileobj=raw, mode="rb")


def _gzip_error(exc: BaseException) -> bool:
    return isinstance(exc, (gzip.BadGzipFile, EOFError, zlib.error))


# --- bzip2 ---

def _open_bzip2(raw: BinaryIO) -> BinaryIO:
    return bz2.BZ2File(raw, mode="rb")


def _bzip2_error(exc: BaseException) -> bool:
    # bz2 сообщает о битом потоке через голый OSError("Invalid data stream") без errno;
    # OSError с errno (нет прав, сбой I/O) — ошибка хранилища.
    if isinstance(exc, EOFError):
        return True
    return type(exc) is OSError and exc.errno is None


# --- zstd (extra "zstd") ---

def _zstandard():
    return ensure_import("zstandard", "zstd", hint="needed for .zst files")


def _open_zstd(raw: BinaryIO) -> BinaryIO:
    zstd = _zstandard()
    return zstd.ZstdDecompressor().stream_reader(raw, read_across_frames=True, closefd=False)


def _zstd_error(exc: BaseException) -> bool:
    return isinstance(exc, (_zstandard().ZstdError, EOFError))


# --- lz4 (extra "lz4") ---

def _lz4_frame():
    return ensure_import("lz4.frame", "lz4", hint="needed for .lz4 files")


def _open_lz4(raw: BinaryIO) -> BinaryIO:
    return _lz4_frame().LZ4FrameFile(raw, mode="rb")


def _lz4_error(exc: BaseException) -> bool:
    # lz4.frame отдаёт ошибки LZ4F как RuntimeError
    return isinstance(exc, (RuntimeError, EOFError))


REGISTRY: tuple[CodecSpec, ...] = (
    CodecSpec(Codec.GZIP, _open_gzip, _gzip_error),
    CodecSpec(Codec.BZIP2, _open_bzip2, _bzip2_error),
    CodecSpec(Codec.ZSTD, _open_zstd, _zstd_error),
    CodecSpec(Codec.LZ4, _open_lz4, _lz4_error),
)

_BY_CODEC: dict[Codec, CodecSpec] = {spec.codec: spec for spec in REGISTRY}


def lookup(codec: Codec) -> CodecSpec:
    """Строка реестра для формата. Для Codec.NONE строки нет."""
    try:
        return _BY_CODEC[codec]
    except KeyError:
        raise ValueError(f"No decoder registered for codec {codec.name}") from None


def codec_for_name(name: str) -> Codec:
    """Первый (в порядке реестра) формат, чьё расширение завершает имя; иначе Codec.NONE.

    Имя, целиком равное расширению (".gz"), форматом не считается.
    """
    for spec in REGISTRY:
        if name.endswith(spec.suffix) and len(name) > len(spec.suffix):
            return spec.codec
    return Codec.NONE


def strip_suffix(name: str, codec: Codec) -> str:
    """Убирает ровно одно расширение формата, если оно есть."""
    suffix = codec.suffix
    if suffix and name.endswith(suffix):
        return name[: -len(suffix)]
    return name
