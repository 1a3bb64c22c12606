"""
adapter — обёртка сырого потока декодером формата.

VirtualFile — то, что получает вызывающий код:
- читает распакованные данные порциями (весь файл в память не грузится)
- stat() отдаёт метаданные сжатого файла, но с именем без расширения
- close() освобождает декодер и исходный дескриптор, ровно один раз каждый

Порядок освобождения: декодер, затем исходный поток.
Если оба close() упали — наружу уходит первая ошибка, вторая только логируется.
"""

from __future__ import annotations

import io
from typing import BinaryIO, Callable, Sequence

from decompfs.codecs import Codec, CodecSpec, lookup, strip_suffix
from decompfs.errors import DecodeError
from decompfs.filestore.base import StoreFile
from decompfs.filestore.types import FileStat
from decompfs.metadata import rewrite
from decompfs.utils.debug import debug


def release_all(closers: Sequence[Callable[[], None]]) -> None:
    """Вызывает все close() по порядку; поднимает первую ошибку после того, как отработали все."""
    first: Exception | None = None
    for close in closers:
        try:
            close()
        except Exception as e:
            if first is None:
                first = e
            else:
                debug(f"suppressed close error: {e!r}")
    if first is not None:
        raise first


def _abort(decoder: BinaryIO | None, raw: StoreFile) -> None:
    closers = [decoder.close] if decoder is not None else []
    closers.append(raw.close)
    try:
        release_all(closers)
    except Exception as e:
        # Исходная ошибка открытия важнее ошибки закрытия.
        debug(f"suppressed close error on failed open: {e!r}")


def _is_decode_error(spec: CodecSpec, exc: Exception) -> bool:
    try:
        return spec.is_decode_error(exc)
    except ImportError:
        return False


class VirtualFile(io.RawIOBase):
    """Поток чтения, скрывающий, был ли файл сжат.

    Единственный владелец исходного дескриптора. Не потокобезопасен:
    один VirtualFile — один пользователь.
    """

    def __init__(
        self,
        raw: StoreFile,
        *,
        codec: Codec = Codec.NONE,
        decoder: BinaryIO | None = None,
        info: FileStat | None = None,
        pending: bytes = b"",
        path: str | None = None,
    ):
        super().__init__()
        self._raw = raw
        self._codec = codec
        self._decoder = decoder
        self._info = info
        self._pending = pending
        self._path = path

    @property
    def codec(self) -> Codec:
        return self._codec

    @property
    def path(self) -> str | None:
        return self._path

    def readable(self) -> bool:
        return True

    def stat(self) -> FileStat:
        if self._info is not None:
            return self._info
        return self._raw.stat()

    def readinto(self, b) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed file.")
        view = memoryview(b).cast("B")
        if not len(view):
            return 0

        if self._pending:
            n = min(len(view), len(self._pending))
            view[:n] = self._pending[:n]
            self._pending = self._pending[n:]
            return n

        data = self._read_chunk(len(view))
        n = len(data)
        view[:n] = data
        return n

    def _read_chunk(self, size: int) -> bytes:
        if self._decoder is None:
            return self._raw.read(size)
        try:
            return self._decoder.read(size)
        except Exception as e:
            spec = lookup(self._codec)
            if _is_decode_error(spec, e):
                raise DecodeError(
                    f"Malformed {self._codec.name.lower()} data: {e}",
                    path=self._path,
                    codec=self._codec.name.lower(),
                ) from e
            raise

    def close(self) -> None:
        if self.closed:
            return
        closers: list[Callable[[], None]] = []
        if self._decoder is not None:
            closers.append(self._decoder.close)
        closers.append(self._raw.close)
        try:
            release_all(closers)
        finally:
            super().close()


def adapt(codec: Codec, raw: StoreFile, path: str | None = None) -> VirtualFile:
    """Оборачивает открытый поток декодером формата codec.

    Декодер сразу читает первый байт, чтобы битый заголовок был виден при открытии,
    а не при первом read(). При любой ошибке исходный поток закрывается.
    """
    if codec is Codec.NONE:
        return VirtualFile(raw, path=path)

    spec = lookup(codec)

    decoder: BinaryIO | None = None
    try:
        decoder = spec.open_decoder(raw)
        pending = decoder.read(1)
    except Exception as e:
        _abort(decoder, raw)
        if _is_decode_error(spec, e):
            raise DecodeError(
                f"Malformed {codec.name.lower()} data: {e}",
                path=path,
                codec=codec.name.lower(),
            ) from e
        raise

    try:
        info = raw.stat()
    except Exception:
        _abort(decoder, raw)
        raise

    if not pending and info.size == 0:
        # Пустой файл не является корректным потоком ни одного из форматов.
        _abort(decoder, raw)
        raise DecodeError(
            f"Empty {codec.name.lower()} stream",
            path=path,
            codec=codec.name.lower(),
        )

    return VirtualFile(
        raw,
        codec=codec,
        decoder=decoder,
        info=rewrite(info, strip_suffix(info.name, codec)),
        pending=pending,
        path=path,
    )
