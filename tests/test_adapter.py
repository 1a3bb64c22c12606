import errno
import io
import sys

from pytest import raises

from conftest import COMPRESSORS
from decompfs import Codec, DecodeError, FileStat, VirtualFile, adapt, release_all
from decompfs.codecs import lookup
from decompfs.filestore.memory import MemoryStream


class _Resource:
    def __init__(self, log: list, name: str, error: Exception | None = None):
        self.log = log
        self.name = name
        self.error = error

    def close(self):
        self.log.append(self.name)
        if self.error is not None:
            raise self.error


class _RawStub(_Resource):
    def read(self, size=-1):
        return b""

    def stat(self):
        return FileStat(name="raw.gz", is_dir=False)


def test_release_all_runs_every_closer_and_reports_first_error():
    log = []
    first = OSError("decoder release failed")
    second = OSError("raw close failed")
    with raises(OSError) as exc_info:
        release_all([_Resource(log, "decoder", first).close, _Resource(log, "raw", second).close])
    assert exc_info.value is first
    assert log == ["decoder", "raw"]


def test_release_all_reports_later_error_when_first_succeeds():
    log = []
    err = OSError("raw close failed")
    with raises(OSError) as exc_info:
        release_all([_Resource(log, "decoder").close, _Resource(log, "raw", err).close])
    assert exc_info.value is err
    assert log == ["decoder", "raw"]


def test_virtual_file_close_order_and_single_release():
    log = []
    decoder = _Resource(log, "decoder", ValueError("decoder boom"))
    raw = _RawStub(log, "raw", OSError("raw boom"))
    vf = VirtualFile(raw, codec=Codec.GZIP, decoder=decoder, info=FileStat(name="x", is_dir=False))
    with raises(ValueError):
        vf.close()
    assert log == ["decoder", "raw"]
    assert vf.closed
    vf.close()
    assert log == ["decoder", "raw"]


def test_passthrough_stat_delegates_to_raw():
    info = FileStat(name="plain.txt", is_dir=False, size=3)
    vf = adapt(Codec.NONE, MemoryStream(b"abc", info))
    assert vf.stat() is info
    assert vf.read() == b"abc"
    vf.close()


def test_adapt_strips_suffix_and_keeps_fields():
    packed = COMPRESSORS[".zst"](b"payload")
    info = FileStat(name="data.bin.zst", is_dir=False, size=len(packed), mode=0o444, mtime=5.0)
    vf = adapt(Codec.ZSTD, MemoryStream(packed, info), path="dir/data.bin.zst")
    assert vf.stat() == FileStat(name="data.bin", is_dir=False, size=len(packed), mode=0o444, mtime=5.0)
    assert vf.path == "dir/data.bin.zst"
    assert vf.read() == b"payload"
    vf.close()


def test_adapt_closes_raw_when_stat_fails():
    log = []

    class _NoStat(_RawStub):
        def read(self, size=-1):
            return self.payload.read(size)

        def stat(self):
            raise OSError("stat failed")

    raw = _NoStat(log, "raw")
    raw.payload = io.BytesIO(COMPRESSORS[".gz"](b"x"))
    with raises(OSError, match="stat failed"):
        adapt(Codec.GZIP, raw)
    assert log == ["raw"]


def test_adapt_decode_error_keeps_cause():
    raw = MemoryStream(b"nope", FileStat(name="n.gz", is_dir=False))
    with raises(DecodeError) as exc_info:
        adapt(Codec.GZIP, raw)
    assert exc_info.value.__cause__ is not None
    assert raw.closed


def test_lookup_has_no_row_for_none():
    with raises(ValueError):
        lookup(Codec.NONE)


class _FailingRead(_RawStub):
    def read(self, size=-1):
        raise PermissionError(errno.EACCES, "Permission denied", "locked.bz2")


def test_bzip2_store_read_fault_is_not_a_decode_error():
    log = []
    raw = _FailingRead(log, "raw")
    with raises(PermissionError) as exc_info:
        adapt(Codec.BZIP2, raw)
    assert not isinstance(exc_info.value, DecodeError)
    assert log == ["raw"]


def test_bzip2_invalid_stream_is_a_decode_error():
    raw = MemoryStream(b"BZh9 not really bzip2", FileStat(name="bad.bz2", is_dir=False, size=21))
    with raises(DecodeError):
        adapt(Codec.BZIP2, raw)
    assert raw.closed


def test_missing_codec_library_reports_extra(monkeypatch):
    monkeypatch.delenv("DECOMPFS_AUTO_PIP", raising=False)
    monkeypatch.setitem(sys.modules, "zstandard", None)
    packed = COMPRESSORS[".zst"](b"payload")
    raw = MemoryStream(packed, FileStat(name="data.zst", is_dir=False, size=len(packed)))
    with raises(ImportError) as exc_info:
        adapt(Codec.ZSTD, raw)
    assert not isinstance(exc_info.value, DecodeError)
    assert "pip install decompfs[zstd]" in str(exc_info.value)
    assert raw.closed
