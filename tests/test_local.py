import errno
import os

from pytest import fixture, raises

from conftest import COMPRESSORS
from decompfs import DecompressFileStore, LocalFileStore


@fixture
def local_root(tmp_path):
    (tmp_path / "subdir").mkdir()
    (tmp_path / "regular.txt").write_bytes(b"regular")
    (tmp_path / "compressed.txt.gz").write_bytes(COMPRESSORS[".gz"](b"compressed"))
    (tmp_path / "subdir" / "deep.csv.lz4").write_bytes(COMPRESSORS[".lz4"](b"a,b\n1,2\n"))
    return tmp_path


def test_local_store_basics(local_root):
    store = LocalFileStore(str(local_root))
    assert store.read_bytes("regular.txt") == b"regular"
    assert store.stat("regular.txt").size == 7
    assert store.stat("subdir").is_dir
    assert store.listdir("") == ["compressed.txt.gz", "regular.txt", "subdir"]
    with raises(FileNotFoundError):
        store.open_read("missing.txt")
    with raises(IsADirectoryError) as exc_info:
        store.open_read("subdir")
    assert exc_info.value.errno == errno.EISDIR
    assert exc_info.value.filename == "subdir"


def test_local_open_file_stat(local_root):
    store = LocalFileStore(str(local_root))
    f = store.open_read("regular.txt")
    try:
        info = f.stat()
    finally:
        f.close()
    assert info.name == "regular.txt"
    assert info.size == 7


def test_overlay_on_local_disk(local_root):
    fs = DecompressFileStore(LocalFileStore(str(local_root)))
    with fs.open_read("compressed.txt") as f:
        assert f.read() == b"compressed"
        info = f.stat()
    assert info.name == "compressed.txt"
    assert info.size == os.path.getsize(local_root / "compressed.txt.gz")

    assert fs.read_bytes("subdir/deep.csv") == b"a,b\n1,2\n"
    assert [(e.name, e.is_dir) for e in fs.read_dir("")] == [
        ("compressed.txt", False),
        ("regular.txt", False),
        ("subdir", True),
    ]


def test_overlay_walk_on_local_disk(local_root):
    fs = DecompressFileStore(LocalFileStore(str(local_root)))
    assert list(fs.walk("")) == [
        ("", ["subdir"], ["compressed.txt", "regular.txt"]),
        ("subdir", [], ["deep.csv"]),
    ]


def test_local_read_dir_missing(local_root):
    fs = DecompressFileStore(LocalFileStore(str(local_root)))
    with raises(FileNotFoundError):
        fs.read_dir("nope")
