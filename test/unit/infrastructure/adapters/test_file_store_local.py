import pytest

from image_toolkit.core.exceptions import InvalidParameterError, NotFoundError
from image_toolkit.infrastructure.adapters import LocalFileStore


@pytest.mark.asyncio
async def test_write_creates_parents_and_reads_back(tmp_path):
    store = LocalFileStore(tmp_path)

    written = await store.write_bytes("a/b/c.bin", b"\x00\x01")

    assert written == str(tmp_path.resolve() / "a" / "b" / "c.bin")
    assert await store.read_bytes("a/b/c.bin") == b"\x00\x01"
    assert await store.exists("a/b/c.bin")


@pytest.mark.asyncio
async def test_write_text_is_utf8(tmp_path):
    store = LocalFileStore(tmp_path)
    await store.write_text("note.txt", "95% × ok")
    assert (tmp_path / "note.txt").read_text(encoding="utf-8") == "95% × ok"


@pytest.mark.asyncio
async def test_missing_file_is_not_found(tmp_path):
    store = LocalFileStore(tmp_path)
    with pytest.raises(NotFoundError, match="Image not found: nope.png"):
        await store.read_bytes("nope.png")


@pytest.mark.asyncio
async def test_directory_is_not_a_readable_file(tmp_path):
    (tmp_path / "dir").mkdir()
    with pytest.raises(NotFoundError):
        await LocalFileStore(tmp_path).read_bytes("dir")


@pytest.mark.parametrize("path", ["../escape.png", "a/../../escape.png", "/etc/passwd"])
def test_paths_outside_root_are_rejected(tmp_path, path):
    store = LocalFileStore(tmp_path / "root")
    with pytest.raises(InvalidParameterError) as exc:
        store.resolve(path)
    assert exc.value.error_code == "PATH_OUTSIDE_ROOT"


def test_absolute_path_inside_root_is_accepted(tmp_path):
    store = LocalFileStore(tmp_path)
    inside = str(tmp_path / "x.png")
    assert store.resolve(inside) == str((tmp_path / "x.png").resolve())
