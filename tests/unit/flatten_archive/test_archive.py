from collections.abc import Callable

import pytest

from flatten_archive.archive import ArchiveEntry, open_archive
from flatten_archive.exceptions import InvalidArchiveError


@pytest.mark.unit
def test_open_archive_lists_members_in_order(zip_bytes: Callable[..., bytes]) -> None:
    data = zip_bytes({"b.txt": "bee", "a/c.txt": "sea"})

    with open_archive(data) as entries:
        paths = [e.path for e in entries]
        dirs = [e.path for e in entries if e.is_directory]
        contents = {e.path: e.read_bytes() for e in entries if not e.is_directory}

    assert paths == ["repo-main/", "repo-main/b.txt", "repo-main/a/c.txt"]
    assert dirs == ["repo-main/"]
    assert contents == {"repo-main/b.txt": b"bee", "repo-main/a/c.txt": b"sea"}


@pytest.mark.unit
def test_open_archive_rejects_invalid_data() -> None:
    with pytest.raises(InvalidArchiveError), open_archive(b"not a zip"):
        pass


@pytest.mark.unit
def test_archive_entry_from_bytes() -> None:
    entry = ArchiveEntry.from_bytes("x/y.txt", b"data")

    assert entry.read_bytes() == b"data"
    assert entry.is_directory is False
    assert ArchiveEntry.directory("x/").read_bytes() == b""
