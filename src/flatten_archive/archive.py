from __future__ import annotations

import io
import zipfile
from contextlib import contextmanager
from dataclasses import dataclass, field
from functools import partial
from typing import TYPE_CHECKING

from flatten_archive.exceptions import InvalidArchiveError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@dataclass(frozen=True)
class ArchiveEntry:
    """One member of a repository archive.

    Attributes:
        path: Raw member path, slash-separated, including the archive root folder.
        is_directory: Whether the member is a directory.
        loader: Callable returning the member's raw bytes; only called on demand.
    """

    path: str
    is_directory: bool = False
    loader: Callable[[], bytes] = field(default=bytes, repr=False, compare=False)

    def read_bytes(self) -> bytes:
        return self.loader()

    @classmethod
    def from_bytes(cls, path: str, data: bytes) -> ArchiveEntry:
        """Build a file entry whose content is already in memory."""
        return cls(path=path, is_directory=False, loader=lambda: data)

    @classmethod
    def directory(cls, path: str) -> ArchiveEntry:
        return cls(path=path, is_directory=True)


def iter_zip_entries(zf: zipfile.ZipFile) -> Iterator[ArchiveEntry]:
    """Yield the members of an open zip file in archive order.

    Args:
        zf (zipfile.ZipFile): an open archive; it must stay open while entries are read

    Yields:
        Iterator[ArchiveEntry]: one entry per member, reading bytes lazily
    """
    for info in zf.infolist():
        yield ArchiveEntry(path=info.filename, is_directory=info.is_dir(), loader=partial(zf.read, info))


@contextmanager
def open_archive(data: bytes) -> Iterator[list[ArchiveEntry]]:
    """Open zip bytes and expose their members as lazily read entries.

    Args:
        data (bytes): the zip archive content

    Yields:
        Iterator[list[ArchiveEntry]]: the archive members, valid until the context exits

    Raises:
        InvalidArchiveError: if `data` is not a readable zip archive
    """
    try:
        zf = zipfile.ZipFile(io.BytesIO(data), "r")
    except zipfile.BadZipFile as e:
        raise InvalidArchiveError(message=f"The downloaded archive is not a valid zip file: {e}") from e
    with zf:
        yield list(iter_zip_entries(zf))
