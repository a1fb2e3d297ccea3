from __future__ import annotations

import io
from bisect import bisect_left
from typing import TYPE_CHECKING

from flatten_archive.config import KIB, FileRecord

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

FILE_ICON = "📄"
DIR_ICON = "📂"


class PathTree:
    """Insertion-ordered collection of kept files with running size totals.

    Records keep the order in which they were first added, which is the
    archive iteration order. Adding a path twice replaces its record in place.
    """

    def __init__(self) -> None:
        self._records: dict[str, FileRecord] = {}
        self.original_total_size = 0
        self.displayed_total_size = 0

    def add(self, record: FileRecord) -> None:
        """Insert a record and account for its sizes in the totals."""
        self._records[record.rel] = record
        self.original_total_size += record.original_size
        self.displayed_total_size += record.displayed_size

    def get(self, rel: str) -> FileRecord | None:
        return self._records.get(rel)

    def __contains__(self, rel: object) -> bool:
        return rel in self._records

    def __iter__(self) -> Iterator[FileRecord]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    @property
    def paths(self) -> list[str]:
        return list(self._records)


def path_prefixes(path: str) -> Iterator[str]:
    """Yield every prefix of a slash-separated path, ending with the path itself.

    Example: "a/b/c.txt" yields "a", "a/b" and "a/b/c.txt".
    """
    parts = path.split("/")
    for i in range(1, len(parts) + 1):
        yield "/".join(parts[:i])


def directory_set(paths: Iterable[str]) -> list[str]:
    """Return all prefixes of all paths, sorted lexicographically."""
    members: set[str] = set()
    for path in paths:
        members.update(path_prefixes(path))
    return sorted(members)


def leaf_flags(members: list[str]) -> list[bool]:
    """Flag which members of a sorted directory set are leaves (files).

    A member is a directory when another member starts with `member + "/"`.
    All such members sort contiguously right after `member + "/"`, so one
    binary search per member is enough.

    Args:
        members (list[str]): a lexicographically sorted directory set

    Returns:
        list[bool]: True for leaves, in the order of `members`
    """
    flags: list[bool] = []
    for member in members:
        child_prefix = member + "/"
        idx = bisect_left(members, child_prefix)
        has_child = idx < len(members) and members[idx].startswith(child_prefix)
        flags.append(not has_child)
    return flags


def format_kb(size: int) -> str:
    return f"{size / KIB:.2f}"


def render_file_line(name: str, record: FileRecord | None, limit_kb: int) -> str:
    if record is None:
        return f"{FILE_ICON} {name} (0.00 KB)"
    if record.is_truncated:
        return f"{FILE_ICON} {name} ({format_kb(record.original_size)} KB→{limit_kb}KB truncated)"
    return f"{FILE_ICON} {name} ({format_kb(record.original_size)} KB)"


def render_tree(tree: PathTree, *, show_size: bool = False, limit_kb: int = 30) -> str:
    """Render a path tree as an indented listing of directories and files.

    Members of the directory set are listed in plain string order, indented
    by two spaces per level. Files get a size annotation when `show_size` is
    set.

    Args:
        tree (PathTree): the kept files
        show_size (bool, optional): annotate files with their size in KB. Defaults to False.
        limit_kb (int, optional): display limit mentioned for truncated files. Defaults to 30.

    Returns:
        str: one newline-terminated line per directory set member
    """
    members = directory_set(tree.paths)
    out = io.StringIO()
    for member, is_leaf in zip(members, leaf_flags(members), strict=True):
        indent = "  " * member.count("/")
        name = member.rsplit("/", 1)[-1]
        if show_size and is_leaf:
            line = render_file_line(name, tree.get(member), limit_kb)
        else:
            line = f"{FILE_ICON if is_leaf else DIR_ICON} {name}"
        out.write(f"{indent}{line}\n")
    return out.getvalue()
