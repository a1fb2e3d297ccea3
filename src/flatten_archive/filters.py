from __future__ import annotations

import re
from typing import TYPE_CHECKING

from flatten_archive.classifier import is_binary_content
from flatten_archive.config import (
    COMPILED_JS_SUFFIXES,
    DEFAULT_FILTER_CONFIG,
    LOCK_FILE_MARKER,
    LOCK_FILE_SUFFIX,
    TSCONFIG_NAME,
    FilterConfig,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

_README_RE = re.compile(r"readme\.md$", re.IGNORECASE)


def file_name(path: str) -> str:
    """Return the last segment of a slash-separated path."""
    return path.rsplit("/", 1)[-1]


def file_extension(path: str) -> str:
    """Return the lowercase extension of a path, without the dot.

    Args:
        path (str): a slash-separated path such as "src/App.TSX"

    Returns:
        str: the text after the last "." of the file name, lowercased, or "" if there is none
    """
    name = file_name(path)
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[-1].lower()


def is_lock_file(path: str) -> bool:
    """Check if a path names a dependency lock file (`*.lock` or `*-lock.*`)."""
    return path.endswith(LOCK_FILE_SUFFIX) or LOCK_FILE_MARKER in file_name(path)


def is_readme(path: str) -> bool:
    """Check if a path ends with `readme.md`, case-insensitively."""
    return _README_RE.search(path) is not None


def is_typescript_project(paths: Iterable[str], root_prefix: str = "") -> bool:
    """Check if an archive holds a TypeScript project.

    Args:
        paths (Iterable[str]): raw member paths of the archive
        root_prefix (str, optional): only members under this prefix are considered. Defaults to "".

    Returns:
        bool: True if any member under `root_prefix` ends with `tsconfig.json`
    """
    return any(p.startswith(root_prefix) and p.endswith(TSCONFIG_NAME) for p in paths)


def should_skip_file(
    path: str,
    original_size: int,
    content: str,
    *,
    is_typescript_project: bool,
    config: FilterConfig = DEFAULT_FILTER_CONFIG,
) -> bool:
    """Decide whether a decoded entry must be left out of the document.

    The checks run in a fixed order: lock files, image/binary extensions,
    compiled JavaScript in TypeScript projects, size limit and finally a
    content sniff.

    Args:
        path (str): the path relative to the archive root
        original_size (int): UTF-8 byte length of the decoded content
        content (str): the decoded content (may be empty)
        is_typescript_project (bool): whether the archive contains a `tsconfig.json`
        config (FilterConfig, optional): thresholds and extension sets. Defaults to DEFAULT_FILTER_CONFIG.

    Returns:
        bool: True if the entry should be skipped, False otherwise
    """
    if is_lock_file(path):
        return True
    if file_extension(path) in config.skipped_extensions:
        return True
    if is_typescript_project and path.endswith(COMPILED_JS_SUFFIXES):
        return True
    if original_size > config.max_file_size:
        return True
    return bool(content) and is_binary_content(
        content,
        sample_size=config.binary_sample_size,
        threshold=config.binary_threshold,
    )


def normalize_target_dirs(target_dirs: Sequence[str]) -> list[str]:
    """Make every target directory end with a slash so it only matches whole segments."""
    return [d if d.endswith("/") else f"{d}/" for d in target_dirs]


def should_include_file(path: str, target_dirs: Sequence[str], target_exts: Sequence[str]) -> bool:
    """Check a path against the user-requested directory and extension scopes.

    Args:
        path (str): the path relative to the archive root
        target_dirs (Sequence[str]): directory prefixes; empty means any directory
        target_exts (Sequence[str]): lowercase extensions without dot; empty means any extension

    Returns:
        bool: True if the path is inside the requested scopes, False otherwise
    """
    if target_dirs and not any(path.startswith(d) for d in normalize_target_dirs(target_dirs)):
        return False
    return not target_exts or file_extension(path) in target_exts
