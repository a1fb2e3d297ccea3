from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from flatten_archive.config import DEFAULT_FILTER_CONFIG, DisplayMode, FileRecord, FilterConfig
from flatten_archive.filters import is_readme, is_typescript_project, should_include_file, should_skip_file
from flatten_archive.logging import logger
from flatten_archive.output_construction import (
    DocumentResult,
    build_full_document,
    build_single_file,
    build_tree_document,
)
from flatten_archive.tree import PathTree
from flatten_archive.truncation import truncate_content

if TYPE_CHECKING:
    from collections.abc import Sequence

    from flatten_archive.archive import ArchiveEntry


class ProcessParams(BaseModel):
    """Request-level parameters for turning an archive into a document.

    Attributes:
        root_prefix: Top-level folder of the archive, "{repo}-{branch}/".
        target_dirs: Directory scopes; empty means the whole repository.
        target_exts: Lowercase extensions without dot; empty means any extension.
        mode: Full document or tree-only document.
        target_file: When set, only this path is returned, without framing.
    """

    model_config = ConfigDict(frozen=True)

    root_prefix: str = Field(..., description="Archive root folder, with trailing slash")
    target_dirs: list[str] = Field(default_factory=list, description="Directory scopes")
    target_exts: list[str] = Field(default_factory=list, description="Extension scopes")
    mode: DisplayMode = Field(default=DisplayMode.FULL, description="Document shape")
    target_file: str | None = Field(default=None, description="Single file to return")

    @classmethod
    def for_repository(cls, repo: str, branch: str, **kwargs: object) -> ProcessParams:
        """Build parameters for a GitHub archive of `repo` at `branch`."""
        return cls(root_prefix=f"{repo}-{branch}/", **kwargs)  # type: ignore[arg-type]

    @property
    def structure_only(self) -> bool:
        """Whether non-README contents can be left unread."""
        return self.mode == DisplayMode.TREE and not self.target_file


def decode_entry(entry: ArchiveEntry) -> str | None:
    """Decode an entry's bytes as UTF-8, returning None when they are not valid text."""
    try:
        return entry.read_bytes().decode("utf-8")
    except UnicodeDecodeError:
        return None


def ingest_entries(
    entries: Sequence[ArchiveEntry],
    params: ProcessParams,
    config: FilterConfig = DEFAULT_FILTER_CONFIG,
) -> PathTree:
    """Filter, decode and truncate archive entries into a path tree.

    Entries outside the root prefix are ignored. In structure-only mode the
    content of non-README files is never read.

    Args:
        entries (Sequence[ArchiveEntry]): the archive members, in archive order
        params (ProcessParams): request parameters
        config (FilterConfig, optional): thresholds and extension sets. Defaults to DEFAULT_FILTER_CONFIG.

    Returns:
        PathTree: the kept files, in archive order
    """
    prefix = params.root_prefix
    is_ts = is_typescript_project((e.path for e in entries), prefix)
    tree = PathTree()

    for entry in entries:
        if entry.is_directory or not entry.path.startswith(prefix):
            continue
        rel = entry.path[len(prefix) :]
        if not rel:
            continue
        if params.target_file and rel != params.target_file:
            continue
        if not should_include_file(rel, params.target_dirs, params.target_exts):
            continue

        if params.structure_only and not is_readme(rel):
            tree.add(FileRecord.placeholder(rel))
            continue

        content = decode_entry(entry)
        if content is None:
            logger.debug("Skipping %s: not valid UTF-8", rel)
            continue
        size = len(content.encode("utf-8"))
        if should_skip_file(rel, size, content, is_typescript_project=is_ts, config=config):
            logger.debug("Skipping %s (%d bytes)", rel, size)
            continue

        truncated = truncate_content(content, size, config.max_display_size)
        tree.add(
            FileRecord(
                rel=rel,
                original_size=size,
                displayed_size=truncated.displayed_size,
                content=truncated.content,
                is_truncated=truncated.is_truncated,
            ),
        )

    return tree


def process_archive(
    entries: Sequence[ArchiveEntry],
    params: ProcessParams,
    config: FilterConfig = DEFAULT_FILTER_CONFIG,
) -> DocumentResult:
    """Turn archive entries into the requested document.

    Args:
        entries (Sequence[ArchiveEntry]): the archive members, in archive order
        params (ProcessParams): request parameters
        config (FilterConfig, optional): thresholds and extension sets. Defaults to DEFAULT_FILTER_CONFIG.

    Returns:
        DocumentResult: the single file body, the tree or full document, or NotFound
    """
    if entries and not any(e.path.startswith(params.root_prefix) for e in entries):
        logger.warning("No archive entry under root prefix %s", params.root_prefix)
    tree = ingest_entries(entries, params, config)
    logger.info(
        "Processed archive entries=%d kept=%d original=%d displayed=%d",
        len(entries),
        len(tree),
        tree.original_total_size,
        tree.displayed_total_size,
    )

    if params.target_file:
        return build_single_file(tree, params.target_file)
    if params.mode == DisplayMode.TREE:
        return build_tree_document(tree, config)
    return build_full_document(tree, config)
