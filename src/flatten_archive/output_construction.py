from __future__ import annotations

import io
from typing import Literal

from pydantic import BaseModel, ConfigDict

from flatten_archive.config import DEFAULT_FILTER_CONFIG, KIB, FilterConfig
from flatten_archive.filters import is_readme
from flatten_archive.tree import PathTree, format_kb, render_tree


class SingleFileBody(BaseModel):
    """Raw content of a single requested file."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["file"] = "file"
    content: str

    @property
    def text(self) -> str:
        return self.content


class TreeDocument(BaseModel):
    """Directory structure plus README files."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["tree"] = "tree"
    text: str


class FullDocument(BaseModel):
    """Annotated directory structure plus every kept file."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["full"] = "full"
    text: str


class NotFound(BaseModel):
    """A single-file request matched no kept entry."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["not_found"] = "not_found"
    path: str


DocumentResult = SingleFileBody | TreeDocument | FullDocument | NotFound


def build_single_file(tree: PathTree, target_file: str) -> SingleFileBody | NotFound:
    """Return the displayed content of `target_file`, or NotFound if it was not kept."""
    record = tree.get(target_file)
    if record is None:
        return NotFound(path=target_file)
    return SingleFileBody(content=record.content)


def build_tree_document(tree: PathTree, config: FilterConfig = DEFAULT_FILTER_CONFIG) -> TreeDocument:
    """Build the structure-only document.

    The tree is rendered without sizes. README files that were read are
    appended, in archive order, under their own headings.

    Args:
        tree (PathTree): the kept files (placeholders for everything but READMEs)
        config (FilterConfig, optional): used for the truncation limit. Defaults to DEFAULT_FILTER_CONFIG.

    Returns:
        TreeDocument: the rendered document
    """
    out = io.StringIO()
    out.write("# Directory Structure\n\n")
    out.write(render_tree(tree, show_size=False, limit_kb=config.max_display_size // KIB))

    readmes = [rec for rec in tree if is_readme(rec.rel) and rec.content]
    if readmes:
        out.write("\n# README Files\n\n")
        for rec in readmes:
            out.write(f"## {rec.rel}\n\n{rec.content}\n\n")
    return TreeDocument(text=out.getvalue())


def build_full_document(tree: PathTree, config: FilterConfig = DEFAULT_FILTER_CONFIG) -> FullDocument:
    """Build the full document: sized tree, size totals, then one fenced block per file.

    Each block uses the file path as the fence info string so the reader
    knows where the content comes from.

    Args:
        tree (PathTree): the kept files
        config (FilterConfig, optional): used for the truncation limit. Defaults to DEFAULT_FILTER_CONFIG.

    Returns:
        FullDocument: the rendered document
    """
    out = io.StringIO()
    out.write("# 📁 File Tree\n\n")
    out.write(render_tree(tree, show_size=True, limit_kb=config.max_display_size // KIB))
    out.write(
        f"\n# 📝 Files (Total: {format_kb(tree.original_total_size)} KB"
        f"→{format_kb(tree.displayed_total_size)} KB)\n\n",
    )
    for rec in tree:
        out.write(f"```{rec.rel}\n{rec.content}\n```\n\n")
    return FullDocument(text=out.getvalue())
