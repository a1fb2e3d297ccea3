"""
flatten_archive — Turn a GitHub repository into a single text document for an LLM.

Overview
--------
The repository snapshot is downloaded as a zip from codeload.github.com
(trying "main", then "master" when no branch is given) and flattened into:

1) **Full mode (default)** — a file tree annotated with sizes, followed by
   every kept file in a fenced block. Files above 30 KB are truncated.

2) **Tree mode (`--mode tree`)** — the directory structure and the content
   of README files only.

3) **Single file (`--file PATH`)** — the raw content of one file.

Lock files, images, binaries, files above 500 KB and compiled JavaScript in
TypeScript projects are left out. `--dir` and `--ext` narrow the export.

Usage
-----
    - Whole repository:
        flatten-archive github.com/owner/repo --output repo.md

    - Only TypeScript sources under src/ of a branch:
        flatten-archive https://github.com/owner/repo/tree/dev --dir src --ext ts,tsx

    - Structure and READMEs:
        flatten-archive github.com/owner/repo --mode tree
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from flatten_archive import __version__
from flatten_archive.archive import open_archive
from flatten_archive.config import DisplayMode
from flatten_archive.exceptions import ArchiveFetchError, InvalidArchiveError, InvalidRepositoryUrlError
from flatten_archive.github import ArchiveFetcher, parse_repository_url
from flatten_archive.logging import logger, setup_logging
from flatten_archive.output_construction import NotFound
from flatten_archive.processing import ProcessParams, process_archive
from flatten_archive.settings import Settings

if TYPE_CHECKING:
    from collections.abc import Sequence

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def parse_args(argv: Sequence[str] | None = None) -> Settings:
    p = argparse.ArgumentParser(
        prog="flatten-archive",
        description="Flatten a GitHub repository into a single text document.",
    )
    p.add_argument("url", type=str, help="GitHub repository URL (scheme optional).")
    p.add_argument(
        "--dir",
        type=str,
        action="append",
        default=[],
        help="Directory filter, comma list (repeatable).",
    )
    p.add_argument(
        "--ext",
        type=str,
        action="append",
        default=[],
        help="Extension filter without dot, comma list (repeatable).",
    )
    p.add_argument(
        "--mode",
        type=str,
        choices=[m.value for m in DisplayMode],
        default=DisplayMode.FULL.value,
        help="Display mode.",
    )
    p.add_argument("--branch", type=str, default="", help="Branch (default: main, then master).")
    p.add_argument("--file", type=str, default="", help="Retrieve only this file.")
    p.add_argument("--output", type=str, default="", help="Output file (default: stdout).")
    p.add_argument("--log-file", type=str, default="", help="Log file path.")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = p.parse_args(argv)
    return Settings(**vars(args))


def build_fetcher(settings: Settings) -> ArchiveFetcher:
    return ArchiveFetcher(
        codeload_url=settings.codeload_url,
        user_agent=settings.user_agent,
        timeout=settings.timeout,
    )


def write_output(text: str, output: str) -> None:
    if output:
        Path(output).write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)


def main(argv: Sequence[str] | None = None) -> int:
    try:
        settings = parse_args(argv)
    except ValidationError as e:
        logger.error("Invalid settings: %s", e)
        return EXIT_USAGE
    if settings.log_file:
        setup_logging(settings.log_file)

    try:
        ref = parse_repository_url(settings.url, settings.branch or None)
    except InvalidRepositoryUrlError as e:
        logger.error("%s", e)
        return EXIT_USAGE

    try:
        data, ref = build_fetcher(settings).download(ref)
    except ArchiveFetchError as e:
        logger.error("%s", e)
        return EXIT_FAILURE

    params = ProcessParams.for_repository(
        ref.repo,
        ref.branch,
        target_dirs=settings.dir,
        target_exts=settings.ext,
        mode=settings.mode,
        target_file=settings.file or None,
    )
    try:
        with open_archive(data) as entries:
            result = process_archive(entries, params)
    except InvalidArchiveError as e:
        logger.error("%s", e.message)
        return EXIT_FAILURE

    if isinstance(result, NotFound):
        logger.error("File not found: %s", result.path)
        return EXIT_FAILURE

    write_output(result.text, settings.output)
    if settings.output:
        print(f"Wrote {settings.output} mode={settings.mode} branch={ref.branch}")  # noqa: T201
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
