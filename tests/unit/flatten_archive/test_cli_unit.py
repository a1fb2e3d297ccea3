from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

import httpx
import pytest

from flatten_archive import __version__, cli
from flatten_archive.config import DisplayMode
from flatten_archive.github import ArchiveFetcher

if TYPE_CHECKING:
    from pytest_mock import MockerFixture


def mock_fetcher(handler: Callable[[httpx.Request], httpx.Response]) -> ArchiveFetcher:
    return ArchiveFetcher(client=httpx.Client(transport=httpx.MockTransport(handler)))


@pytest.mark.unit
def test_parse_args_parses_filters_and_mode() -> None:
    settings = cli.parse_args(
        [
            "github.com/o/r",
            "--dir",
            "src,lib",
            "--dir",
            "app",
            "--ext",
            "TS,tsx",
            "--mode",
            "tree",
            "--branch",
            "dev",
        ],
    )

    assert settings.url == "github.com/o/r"
    assert settings.dir == ["src", "lib", "app"]
    assert settings.ext == ["ts", "tsx"]
    assert settings.mode == DisplayMode.TREE
    assert settings.branch == "dev"


@pytest.mark.unit
def test_parse_args_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.parse_args(["--version"])

    assert exc_info.value.code == 0
    captured = capsys.readouterr()
    assert __version__ in captured.out


@pytest.mark.unit
def test_main_rejects_invalid_url() -> None:
    assert cli.main(["github.com/only-owner"]) == cli.EXIT_USAGE


@pytest.mark.unit
def test_main_reports_fetch_failure(mocker: MockerFixture) -> None:
    mocker.patch.object(cli, "build_fetcher", return_value=mock_fetcher(lambda request: httpx.Response(404)))

    assert cli.main(["github.com/o/r"]) == cli.EXIT_FAILURE


@pytest.mark.unit
def test_main_reports_invalid_archive(mocker: MockerFixture) -> None:
    mocker.patch.object(
        cli,
        "build_fetcher",
        return_value=mock_fetcher(lambda request: httpx.Response(200, content=b"garbage")),
    )

    assert cli.main(["github.com/o/r"]) == cli.EXIT_FAILURE


@pytest.mark.unit
def test_main_single_file_not_found(mocker: MockerFixture, zip_bytes: Callable[..., bytes]) -> None:
    data = zip_bytes({"src/index.ts": "x"}, root="r-main/")
    mocker.patch.object(cli, "build_fetcher", return_value=mock_fetcher(lambda request: httpx.Response(200, content=data)))

    assert cli.main(["github.com/o/r", "--file", "src/App.tsx"]) == cli.EXIT_FAILURE


@pytest.mark.unit
def test_main_writes_single_file_to_stdout(
    mocker: MockerFixture,
    zip_bytes: Callable[..., bytes],
    capsys: pytest.CaptureFixture[str],
) -> None:
    data = zip_bytes({"src/App.tsx": "export default 1\n"}, root="r-main/")
    mocker.patch.object(cli, "build_fetcher", return_value=mock_fetcher(lambda request: httpx.Response(200, content=data)))

    exit_code = cli.main(["github.com/o/r", "--file", "src/App.tsx"])

    assert exit_code == 0
    assert capsys.readouterr().out == "export default 1\n"


@pytest.mark.unit
def test_build_fetcher_uses_settings() -> None:
    settings = cli.parse_args(["github.com/o/r"])
    settings = settings.model_copy(update={"codeload_url": "http://mirror.local", "user_agent": "ua"})

    fetcher = cli.build_fetcher(settings)

    assert fetcher.archive_url("o", "r", "main") == "http://mirror.local/o/r/zip/main"
    assert fetcher.user_agent == "ua"


@pytest.mark.unit
def test_write_output_to_file(tmp_path: Path) -> None:
    out = tmp_path / "doc.md"

    cli.write_output("héllo", str(out))

    assert out.read_text(encoding="utf-8") == "héllo"


@pytest.mark.unit
def test_main_rejects_invalid_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLATTEN_ARCHIVE_TIMEOUT", "abc")

    assert cli.main(["github.com/o/r"]) == cli.EXIT_USAGE


@pytest.mark.unit
def test_main_strips_single_file_path(
    mocker: MockerFixture,
    zip_bytes: Callable[..., bytes],
    capsys: pytest.CaptureFixture[str],
) -> None:
    data = zip_bytes({"src/App.tsx": "export default 1\n"}, root="r-main/")
    mocker.patch.object(cli, "build_fetcher", return_value=mock_fetcher(lambda request: httpx.Response(200, content=data)))

    exit_code = cli.main(["github.com/o/r", "--file", " src/App.tsx "])

    assert exit_code == 0
    assert capsys.readouterr().out == "export default 1\n"
