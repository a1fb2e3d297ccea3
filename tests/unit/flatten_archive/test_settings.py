import pytest
from pydantic import ValidationError

from flatten_archive.config import DisplayMode
from flatten_archive.settings import Settings, split_csv


@pytest.mark.unit
def test_settings_defaults() -> None:
    settings = Settings(url="github.com/o/r")

    assert settings.mode == DisplayMode.FULL
    assert settings.dir == []
    assert settings.ext == []
    assert not settings.output
    assert settings.timeout > 0


@pytest.mark.unit
def test_settings_split_and_normalize_filters() -> None:
    settings = Settings(url="x", dir=["src, lib", ""], ext=".TS,tsx, ,.")

    assert settings.dir == ["src", "lib"]
    assert settings.ext == ["ts", "tsx"]


@pytest.mark.unit
def test_settings_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLATTEN_ARCHIVE_USER_AGENT", "custom-agent")
    monkeypatch.setenv("FLATTEN_ARCHIVE_TIMEOUT", "5")

    settings = Settings(url="x")

    assert settings.user_agent == "custom-agent"
    assert settings.timeout == 5.0


@pytest.mark.unit
def test_split_csv() -> None:
    assert split_csv(None) == []
    assert split_csv("a,,b ") == ["a", "b"]
    assert split_csv(["a,b", "c"]) == ["a", "b", "c"]


@pytest.mark.unit
def test_settings_invalid_timeout_is_a_validation_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLATTEN_ARCHIVE_TIMEOUT", "abc")

    with pytest.raises(ValidationError):
        Settings(url="x")


@pytest.mark.unit
def test_settings_strip_file_and_branch() -> None:
    settings = Settings(url="x", file=" src/App.tsx ", branch=" dev ")

    assert settings.file == "src/App.tsx"
    assert settings.branch == "dev"
