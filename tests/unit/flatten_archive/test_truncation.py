import pytest

from flatten_archive.truncation import truncate_content


@pytest.mark.unit
def test_small_content_passes_through() -> None:
    content = "x" * 30720

    result = truncate_content(content, len(content))

    assert result.content == content
    assert result.displayed_size == 30720
    assert result.is_truncated is False


@pytest.mark.unit
def test_forty_kib_content_is_truncated() -> None:
    content = "y" * 40960

    result = truncate_content(content, 40960)

    assert result.is_truncated is True
    assert result.displayed_size == 30720
    assert result.content.startswith("y" * 30720)
    assert result.content == (
        "y" * 30720 + "\n\nThis file is too large, truncated at 30KB. There is 10.00 KB remaining."
    )


@pytest.mark.unit
def test_truncation_cuts_characters_for_multibyte_text() -> None:
    content = "é" * 20000
    size = len(content.encode("utf-8"))

    result = truncate_content(content, size)

    assert result.is_truncated is True
    assert result.content.startswith("é" * 20000)
    assert "There is 9.06 KB remaining." in result.content


@pytest.mark.unit
def test_custom_limit() -> None:
    result = truncate_content("abcdefgh", 8, max_display_size=4)

    assert result.content.startswith("abcd\n\nThis file is too large, truncated at 0KB.")
    assert result.displayed_size == 4
