from __future__ import annotations

_ALLOWED_CONTROL_CODES = frozenset({9, 10, 13})


def is_non_printable(char: str) -> bool:
    """Check whether a character is a NUL or a control code other than tab, LF or CR."""
    code = ord(char)
    return code < 32 and code not in _ALLOWED_CONTROL_CODES  # noqa: PLR2004


def is_binary_content(content: str, sample_size: int = 1000, threshold: float = 0.05) -> bool:
    """Heuristically decide whether decoded content is binary.

    Only the first `sample_size` characters are inspected. The content is
    considered binary when the share of non-printable characters in that
    sample is strictly greater than `threshold`.

    Args:
        content (str): the decoded content to inspect
        sample_size (int, optional): number of leading characters to sample. Defaults to 1000.
        threshold (float, optional): maximum tolerated share of control characters. Defaults to 0.05.

    Returns:
        bool: True if the content looks binary, False otherwise (always False for empty content)
    """
    sample = content[:sample_size]
    if not sample:
        return False
    non_printable = sum(1 for char in sample if is_non_printable(char))
    return non_printable / len(sample) > threshold
