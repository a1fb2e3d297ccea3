from __future__ import annotations

import io
import zipfile
from collections.abc import Callable

import pytest


def build_zip(files: dict[str, str | bytes], root: str = "repo-main/") -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr(root, "")
        for name, content in files.items():
            zf.writestr(f"{root}{name}", content)
    return buf.getvalue()


@pytest.fixture
def zip_bytes() -> Callable[..., bytes]:
    return build_zip
