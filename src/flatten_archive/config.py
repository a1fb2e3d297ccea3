from __future__ import annotations

from enum import StrEnum, auto

from pydantic import BaseModel, ConfigDict, Field

KIB = 1024

IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "gif", "bmp", "ico", "webp", "svg"})

BINARY_EXTENSIONS = frozenset({
    "zip",
    "tar",
    "gz",
    "rar",
    "7z",
    "exe",
    "dll",
    "so",
    "dylib",
    "pdf",
    "doc",
    "docx",
    "xls",
    "xlsx",
    "ppt",
    "pptx",
    "mp3",
    "mp4",
    "avi",
    "mov",
    "wav",
    "bin",
    "dat",
    "db",
    "sqlite",
})

LOCK_FILE_SUFFIX = ".lock"
LOCK_FILE_MARKER = "-lock."
COMPILED_JS_SUFFIXES = (".js", ".mjs")
TSCONFIG_NAME = "tsconfig.json"


class DisplayMode(StrEnum):
    """Shape of the generated document.

    FULL renders the annotated tree followed by every kept file,
    TREE renders the structure and the README files only.
    """

    FULL = auto()
    TREE = auto()


class FilterConfig(BaseModel):
    """Thresholds and extension sets used to filter and truncate archive entries.

    Attributes:
        max_file_size: Entries whose decoded size exceeds this (bytes) are skipped.
        max_display_size: Entries above this size (bytes) are truncated for display.
        binary_sample_size: Number of leading characters inspected by the binary sniffer.
        binary_threshold: Ratio of control characters above which content is binary.
        image_extensions: Lowercase extensions (no dot) of image files to skip.
        binary_extensions: Lowercase extensions (no dot) of binary files to skip.
    """

    model_config = ConfigDict(frozen=True)

    max_file_size: int = Field(default=500 * KIB, ge=0, description="Skip files above this size")
    max_display_size: int = Field(default=30 * KIB, gt=0, description="Truncate files above this size")
    binary_sample_size: int = Field(default=1000, ge=0, description="Characters sampled for binary sniffing")
    binary_threshold: float = Field(default=0.05, ge=0, le=1, description="Control character ratio for binary")
    image_extensions: frozenset[str] = Field(default=IMAGE_EXTENSIONS)
    binary_extensions: frozenset[str] = Field(default=BINARY_EXTENSIONS)

    @property
    def skipped_extensions(self) -> frozenset[str]:
        """All extensions skipped regardless of content."""
        return self.image_extensions | self.binary_extensions


DEFAULT_FILTER_CONFIG = FilterConfig()


class FileRecord(BaseModel):
    """A kept archive entry, ready for display.

    Attributes:
        rel: Path relative to the archive root, with POSIX separators.
        original_size: UTF-8 byte length of the decoded content.
        displayed_size: Size accounted for display (capped at the truncation limit).
        content: Content shown in the document (possibly truncated).
        is_truncated: Whether `content` was cut to the display limit.
    """

    model_config = ConfigDict(frozen=True)

    rel: str = Field(..., description="File path relative to the archive root")
    original_size: int = Field(default=0, ge=0, description="Decoded size in bytes")
    displayed_size: int = Field(default=0, ge=0, description="Displayed size in bytes")
    content: str = Field(default="", description="Displayed content")
    is_truncated: bool = Field(default=False, description="Whether content was truncated")

    @classmethod
    def placeholder(cls, rel: str) -> FileRecord:
        """Build a structure-only record whose content was never read."""
        return cls(rel=rel)
