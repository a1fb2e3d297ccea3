from dataclasses import dataclass


@dataclass(frozen=True)
class FlattenArchiveError(Exception):
    """Base exception for errors in the flatten_archive module."""


@dataclass(frozen=True)
class InvalidRepositoryUrlError(FlattenArchiveError):
    """Raised when a repository URL cannot be turned into owner/repo/branch."""

    url: str
    message: str = "Invalid GitHub repository URL format"

    def __str__(self) -> str:
        return f"{self.message}: {self.url}" if self.url else self.message


@dataclass(frozen=True)
class ArchiveFetchError(FlattenArchiveError):
    """Raised when the repository archive could not be downloaded."""

    owner: str
    repo: str
    branch: str
    status_code: int
    reason: str = ""

    def __str__(self) -> str:
        return (
            f"Failed to fetch zip for {self.owner}/{self.repo}@{self.branch}: "
            f"{self.status_code} {self.reason}".rstrip()
        )


@dataclass(frozen=True)
class InvalidArchiveError(FlattenArchiveError):
    """Raised when downloaded bytes are not a readable zip archive."""

    message: str = "The downloaded archive is not a valid zip file."
