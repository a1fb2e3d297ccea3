from __future__ import annotations

from urllib.parse import urlsplit

import httpx
from pydantic import BaseModel, ConfigDict, Field

from flatten_archive.exceptions import ArchiveFetchError, InvalidRepositoryUrlError
from flatten_archive.logging import logger

DEFAULT_CODELOAD_URL = "https://codeload.github.com"
DEFAULT_USER_AGENT = "Pera1-Bot"
DEFAULT_BRANCH = "main"
FALLBACK_BRANCH = "master"


class RepositoryRef(BaseModel):
    """A GitHub repository at a given branch."""

    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str
    branch: str = DEFAULT_BRANCH
    url: str = ""

    def with_branch(self, branch: str) -> RepositoryRef:
        return self.model_copy(update={"branch": branch})


class FetchResult(BaseModel):
    """Outcome of one archive download attempt."""

    model_config = ConfigDict(frozen=True)

    content: bytes = b""
    ok: bool
    status_code: int
    reason: str = ""


def parse_repository_url(target: str, branch: str | None = None) -> RepositoryRef:
    """Extract owner, repository and branch from a GitHub URL.

    Accepts "github.com/owner/repo", "https://github.com/owner/repo" and
    "https://github.com/owner/repo/tree/some/branch". An explicit `branch`
    wins over the one found in the URL; without either, "main" is used.

    Args:
        target (str): the repository URL, with or without scheme
        branch (str | None, optional): explicit branch name. Defaults to None.

    Returns:
        RepositoryRef: the parsed repository reference

    Raises:
        InvalidRepositoryUrlError: if the URL is empty or has fewer than two path segments
    """
    target = (target or "").strip()
    if not target:
        raise InvalidRepositoryUrlError(url="", message="No repository URL provided")

    url = target if target.startswith("http") else f"https://{target}"
    try:
        parsed = urlsplit(url)
    except ValueError as e:
        raise InvalidRepositoryUrlError(url=url, message=f"Invalid URL: {e}") from e

    segments = [s for s in parsed.path.split("/") if s]
    if not parsed.netloc or len(segments) < 2:  # noqa: PLR2004
        raise InvalidRepositoryUrlError(url=url)

    owner, repo = segments[0], segments[1]
    resolved = (branch or "").strip()
    if not resolved and len(segments) > 3 and segments[2] == "tree":  # noqa: PLR2004
        resolved = "/".join(segments[3:])
    return RepositoryRef(owner=owner, repo=repo, branch=resolved or DEFAULT_BRANCH, url=url)


class ArchiveFetcher(BaseModel):
    """Download repository zip archives from codeload.

    Attributes:
        client: HTTP client to use; a new one is opened per request when None.
        codeload_url: Base URL of the archive service.
        user_agent: User-Agent header sent with every request.
        timeout: Request timeout in seconds.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    client: httpx.Client | None = Field(default=None, description="Injected HTTP client")
    codeload_url: str = Field(default=DEFAULT_CODELOAD_URL)
    user_agent: str = Field(default=DEFAULT_USER_AGENT)
    timeout: float = Field(default=30.0, gt=0)

    def archive_url(self, owner: str, repo: str, branch: str) -> str:
        return f"{self.codeload_url.rstrip('/')}/{owner}/{repo}/zip/{branch}"

    def _get(self, client: httpx.Client, url: str) -> httpx.Response:
        return client.get(url, headers={"User-Agent": self.user_agent}, follow_redirects=True)

    def fetch(self, owner: str, repo: str, branch: str) -> FetchResult:
        """Download the archive of `owner/repo` at `branch`.

        Network failures are reported as a failed result with status 0
        instead of being raised.

        Returns:
            FetchResult: the archive bytes on success, the status and reason otherwise
        """
        url = self.archive_url(owner, repo, branch)
        logger.info("Fetching zip from %s", url)
        try:
            if self.client is not None:
                response = self._get(self.client, url)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = self._get(client, url)
        except httpx.HTTPError as e:
            logger.warning("Fetching %s failed: %s", url, e)
            return FetchResult(ok=False, status_code=0, reason=str(e))

        if response.is_success:
            return FetchResult(content=response.content, ok=True, status_code=response.status_code)
        return FetchResult(ok=False, status_code=response.status_code, reason=response.reason_phrase)

    def fetch_with_fallback(self, ref: RepositoryRef) -> tuple[FetchResult, str]:
        """Fetch an archive, retrying on "master" when "main" does not exist.

        Returns:
            tuple[FetchResult, str]: the last fetch result and the branch it was made for
        """
        result = self.fetch(ref.owner, ref.repo, ref.branch)
        if result.ok or ref.branch != DEFAULT_BRANCH:
            return result, ref.branch
        logger.info("Branch %s not available (%d), trying %s", DEFAULT_BRANCH, result.status_code, FALLBACK_BRANCH)
        return self.fetch(ref.owner, ref.repo, FALLBACK_BRANCH), FALLBACK_BRANCH

    def download(self, ref: RepositoryRef) -> tuple[bytes, RepositoryRef]:
        """Fetch an archive with branch fallback, raising on failure.

        Returns:
            tuple[bytes, RepositoryRef]: the archive bytes and the reference for the branch actually used

        Raises:
            ArchiveFetchError: if no branch could be downloaded
        """
        result, branch = self.fetch_with_fallback(ref)
        if not result.ok:
            raise ArchiveFetchError(
                owner=ref.owner,
                repo=ref.repo,
                branch=branch,
                status_code=result.status_code,
                reason=result.reason,
            )
        return result.content, ref.with_branch(branch)
