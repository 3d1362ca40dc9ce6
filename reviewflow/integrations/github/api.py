from typing import Any

import httpx
import structlog
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from reviewflow.core.errors import GitHubRateLimitError, GitHubResourceNotFoundError
from reviewflow.rules.models import TEAM_PREFIX

logger = structlog.get_logger(__name__)

PER_PAGE = 100


class GitHubClient:
    """
    A client for the GitHub REST endpoints the action needs.

    The client is built from explicit settings (token, API base URL, timeout)
    and lazily opens one pooled ``httpx.AsyncClient``, released by ``close()``.
    """

    def __init__(self, token: str, base_url: str = "https://api.github.com", timeout: float = 30.0):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {
            "Authorization": f"Bearer {self.token}" if self.token else "",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Initializes and returns the pooled HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(base_url=self.base_url, headers=self.headers, timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """Closes the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        reraise=True,
    )
    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        accept: str | None = None,
    ) -> httpx.Response:
        client = await self._get_client()
        headers = {"Accept": accept} if accept else None
        response = await client.request(method, path, params=params, json=json, headers=headers)

        if response.status_code == 404:
            raise GitHubResourceNotFoundError(f"{method} {path} returned 404")
        if response.status_code == 403 and "rate limit" in response.text.lower():
            raise GitHubRateLimitError("GitHub API rate limit exceeded")

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "github_request_failed",
                method=method,
                path=path,
                status_code=e.response.status_code,
                response_body=e.response.text,
            )
            raise
        return response

    async def _get_paginated(self, path: str, params: dict[str, Any] | None = None) -> list[Any]:
        """Collect every page of a list endpoint, stopping at the first short page."""
        items: list[Any] = []
        page = 0
        while True:
            page += 1
            response = await self._request("GET", path, params={**(params or {}), "per_page": PER_PAGE, "page": page})
            batch = response.json()
            items.extend(batch)
            if len(batch) < PER_PAGE:
                return items

    async def get_file_content(self, repo_full_name: str, file_path: str, ref: str | None = None) -> str:
        """
        Fetches the raw content of a file from a repository.

        Raises:
            GitHubResourceNotFoundError: If the file does not exist at that ref.
        """
        params = {"ref": ref} if ref else None
        response = await self._request(
            "GET",
            f"/repos/{repo_full_name}/contents/{file_path.lstrip('/')}",
            params=params,
            accept="application/vnd.github.raw",
        )
        logger.info("file_fetched", repo=repo_full_name, path=file_path, ref=ref)
        return response.text

    async def get_pull_request_files(self, repo_full_name: str, pr_number: int) -> list[str]:
        """Get the names of all files changed in a pull request."""
        files = await self._get_paginated(f"/repos/{repo_full_name}/pulls/{pr_number}/files")
        filenames = [file["filename"] for file in files]
        logger.info("pull_request_files_fetched", repo=repo_full_name, pr_number=pr_number, count=len(filenames))
        return filenames

    async def list_team_members(self, org: str, team_slug: str) -> list[str]:
        """
        List the logins of an organization team's members.

        Raises:
            GitHubResourceNotFoundError: If the team does not exist or is not visible to the token.
        """
        logger.info("listing_team_members", org=org, team=team_slug)
        members = await self._get_paginated(f"/orgs/{org}/teams/{team_slug}/members")
        return [member["login"] for member in members]

    async def list_requested_reviewers(self, repo_full_name: str, pr_number: int) -> list[str]:
        """List the users currently requested to review a pull request."""
        response = await self._request("GET", f"/repos/{repo_full_name}/pulls/{pr_number}/requested_reviewers")
        data = response.json()
        return [user["login"] for user in data.get("users", [])]

    async def request_reviewers(self, repo_full_name: str, pr_number: int, reviewers: list[str]) -> dict[str, Any]:
        """
        Request reviews on a pull request.

        ``team:<slug>`` entries are sent as team reviewers, everything else as
        individual reviewers.
        """
        team_reviewers = [reviewer[len(TEAM_PREFIX) :] for reviewer in reviewers if reviewer.startswith(TEAM_PREFIX)]
        individuals = [reviewer for reviewer in reviewers if not reviewer.startswith(TEAM_PREFIX)]

        response = await self._request(
            "POST",
            f"/repos/{repo_full_name}/pulls/{pr_number}/requested_reviewers",
            json={"reviewers": individuals, "team_reviewers": team_reviewers},
        )
        logger.info(
            "reviewers_requested",
            repo=repo_full_name,
            pr_number=pr_number,
            reviewers=individuals,
            team_reviewers=team_reviewers,
        )
        return response.json()
