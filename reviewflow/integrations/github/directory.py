from reviewflow.integrations.github.api import GitHubClient
from reviewflow.rules.interface import ReviewerDirectory


class GitHubReviewerDirectory(ReviewerDirectory):
    """ReviewerDirectory backed by the GitHub API, bound to one pull request."""

    def __init__(self, client: GitHubClient, repo_full_name: str, pr_number: int):
        self.github_client = client
        self.repo_full_name = repo_full_name
        self.pr_number = pr_number

    @property
    def org(self) -> str:
        return self.repo_full_name.split("/", 1)[0]

    async def list_team_members(self, team_slug: str) -> list[str]:
        return await self.github_client.list_team_members(self.org, team_slug)

    async def list_requested_reviewers(self) -> list[str]:
        return await self.github_client.list_requested_reviewers(self.repo_full_name, self.pr_number)
