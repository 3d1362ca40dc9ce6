from abc import ABC, abstractmethod

from reviewflow.rules.models import ReviewerConfig


class ConfigLoader(ABC):
    """
    Abstract interface for fetching the reviewer configuration of a repository.

    This interface allows us to swap out different configuration sources
    (GitHub files, local files, etc.) without changing the application logic.
    """

    @abstractmethod
    async def get_config(self, repository: str, ref: str | None = None) -> ReviewerConfig:
        """
        Fetch the reviewer configuration for a specific repository.

        Args:
            repository: The repository in format "owner/repo"
            ref: The git ref to read the configuration from (default branch when omitted)

        Returns:
            The parsed ReviewerConfig
        """
        pass


class ReviewerDirectory(ABC):
    """
    Live membership lookups for the pull request being processed.

    Implementations report an unknown team by raising
    ``GitHubResourceNotFoundError`` from ``list_team_members``.
    """

    @abstractmethod
    async def list_team_members(self, team_slug: str) -> list[str]:
        """Return the logins of the current members of a team."""
        pass

    @abstractmethod
    async def list_requested_reviewers(self) -> list[str]:
        """Return the logins of the users already requested to review the pull request."""
        pass
