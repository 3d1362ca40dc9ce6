"""
GitHub-based config loader.

Loads the reviewer configuration from a file in the repository, implementing
the ConfigLoader interface.
"""

import structlog
import yaml

from reviewflow.core.errors import ConfigFileNotFoundError, GitHubResourceNotFoundError
from reviewflow.integrations.github import GitHubClient
from reviewflow.rules.interface import ConfigLoader
from reviewflow.rules.models import ReviewerConfig

logger = structlog.get_logger(__name__)


class GitHubConfigLoader(ConfigLoader):
    """
    Loads the reviewer configuration from a YAML file in a GitHub repository.
    Malformed sections are left to ReviewerConfig, which treats them as absent.
    """

    def __init__(self, client: GitHubClient, config_path: str):
        self.github_client = client
        self.config_path = config_path

    async def get_config(self, repository: str, ref: str | None = None) -> ReviewerConfig:
        logger.info("fetching_reviewer_config", repo=repository, path=self.config_path, ref=ref)
        try:
            content = await self.github_client.get_file_content(repository, self.config_path, ref=ref)
        except GitHubResourceNotFoundError as e:
            logger.warning("reviewer_config_not_found", repo=repository, path=self.config_path, ref=ref)
            raise ConfigFileNotFoundError(f"Config file not found: {self.config_path}") from e

        document = yaml.safe_load(content)
        if not isinstance(document, dict):
            logger.warning("reviewer_config_empty", repo=repository, path=self.config_path)

        config = ReviewerConfig.model_validate(document)
        logger.info(
            "reviewer_config_loaded",
            repo=repository,
            groups=len(config.groups),
            file_rules=len(config.files or []),
            author_rules=len(config.per_author or []),
        )
        return config
