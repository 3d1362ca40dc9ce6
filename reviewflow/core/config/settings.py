"""
Main configuration class that composes all configs.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv

from reviewflow.core.config.github_config import GitHubConfig
from reviewflow.core.config.logging_config import LoggingConfig
from reviewflow.core.config.repo_config import RepoConfig

# Load environment variables from a .env file
load_dotenv()


class Config:
    """Main configuration class.

    Values come from the GitHub Actions runner environment. Action inputs are
    exposed by the runner as ``INPUT_<NAME>`` variables.
    """

    def __init__(self) -> None:
        self.github = GitHubConfig(
            token=os.getenv("INPUT_TOKEN") or os.getenv("GITHUB_TOKEN", ""),
            repository=os.getenv("GITHUB_REPOSITORY", ""),
            event_path=os.getenv("GITHUB_EVENT_PATH", ""),
            event_name=os.getenv("GITHUB_EVENT_NAME", ""),
            ref=os.getenv("GITHUB_REF", ""),
            api_base_url=os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/"),
            timeout=float(os.getenv("GITHUB_HTTP_TIMEOUT", "30")),
        )

        self.repo_config = RepoConfig(
            config_path=os.getenv("INPUT_CONFIG") or ".github/reviewflow.yml",
        )

        self.logging = LoggingConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            format=os.getenv("LOG_FORMAT", "%(asctime)s %(levelname)8s %(message)s"),
        )

    def validate(self) -> bool:
        """Validate configuration."""
        errors = []

        if not self.github.token:
            errors.append("INPUT_TOKEN (or GITHUB_TOKEN) is required")

        if not self.github.repository or "/" not in self.github.repository:
            errors.append("GITHUB_REPOSITORY must be set as 'owner/repo'")

        if not self.github.event_path:
            errors.append("GITHUB_EVENT_PATH is required")

        if not self.repo_config.config_path:
            errors.append("INPUT_CONFIG must not be empty")

        if errors:
            raise ValueError(f"Configuration errors: {', '.join(errors)}")

        return True


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Return the process-wide configuration, built on first use."""
    return Config()


def reset_config() -> None:
    """Drop the memoized configuration so the next call re-reads the environment."""
    get_config.cache_clear()
