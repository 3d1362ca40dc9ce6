"""
GitHub configuration.
"""

from dataclasses import dataclass


@dataclass
class GitHubConfig:
    """GitHub configuration."""

    token: str
    repository: str
    event_path: str
    event_name: str = ""
    ref: str = ""
    api_base_url: str = "https://api.github.com"
    timeout: float = 30.0

    @property
    def owner(self) -> str:
        """Organization or user that owns the repository."""
        return self.repository.split("/", 1)[0] if self.repository else ""
