"""
GitHub API adapter.

This package provides integrations for GitHub API interactions.
"""

from reviewflow.integrations.github.api import GitHubClient
from reviewflow.integrations.github.directory import GitHubReviewerDirectory

__all__ = [
    "GitHubClient",
    "GitHubReviewerDirectory",
]
