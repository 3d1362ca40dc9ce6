"""
Core error classes for the reviewflow action.
"""


class GitHubRateLimitError(Exception):
    """Raised when GitHub API rate limit is exceeded."""

    pass


class GitHubResourceNotFoundError(Exception):
    """Raised when a specific GitHub resource is not found."""

    pass


class ConfigFileNotFoundError(Exception):
    """Raised when the reviewer configuration file is not found in the repository."""

    pass


class EventPayloadError(Exception):
    """Raised when the runner event payload is missing or is not a pull request event."""

    pass
