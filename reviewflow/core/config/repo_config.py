"""
Repository configuration.
"""

from dataclasses import dataclass


@dataclass
class RepoConfig:
    """Repository configuration."""

    config_path: str = ".github/reviewflow.yml"
