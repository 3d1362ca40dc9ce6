"""
Config loaders package.

This package contains implementations of the ConfigLoader interface
for loading the reviewer configuration from different sources.
"""

from reviewflow.rules.loaders.github_loader import GitHubConfigLoader

__all__ = [
    "GitHubConfigLoader",
]
