"""
Shared fixtures for the reviewflow test suite.
"""

from unittest.mock import AsyncMock

import pytest

from reviewflow.core.config import reset_config
from reviewflow.rules.interface import ReviewerDirectory
from reviewflow.rules.models import ReviewerConfig


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def directory() -> AsyncMock:
    """A reviewer directory with no teams and nobody requested yet."""
    mock = AsyncMock(spec=ReviewerDirectory)
    mock.list_team_members.return_value = []
    mock.list_requested_reviewers.return_value = []
    return mock


@pytest.fixture
def sample_config() -> ReviewerConfig:
    return ReviewerConfig.model_validate(
        {
            "reviewers": {
                "defaults": ["repository-owners"],
                "groups": {
                    "repository-owners": ["mario", "luigi"],
                    "backend": ["bob", "carol", "dan"],
                },
                "per_author": {
                    "backend": ["backend", "peach"],
                    "toad": ["yoshi"],
                },
            },
            "files": {
                "**/*.py": ["backend"],
                "docs/**": ["wario"],
                "*.md": ["team:writers"],
            },
            "options": {
                "ignore_draft": True,
                "ignored_keywords": ["DO NOT REVIEW", "WIP"],
            },
        }
    )
