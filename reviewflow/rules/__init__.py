# Rules package

from reviewflow.rules.models import (
    AuthorRule,
    FileRule,
    PullRequestContext,
    ReviewerConfig,
    ReviewerKind,
    ReviewerOptions,
    ReviewerRef,
)

__all__ = [
    "AuthorRule",
    "FileRule",
    "PullRequestContext",
    "ReviewerConfig",
    "ReviewerKind",
    "ReviewerOptions",
    "ReviewerRef",
]
