"""Reviewer resolution rules.

Pure functions that turn a parsed ``ReviewerConfig`` and the facts of a pull
request into a candidate reviewer list. Every function returns
``ReviewerRef`` lists without duplicates; group refs are always expanded to
their members before a list leaves this module.
"""

import random
from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from reviewflow.core.utils.patterns import matches_glob
from reviewflow.rules.models import PullRequestContext, ReviewerConfig, ReviewerOptions, ReviewerRef, identifiers

logger = structlog.get_logger(__name__)


def should_request_review(title: str, is_draft: bool, options: ReviewerOptions) -> bool:
    """Decide whether reviewers should be requested for this pull request at all."""
    if options.ignore_draft and is_draft:
        return False

    return not any(keyword in title for keyword in options.ignored_keywords)


def resolve_individuals(reviewers: Iterable[Any], groups: Mapping[str, list[str]]) -> list[ReviewerRef]:
    """Replace every group with its members. Only one level is expanded."""
    resolved: list[ReviewerRef] = []
    for reviewer in reviewers:
        ref = ReviewerRef.parse(reviewer, groups)
        members = groups.get(ref.name) if ref.is_group else None
        if members is None:
            resolved.append(ref)
        else:
            resolved.extend(ReviewerRef.parse(member) for member in members)
    return resolved


def exclude(reviewers: Iterable[ReviewerRef], excludes: Iterable[Any] = ()) -> list[ReviewerRef]:
    """Drop duplicates and excluded reviewers, keeping first-seen order."""
    excluded = {ReviewerRef.parse(item) for item in excludes}
    return [reviewer for reviewer in dict.fromkeys(reviewers) if reviewer not in excluded]


def other_group_members(
    author: str, groups: Mapping[str, list[str]], enable_group_assignment: bool
) -> list[ReviewerRef]:
    """Members of every group the author belongs to, except the author."""
    if not enable_group_assignment:
        logger.info("group_assignment_disabled")
        return []

    logger.info("group_assignment_enabled")

    belonging_groups = [name for name, members in groups.items() if author in members]
    peers = [member for name in belonging_groups for member in groups[name] if member != author]
    return exclude(ReviewerRef.parse(peer) for peer in peers)


def reviewers_for_changed_files(
    config: ReviewerConfig, changed_files: list[str], excludes: Iterable[Any] = ()
) -> list[ReviewerRef]:
    """
    Reviewers of every ``files`` pattern matched by at least one changed file.

    Matching is per pattern: a pattern that matches any changed file brings in
    all of its reviewers.
    """
    if config.files is None:
        logger.info("files_section_missing", detail="returning no reviewers for changed files")
        return []

    matching: list[ReviewerRef] = []
    for rule in config.files:
        if any(matches_glob(changed_file, rule.pattern) for changed_file in changed_files):
            logger.debug("files_pattern_matched", pattern=rule.pattern)
            matching.extend(rule.reviewers)

    return exclude(resolve_individuals(matching, config.groups), excludes)


def reviewers_for_author(config: ReviewerConfig, author: str) -> list[ReviewerRef]:
    """
    Reviewers configured for the author under ``reviewers.per_author``.

    A key applies when it is the author's login, or a group the author is a
    member of, so several keys can match at once.
    """
    if config.per_author is None:
        logger.info("per_author_section_missing", detail="returning no reviewers for the author")
        return []

    author_ref = ReviewerRef.individual(author)
    matching: list[ReviewerRef] = []
    for rule in config.per_author:
        if str(rule.author) == author or author_ref in resolve_individuals([rule.author], config.groups):
            matching.extend(resolve_individuals(rule.reviewers, config.groups))

    return exclude(matching, [author_ref])


def default_reviewers(config: ReviewerConfig, excludes: Iterable[Any] = ()) -> list[ReviewerRef]:
    """The ``reviewers.defaults`` list with groups expanded."""
    if config.defaults is None:
        logger.info("defaults_section_missing", detail="returning no default reviewers")
        return []

    return exclude(resolve_individuals(config.defaults, config.groups), excludes)


def global_excludes(config: ReviewerConfig) -> list[ReviewerRef]:
    """``options.exclude`` with groups expanded to their current members."""
    return resolve_individuals(config.options.exclude, config.groups)


def sample(reviewers: list[ReviewerRef], number_of_reviewers: int | None) -> list[ReviewerRef]:
    """Pick ``number_of_reviewers`` reviewers at random, or all of them when unset."""
    if number_of_reviewers is None:
        return reviewers

    return random.sample(reviewers, max(0, min(number_of_reviewers, len(reviewers))))


def collect_candidates(config: ReviewerConfig, pull_request: PullRequestContext) -> list[ReviewerRef]:
    """
    Merge every static source into one candidate list.

    Defaults, path matches, author matches and group peers are combined,
    deduplicated and filtered through ``options.exclude``. The author is never
    part of the result.
    """
    author = ReviewerRef.individual(pull_request.author)

    by_files = reviewers_for_changed_files(config, pull_request.changed_files, excludes=[author])
    by_author = reviewers_for_author(config, pull_request.author)
    by_default = default_reviewers(config, excludes=[author])
    by_group = other_group_members(pull_request.author, config.groups, config.options.enable_group_assignment)

    logger.info(
        "candidates_collected",
        files=identifiers(by_files),
        author=identifiers(by_author),
        defaults=identifiers(by_default),
        groups=identifiers(by_group),
    )

    return exclude([*by_default, *by_files, *by_author, *by_group], [*global_excludes(config), author])
