"""Live reconciliation of reviewer candidates against GitHub.

Both stages are no-ops unless ``options.load_github_members`` is present in the
configuration.
"""

import asyncio

import structlog

from reviewflow.core.errors import GitHubResourceNotFoundError
from reviewflow.rules.interface import ReviewerDirectory
from reviewflow.rules.models import ReviewerOptions, ReviewerRef
from reviewflow.rules.reviewers import exclude

logger = structlog.get_logger(__name__)


async def _fetch_roster(directory: ReviewerDirectory, team_slug: str) -> list[str]:
    try:
        return await directory.list_team_members(team_slug)
    except GitHubResourceNotFoundError:
        logger.warning("team_not_found", team=team_slug)
        return []


async def resolve_teams_and_filter(
    reviewers: list[ReviewerRef],
    author: str,
    options: ReviewerOptions,
    directory: ReviewerDirectory,
) -> list[ReviewerRef]:
    """
    Replace ``team:`` candidates with the members of those teams.

    Rosters are fetched concurrently. Unless ``force_pick`` is set, only the
    teams the author belongs to contribute members. The author is dropped from
    the resolved members; individual candidates are kept as they are.
    """
    if not options.live_membership_enabled:
        return reviewers

    teams = [reviewer for reviewer in reviewers if reviewer.is_team]
    individuals = [reviewer for reviewer in reviewers if not reviewer.is_team]

    rosters = await asyncio.gather(*(_fetch_roster(directory, team.name) for team in teams))

    if not options.force_pick:
        rosters = [members for members in rosters if author in members]

    members = [ReviewerRef.individual(member) for roster in rosters for member in roster if member != author]

    logger.info(
        "teams_resolved",
        teams=[team.name for team in teams],
        force_pick=options.force_pick,
        members=[member.name for member in members],
    )

    return exclude([*individuals, *members])


async def remove_already_requested(
    reviewers: list[ReviewerRef],
    options: ReviewerOptions,
    directory: ReviewerDirectory,
) -> list[ReviewerRef]:
    """Drop reviewers that are already requested on the pull request."""
    if not options.live_membership_enabled:
        return reviewers

    requested = await directory.list_requested_reviewers()
    if requested:
        logger.info("already_requested_reviewers", reviewers=requested)

    return exclude(reviewers, [ReviewerRef.individual(login) for login in requested])
