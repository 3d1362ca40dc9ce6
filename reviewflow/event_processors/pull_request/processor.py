import time

import structlog

from reviewflow.core.models import PullRequestEvent
from reviewflow.core.utils.logging import log_operation
from reviewflow.event_processors.base import BaseEventProcessor, ProcessingResult, ProcessingState
from reviewflow.integrations.github import GitHubClient, GitHubReviewerDirectory
from reviewflow.rules.interface import ConfigLoader
from reviewflow.rules.models import PullRequestContext, identifiers
from reviewflow.rules.reviewers import collect_candidates, sample, should_request_review
from reviewflow.rules.teams import remove_already_requested, resolve_teams_and_filter

logger = structlog.get_logger(__name__)


class ReviewRequestProcessor(BaseEventProcessor):
    """Processor for pull request events: resolves reviewers and requests their review."""

    def __init__(self, github_client: GitHubClient, config_loader: ConfigLoader) -> None:
        super().__init__(github_client)
        self.config_loader = config_loader

    def get_event_type(self) -> str:
        return "pull_request"

    async def process(self, event: PullRequestEvent, ref: str | None = None) -> ProcessingResult:
        """Run the reviewer pipeline for one pull request event."""
        start_time = time.time()
        api_calls = 0

        repo_full_name = event.repo_full_name
        pr_number = event.number
        log = logger.bind(repo=repo_full_name, pr_number=pr_number, author=event.author)

        def result(state: ProcessingState, **kwargs) -> ProcessingResult:
            return ProcessingResult(
                state=state,
                api_calls_made=api_calls,
                processing_time_ms=int((time.time() - start_time) * 1000),
                **kwargs,
            )

        try:
            log.info("review_request_started", title=event.title, draft=event.is_draft)

            # 1. Load configuration
            config = await self.config_loader.get_config(repo_full_name, ref)
            api_calls += 1
            options = config.options

            pull_request = PullRequestContext(
                number=pr_number,
                author=event.author,
                title=event.title,
                is_draft=event.is_draft,
            )

            # 2. Eligibility gate
            if not should_request_review(pull_request.title, pull_request.is_draft, options):
                log.info("review_request_ignored", reason="draft or ignored keyword in title")
                return result(ProcessingState.SKIPPED, reason="Pull request matches an ignore condition")

            # 3. Collect candidates from static configuration
            pull_request.changed_files = await self.github_client.get_pull_request_files(repo_full_name, pr_number)
            api_calls += 1
            candidates = collect_candidates(config, pull_request)

            # 4. Sampling
            picked = sample(candidates, options.number_of_reviewers)
            log.info("reviewers_picked", candidates=identifiers(candidates), picked=identifiers(picked))

            # 5. Live reconciliation
            directory = GitHubReviewerDirectory(self.github_client, repo_full_name, pr_number)
            async with log_operation("live_reconciliation", repo=repo_full_name, pr_number=pr_number):
                resolved = await resolve_teams_and_filter(picked, pull_request.author, options, directory)
                reviewers = await remove_already_requested(resolved, options, directory)
            if options.live_membership_enabled:
                api_calls += sum(1 for reviewer in picked if reviewer.is_team) + 1

            if not reviewers:
                log.info("no_reviewers_to_request")
                return result(ProcessingState.SKIPPED, reason="No reviewers matched")

            # 6. Assignment
            final = identifiers(reviewers)
            await self.github_client.request_reviewers(repo_full_name, pr_number, final)
            api_calls += 1

            log.info("review_request_completed", reviewers=final)
            return result(ProcessingState.ASSIGNED, reviewers=final)

        except Exception as e:
            log.error("review_request_failed", error=str(e), exc_info=True)
            return result(ProcessingState.ERROR, error=str(e))
