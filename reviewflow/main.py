import asyncio
import sys

import structlog

from reviewflow.core.config import Config, get_config
from reviewflow.core.errors import EventPayloadError
from reviewflow.core.models import PullRequestEvent
from reviewflow.core.utils.logging import setup_logging
from reviewflow.event_processors import ProcessingResult, ProcessingState, ReviewRequestProcessor
from reviewflow.integrations.github import GitHubClient
from reviewflow.rules.loaders import GitHubConfigLoader

logger = structlog.get_logger(__name__)


async def run(config: Config) -> ProcessingResult:
    """Process the pull request event described by the runner environment."""
    event = PullRequestEvent.from_file(config.github.event_path, config.github.event_name)
    if not event.repo_full_name:
        event.repository = {**event.repository, "full_name": config.github.repository}

    client = GitHubClient(
        token=config.github.token,
        base_url=config.github.api_base_url,
        timeout=config.github.timeout,
    )
    try:
        processor = ReviewRequestProcessor(
            github_client=client,
            config_loader=GitHubConfigLoader(client, config.repo_config.config_path),
        )
        return await processor.process(event, ref=config.github.ref or None)
    finally:
        await client.close()


def main() -> int:
    """Action entrypoint. Returns the process exit code."""
    config = get_config()
    setup_logging(config.logging)

    try:
        config.validate()
        result = asyncio.run(run(config))
    except (ValueError, EventPayloadError) as e:
        logger.error("action_setup_failed", error=str(e))
        return 1

    logger.info(
        "action_finished",
        state=result.state.value,
        reviewers=result.reviewers,
        reason=result.reason,
        api_calls=result.api_calls_made,
        processing_time_ms=result.processing_time_ms,
    )
    return 1 if result.state == ProcessingState.ERROR else 0


if __name__ == "__main__":
    sys.exit(main())
