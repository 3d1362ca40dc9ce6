from abc import ABC, abstractmethod
from enum import Enum

from pydantic import BaseModel, Field

from reviewflow.core.models import PullRequestEvent
from reviewflow.integrations.github import GitHubClient


class ProcessingState(str, Enum):
    """
    Processing state for event processing results.

    - ASSIGNED: Reviewers were requested on the pull request
    - SKIPPED: Nothing to request (ignored PR, or no reviewers left after filtering)
    - ERROR: Error occurred - no reviewers were requested
    """

    ASSIGNED = "assigned"
    SKIPPED = "skipped"
    ERROR = "error"


class ProcessingResult(BaseModel):
    """Result of event processing."""

    state: ProcessingState
    reviewers: list[str] = Field(default_factory=list)
    api_calls_made: int
    processing_time_ms: int
    reason: str | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        """True unless the run failed."""
        return self.state != ProcessingState.ERROR


class BaseEventProcessor(ABC):
    """Base class for all event processors."""

    def __init__(self, github_client: GitHubClient):
        self.github_client = github_client

    @abstractmethod
    async def process(self, event: PullRequestEvent, ref: str | None = None) -> ProcessingResult:
        """Process the event."""
        raise NotImplementedError("Subclasses must implement process")

    @abstractmethod
    def get_event_type(self) -> str:
        """Get the event type this processor handles."""
        raise NotImplementedError("Subclasses must implement get_event_type")
