import json
from enum import Enum
from pathlib import Path
from typing import Any

from reviewflow.core.errors import EventPayloadError


class EventType(Enum):
    """Supported GitHub event types."""

    PULL_REQUEST = "pull_request"
    PULL_REQUEST_TARGET = "pull_request_target"


class PullRequestEvent:
    """
    A representation of the pull request event that triggered the workflow run,
    read from the payload file the Actions runner writes to disk.
    """

    def __init__(self, event_type: EventType, payload: dict[str, Any]):
        self.event_type = event_type
        self.payload = payload
        self.repository = payload.get("repository", {}) or {}
        self.pull_request = payload.get("pull_request", {}) or {}

    @classmethod
    def from_file(cls, event_path: str, event_name: str = "pull_request") -> "PullRequestEvent":
        """Load the event payload written by the runner at ``GITHUB_EVENT_PATH``."""
        try:
            event_type = EventType(event_name or "pull_request")
        except ValueError as e:
            raise EventPayloadError(f"Unsupported event '{event_name}'; expected a pull request event") from e

        path = Path(event_path)
        if not path.is_file():
            raise EventPayloadError(f"Event payload not found at {event_path}")

        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise EventPayloadError(f"Event payload at {event_path} is not valid JSON") from e

        if not isinstance(payload, dict) or not payload.get("pull_request"):
            raise EventPayloadError("Event payload does not contain a pull request")
        return cls(event_type=event_type, payload=payload)

    @property
    def repo_full_name(self) -> str:
        """The full name of the repository (e.g., 'owner/repo')."""
        return self.repository.get("full_name", "")

    @property
    def number(self) -> int:
        """The pull request number."""
        return int(self.pull_request.get("number", 0))

    @property
    def author(self) -> str:
        """The GitHub username of the pull request author."""
        return (self.pull_request.get("user") or {}).get("login", "")

    @property
    def title(self) -> str:
        return self.pull_request.get("title") or ""

    @property
    def is_draft(self) -> bool:
        return bool(self.pull_request.get("draft", False))
