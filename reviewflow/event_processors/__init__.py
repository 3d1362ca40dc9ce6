from reviewflow.event_processors.base import BaseEventProcessor, ProcessingResult, ProcessingState
from reviewflow.event_processors.pull_request import ReviewRequestProcessor

__all__ = ["BaseEventProcessor", "ProcessingResult", "ProcessingState", "ReviewRequestProcessor"]
