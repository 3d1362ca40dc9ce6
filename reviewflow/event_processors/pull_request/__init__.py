from reviewflow.event_processors.pull_request.processor import ReviewRequestProcessor

__all__ = ["ReviewRequestProcessor"]
