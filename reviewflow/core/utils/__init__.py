"""
Shared utilities for glob matching and structured logging.
"""

from reviewflow.core.utils.logging import log_operation, setup_logging
from reviewflow.core.utils.patterns import matches_glob

__all__ = [
    "log_operation",
    "setup_logging",
    "matches_glob",
]
