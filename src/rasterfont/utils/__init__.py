"""Utility functions for rasterfont.

This module provides utility functions including:

- Logging setup and configuration
- Per-run statistics tracking
- Progress reporting helpers
"""

from rasterfont.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
    configure_worker_logging,
)
from rasterfont.utils.progress import ProgressCallback, ProgressReporter, scale_progress

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "ProgressCallback",
    "ProgressReporter",
    "configure_logging",
    "configure_worker_logging",
    "scale_progress",
]
