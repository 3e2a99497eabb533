"""Progress reporting for conversion runs.

Progress is reported as (percentage, message). The overall run is split
into phases:

- 0-5: locating FontForge
- 20-50: vectorizing glyph images
- 50-100: FontForge build (the script's own 0-100 rescaled into this range)
"""

from collections.abc import Callable

from rasterfont.domain import ProgressEvent

ProgressCallback = Callable[[float, str], None]

TOOL_FOUND = 5.0
VECTORIZE_START = 20.0
VECTORIZE_END = 50.0
BUILD_START = 50.0
BUILD_END = 100.0


def scale_progress(percentage: float, start: float, end: float) -> float:
    """Map a 0-100 percentage into the [start, end] range, clamping input."""
    clamped = max(0.0, min(100.0, percentage))
    return start + clamped * (end - start) / 100.0


class ProgressReporter:
    """Forwards progress to a callback, never letting the percentage go down.

    Attributes:
        events: Every event reported, in order
    """

    def __init__(self, callback: ProgressCallback | None = None) -> None:
        self._callback = callback
        self._last = 0.0
        self.events: list[ProgressEvent] = []

    @property
    def last_percentage(self) -> float:
        return self._last

    def report(self, percentage: float, message: str) -> ProgressEvent:
        """Report progress; the percentage is clamped to [last reported, 100]."""
        percentage = min(100.0, max(self._last, percentage))
        self._last = percentage
        event = ProgressEvent(percentage=percentage, message=message)
        self.events.append(event)
        if self._callback is not None:
            self._callback(event.percentage, event.message)
        return event
