"""
Diagnostics observer for the spectrogram pipeline.

The pipeline never prints. Anything worth reporting (signal length, frame
count, timings) is sent to an observer handed in at construction time.
The default observer discards everything.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger("spectrograph")


@runtime_checkable
class SpectrogramObserver(Protocol):
    """
    Protocol for pipeline diagnostics.

    Any object with a ``notify(event, **details)`` method can observe
    the builder and `SpecCompute`.
    """

    def notify(self, event: str, **details: Any) -> None:
        """
        Receive one diagnostic event.

        Args:
            event: Short event name, e.g. ``"compute.done"``.
            **details: Event-specific values (counts, seconds, sizes).
        """
        ...


class NullObserver:
    """Discard all events."""

    def notify(self, event: str, **details: Any) -> None:
        return None


class LoggingObserver:
    """Forward events to the ``spectrograph`` logger."""

    def __init__(self, level: int = logging.INFO) -> None:
        self.level = level

    def notify(self, event: str, **details: Any) -> None:
        fields = " ".join(f"{k}={v}" for k, v in details.items())
        logger.log(self.level, "%s %s", event, fields)


class RecordingObserver:
    """Keep events in memory, in arrival order."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def notify(self, event: str, **details: Any) -> None:
        self.events.append((event, details))

    def names(self) -> list[str]:
        return [name for name, _ in self.events]


NULL_OBSERVER = NullObserver()
