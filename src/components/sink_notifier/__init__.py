"""Sink notifier component for best-effort spreadsheet delivery."""

from src.components.sink_notifier.notifier import SinkNotifier

__all__ = [
    "SinkNotifier",
]
