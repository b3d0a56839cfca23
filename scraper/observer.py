"""
Diagnostic observers for the extraction pipeline.

Extraction code reports what it tries and what it drops through an
observer callable ``observer(event, details)``. Observers only watch: the
return value is ignored and exceptions raised by an observer are logged and
discarded, so extraction results never depend on the observer in use.
"""

import logging
from typing import Any, Callable, Dict, Optional

import structlog

# Events go to the stdlib "scraper" logger as key=value lines
logger = structlog.wrap_logger(
    logging.getLogger("scraper"),
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.processors.format_exc_info,
        structlog.processors.KeyValueRenderer(key_order=["event"]),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
)

Observer = Callable[[str, Dict[str, Any]], None]


def log_observer(event: str, details: Dict[str, Any]) -> None:
    """Forward events to the ``scraper`` logger at DEBUG level."""
    logger.debug(event, **details)


class RecordingObserver:
    """Keep every event in memory; handy for tests and the CLI."""

    def __init__(self):
        self.events = []

    def __call__(self, event: str, details: Dict[str, Any]) -> None:
        self.events.append((event, dict(details)))

    def names(self):
        return [event for event, _ in self.events]


def notify(observer: Optional[Observer], event: str, **details: Any) -> None:
    """Send an event to observer (log_observer when None)."""
    target = observer or log_observer
    try:
        target(event, details)
    except Exception:
        logger.exception("observer_failed", failed_event=event)
