"""Logging setup and diagnostic filtering.

The transport client announces every real network call with a fixed notice
so an unmocked call in a unit test is easy to spot. Test harnesses and
quiet deployments silence that notice with a MessageFilter attached to the
logger (or handler) instead of patching a shared stream.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable

UNMOCKED_CALL_NOTICE = "Real API call initiated. Should be mocked in unit tests."

MessagePredicate = Callable[[str], bool]


class MessageFilter(logging.Filter):
    """Drop records whose rendered message matches a predicate.

    The predicate receives ``record.getMessage()`` and returns True for
    messages that should be suppressed.

    Example:
        >>> quiet = MessageFilter(lambda msg: "heartbeat" in msg)
        >>> logging.getLogger("tasklist").addFilter(quiet)
    """

    def __init__(self, suppress: MessagePredicate, name: str = "") -> None:
        super().__init__(name)
        self.suppress = suppress

    def filter(self, record: logging.LogRecord) -> bool:
        if not super().filter(record):
            return True
        return not self.suppress(record.getMessage())

    @classmethod
    def exact(cls, *messages: str) -> MessageFilter:
        """Filter that suppresses only the given message texts."""
        blocked = frozenset(messages)
        return cls(lambda msg: msg in blocked)


def suppress_unmocked_call_notice(logger: logging.Logger) -> MessageFilter:
    """Attach a filter for the unmocked-call notice and return it.

    Callers keep the returned filter to remove it later with
    ``logger.removeFilter(...)``.
    """
    notice_filter = MessageFilter.exact(UNMOCKED_CALL_NOTICE)
    logger.addFilter(notice_filter)
    return notice_filter


def setup_logging(
    *,
    level: int | str = logging.INFO,
    filters: tuple[logging.Filter, ...] = (),
) -> None:
    """
    Configure the root logger with one stderr handler.

    Call this ONCE, early (the API lifespan does it on startup).
    """
    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(fmt)
    for f in filters:
        ch.addFilter(f)
    root.addHandler(ch)

    logging.captureWarnings(True)


__all__ = [
    "UNMOCKED_CALL_NOTICE",
    "MessageFilter",
    "MessagePredicate",
    "setup_logging",
    "suppress_unmocked_call_notice",
]
