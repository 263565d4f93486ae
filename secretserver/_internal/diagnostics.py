"""
Diagnostic events emitted by the secret access layer.

The secret api does not write logs by itself. Instead, it reports what happened
(a decode failure, a field lookup that missed, an attachment that was fetched)
as a DiagnosticEvent to an observer, which is any callable taking the event. The
default observer, `log_observer`, forwards events to loguru at debug level and
to the internal log.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict

from loguru import logger

from .logging import log as internal_log

DECODE_FAILURE = "decode_failure"
FIELD_LOOKUP_HIT = "field_lookup_hit"
FIELD_LOOKUP_MISS = "field_lookup_miss"
ATTACHMENT_FETCH = "attachment_fetch"


@dataclass(frozen=True)
class DiagnosticEvent:
    kind: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)


Observer = Callable[[DiagnosticEvent], None]


def log_observer(event: DiagnosticEvent) -> None:
    # Events carrying a raw server payload may contain secret values. They are
    # marked sensitive, which keeps them out of the internal log file.
    sensitive = "payload" in event.details
    logger.bind(sensitive=sensitive).debug(f"[{event.kind}] {event.message}")
    if not sensitive:
        internal_log(f"[{event.kind}] {event.message} {event.details}")


def null_observer(event: DiagnosticEvent) -> None:
    pass
