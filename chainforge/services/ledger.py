"""
Session activity ledger, most recent first
"""

import logging
from collections import deque
from typing import Iterator, List

from ..models import ActivityKind, ActivityLogEntry

logger = logging.getLogger('chainforge')

DEFAULT_LEDGER_LIMIT = 50


class ActivityLedger:
    """In-memory log of operator actions. Bounded, oldest entries drop off."""

    def __init__(self, limit: int = DEFAULT_LEDGER_LIMIT):
        if limit < 1:
            raise ValueError("Ledger limit must be at least 1")
        self._entries = deque(maxlen=limit)

    @property
    def limit(self) -> int:
        return self._entries.maxlen

    def record(self, entry: ActivityLogEntry) -> ActivityLogEntry:
        self._entries.appendleft(entry)
        logger.info(f"[activity] {entry.kind.value}: {entry.label}")
        return entry

    def record_action(self, kind: ActivityKind, label: str, succeeded: bool = True) -> ActivityLogEntry:
        return self.record(ActivityLogEntry(kind=kind, label=label, succeeded=succeeded))

    def entries(self) -> List[ActivityLogEntry]:
        return list(self._entries)

    def latest(self, count: int = 5) -> List[ActivityLogEntry]:
        return list(self._entries)[:count]

    def __iter__(self) -> Iterator[ActivityLogEntry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
