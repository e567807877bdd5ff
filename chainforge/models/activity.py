"""
Activity log entry model
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ActivityKind(str, Enum):
    TOKEN_DEPLOY = "token-deploy"
    CHAIN_SCAFFOLD = "chain-scaffold"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class ActivityLogEntry:
    """One operator action, kept for the session only"""
    kind: ActivityKind
    label: str
    succeeded: bool = True
    timestamp: str = field(default_factory=_utc_now_iso)
