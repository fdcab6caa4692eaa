"""History entry domain model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class HistoryEntry:
    """A completed user-initiated action.

    Attributes:
        timestamp: When the action completed.
        action: Description of the action.
    """

    timestamp: datetime
    action: str
