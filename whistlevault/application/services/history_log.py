"""History Log - append-only record of completed user-initiated actions.

Entries are kept for the whole session and never persisted. The UI
displays only the most recent entries.
"""

from __future__ import annotations

from whistlevault.application.ports.time_authority import TimeAuthorityProtocol
from whistlevault.config.lifecycle_config import DEFAULT_LIFECYCLE_CONFIG, LifecycleConfig
from whistlevault.domain.models.history import HistoryEntry


class HistoryLog:
    """Append-only session history with a bounded view.

    Attributes:
        _time: Time authority for entry timestamps.
        _view_limit: Number of entries returned by recent().
        _entries: Every entry appended this session, oldest first.
    """

    def __init__(
        self,
        time_authority: TimeAuthorityProtocol,
        config: LifecycleConfig = DEFAULT_LIFECYCLE_CONFIG,
    ) -> None:
        self._time = time_authority
        self._view_limit = config.history_view_limit
        self._entries: list[HistoryEntry] = []

    def append(self, action: str) -> HistoryEntry:
        entry = HistoryEntry(timestamp=self._time.now(), action=action)
        self._entries.append(entry)
        return entry

    def entries(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    def recent(self) -> tuple[HistoryEntry, ...]:
        """Return the most recent entries, oldest first."""
        return tuple(self._entries[-self._view_limit :])

    def __len__(self) -> int:
        return len(self._entries)
