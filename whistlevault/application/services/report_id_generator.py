"""Report id generation.

Ids have the form ``report-<epoch-milliseconds>``. Within one process ids
are strictly increasing: when the clock has not advanced past the last
issued millisecond, the last value is bumped by one.
"""

from __future__ import annotations

from whistlevault.application.ports.time_authority import TimeAuthorityProtocol

REPORT_ID_PREFIX = "report-"


class ReportIdGenerator:
    """Locally assigned, collision-free report identifiers."""

    def __init__(self, time_authority: TimeAuthorityProtocol) -> None:
        self._time = time_authority
        self._last_millis = 0

    def next_id(self) -> str:
        millis = int(self._time.now().timestamp() * 1000)
        if millis <= self._last_millis:
            millis = self._last_millis + 1
        self._last_millis = millis
        return f"{REPORT_ID_PREFIX}{millis}"
