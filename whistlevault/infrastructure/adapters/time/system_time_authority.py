"""System clock implementation of TimeAuthorityProtocol.

This is the only production module allowed to read the wall clock
directly.
"""

import time
from datetime import datetime, timezone

from whistlevault.application.ports.time_authority import TimeAuthorityProtocol


class SystemTimeAuthority(TimeAuthorityProtocol):
    """Time authority backed by the host clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def monotonic(self) -> float:
        return time.monotonic()
