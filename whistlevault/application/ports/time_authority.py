"""Time Authority Protocol - interface for consistent timestamp provisioning.

All services that need timestamps MUST inject a TimeAuthorityProtocol
implementation instead of calling datetime.now() directly. Status expiry,
history timestamps and report id generation all read time through it.

For production:
    Use SystemTimeAuthority in whistlevault.infrastructure.adapters.time

For testing:
    Use FakeTimeAuthority from tests/helpers/fake_time_authority.py
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Abstract interface for time authority."""

    @abstractmethod
    def now(self) -> datetime:
        """Return current UTC time with timezone awareness."""
        ...

    @abstractmethod
    def monotonic(self) -> float:
        """Return monotonic clock value for measuring elapsed time.

        Only differences between values are meaningful.
        """
        ...
