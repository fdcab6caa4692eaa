"""Status notice domain model.

A status notice is the single current message shown to the user. Each
new notice replaces the previous one; notices may carry an expiry after
which they are no longer displayed.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class StatusTag(Enum):
    """Kind of status notice.

    Tags:
        PENDING: An operation step is in progress
        SUCCESS: The operation completed
        ERROR: The operation failed
        CANCELLED: The user declined to sign; not an error
    """

    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class StatusNotice:
    """One status message.

    Attributes:
        tag: Kind of notice.
        message: Human-readable message.
        issued_at: When the notice was set.
        expires_at: When the notice stops being displayed, None for never.
        code: Error code for ERROR and CANCELLED notices.
    """

    tag: StatusTag
    message: str
    issued_at: datetime
    expires_at: datetime | None = None
    code: str | None = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and now >= self.expires_at
