"""Status Channel - the single current notification observed by the UI.

Each set() overwrites the previous notice; nothing is queued. Notices
expire after their display duration, evaluated lazily against the time
authority whenever the channel is read.

Display Durations:
- PENDING: never expires, replaced by the next step
- SUCCESS: LifecycleConfig.success_display_ms
- ERROR, CANCELLED: LifecycleConfig.error_display_ms
"""

from __future__ import annotations

from datetime import timedelta

from whistlevault.application.ports.time_authority import TimeAuthorityProtocol
from whistlevault.application.services.base import LoggingMixin
from whistlevault.config.lifecycle_config import DEFAULT_LIFECYCLE_CONFIG, LifecycleConfig
from whistlevault.domain.models.status import StatusNotice, StatusTag


class StatusChannel(LoggingMixin):
    """Single-slot notification channel with auto-expiry.

    Attributes:
        _time: Time authority used for issue and expiry timestamps.
        _config: Display durations per tag.
        _notice: The current notice, None when the channel is empty.
    """

    def __init__(
        self,
        time_authority: TimeAuthorityProtocol,
        config: LifecycleConfig = DEFAULT_LIFECYCLE_CONFIG,
    ) -> None:
        self._time = time_authority
        self._config = config
        self._notice: StatusNotice | None = None
        self._init_logger(component="status")

    def _default_expiry_ms(self, tag: StatusTag) -> int | None:
        if tag is StatusTag.PENDING:
            return None
        if tag is StatusTag.SUCCESS:
            return self._config.success_display_ms
        return self._config.error_display_ms

    def set(
        self,
        tag: StatusTag,
        message: str,
        auto_expire_ms: int | None = None,
        code: str | None = None,
    ) -> StatusNotice:
        """Replace the current notice.

        Args:
            tag: Kind of notice.
            message: Human-readable message.
            auto_expire_ms: Display duration override; the tag default
                applies when omitted.
            code: Error code for ERROR and CANCELLED notices.

        Returns:
            The notice now held by the channel.
        """
        issued_at = self._time.now()
        expire_ms = (
            auto_expire_ms if auto_expire_ms is not None else self._default_expiry_ms(tag)
        )
        expires_at = None
        if expire_ms is not None:
            expires_at = issued_at + timedelta(milliseconds=expire_ms)
        self._notice = StatusNotice(
            tag=tag,
            message=message,
            issued_at=issued_at,
            expires_at=expires_at,
            code=code,
        )
        self._log.debug("status_set", tag=tag.value, message=message, code=code)
        return self._notice

    def pending(self, message: str) -> StatusNotice:
        return self.set(StatusTag.PENDING, message)

    def success(self, message: str) -> StatusNotice:
        return self.set(StatusTag.SUCCESS, message)

    def error(self, message: str, code: str | None = None) -> StatusNotice:
        return self.set(StatusTag.ERROR, message, code=code)

    def cancelled(self, message: str, code: str | None = None) -> StatusNotice:
        return self.set(StatusTag.CANCELLED, message, code=code)

    def current(self) -> StatusNotice | None:
        """Return the visible notice, or None when empty or expired."""
        notice = self._notice
        if notice is None:
            return None
        if notice.is_expired(self._time.now()):
            self._notice = None
            return None
        return notice

    def clear(self) -> None:
        self._notice = None
