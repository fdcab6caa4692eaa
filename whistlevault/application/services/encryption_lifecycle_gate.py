"""Encryption engine lifecycle gate.

The encryption gateway needs a one-time, per-session handshake that
depends on a connected identity. This gate owns that handshake.

Gate Rules:
1. START ON IDENTITY - The handshake starts once an identity is available
2. ONE IN FLIGHT - Concurrent callers share a single handshake task
3. BLOCK EVERYTHING ON FAILURE - A failed handshake blocks all
   confidential operations until a later handshake succeeds
4. IDEMPOTENT - Calling again after success does nothing
"""

from __future__ import annotations

import asyncio

from whistlevault.application.ports.encryption_gateway import EncryptionGatewayProtocol
from whistlevault.application.services.base import LoggingMixin
from whistlevault.application.services.status_channel import StatusChannel
from whistlevault.domain.errors import GatewayInitFailureError, NotReadyError
from whistlevault.domain.models.session import SessionContext

HANDSHAKE_FAILED_MESSAGE = (
    "Encryption engine initialization failed, check the identity connection"
)


class EncryptionLifecycleGate(LoggingMixin):
    """Single writer of the encryption engine's initialization state.

    Attributes:
        _gateway: The encryption gateway being initialized.
        _status: Channel that receives handshake failure notices.
        _handshake: The in-flight or last handshake task.
        _last_failure: Failure of the most recent handshake, if it failed.
    """

    def __init__(
        self,
        gateway: EncryptionGatewayProtocol,
        status_channel: StatusChannel,
    ) -> None:
        self._gateway = gateway
        self._status = status_channel
        self._handshake: asyncio.Task[None] | None = None
        self._last_failure: GatewayInitFailureError | None = None
        self._init_logger(component="gateway")

    @property
    def is_ready(self) -> bool:
        return self._gateway.is_initialized()

    @property
    def is_initializing(self) -> bool:
        return self._handshake is not None and not self._handshake.done()

    @property
    def last_failure(self) -> GatewayInitFailureError | None:
        return self._last_failure

    async def on_identity_available(self, session: SessionContext) -> bool:
        """Start the handshake for a newly connected identity.

        Failures are reported on the status channel, not raised.

        Args:
            session: The session whose identity just became available.

        Returns:
            True if the engine is initialized afterwards.
        """
        if not session.identity:
            self._log.debug("handshake_skipped_no_identity")
            return False
        try:
            await self.ensure_initialized()
        except GatewayInitFailureError:
            return False
        return True

    async def ensure_initialized(self) -> None:
        """Run the handshake unless it already succeeded.

        Raises:
            GatewayInitFailureError: If the handshake fails.
        """
        if self._gateway.is_initialized():
            return
        if self._handshake is None or self._handshake.done():
            self._handshake = asyncio.ensure_future(self._run_handshake())
        await self._handshake

    def check_ready(self) -> None:
        """Raise unless confidential operations may proceed.

        Raises:
            GatewayInitFailureError: If the last handshake failed.
            NotReadyError: If no handshake has completed yet.
        """
        if self._gateway.is_initialized():
            return
        if self._last_failure is not None:
            raise GatewayInitFailureError(self._last_failure.message)
        raise NotReadyError("Encryption engine is not initialized")

    async def _run_handshake(self) -> None:
        log = self._log_operation("initialize_gateway")
        log.info("handshake_started")
        try:
            await self._gateway.initialize()
        except GatewayInitFailureError as exc:
            self._record_failure(exc)
            raise
        except Exception as exc:
            failure = GatewayInitFailureError(str(exc) or HANDSHAKE_FAILED_MESSAGE)
            self._record_failure(failure)
            raise failure from exc
        self._last_failure = None
        log.info("handshake_completed")

    def _record_failure(self, failure: GatewayInitFailureError) -> None:
        self._last_failure = failure
        self._log.error("handshake_failed", error=failure.message)
        self._status.error(HANDSHAKE_FAILED_MESSAGE, code=failure.code)
