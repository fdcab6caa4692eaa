"""Base exception classes for the WhistleVault domain layer."""


class WhistleVaultError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class.
    The ``code`` attribute is a stable identifier surfaced on status
    notices so callers can tell failure kinds apart without parsing text.
    """

    code: str = "WHISTLEVAULT_ERROR"

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
        self.message = message
