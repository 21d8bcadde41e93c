"""Exception hierarchy for magicsniff.

Classification itself never raises: an unrecognized buffer is a normal
``Unknown`` result. Errors only come from building a signature table or from
reading the byte window.
"""

from __future__ import annotations


class MagicSniffError(Exception):
    """Base exception for all magicsniff errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(MagicSniffError):
    """Raised when a signature entry, signature file or setting is invalid.

    Common causes: empty pattern, byte values outside 0-255, negative offset,
    a missing signatures file, or an inverted read window.
    """


class AcquisitionError(MagicSniffError):
    """Raised when the byte window cannot be read from its source.

    Covers missing files, permission problems, HTTP error statuses and
    network failures. Short reads are not errors.
    """

    def __init__(
        self,
        message: str,
        source: str = "",
        details: dict | None = None,
    ) -> None:
        super().__init__(message, details)
        self.source = source
