"""Exception hierarchy for wiz-strip-console.

Every error raised by the protocol layer derives from :class:`WizError`, so
callers can stop on the first failing device with a single ``except``.
"""

from __future__ import annotations


class WizError(Exception):
    """Base class for all wiz-strip-console errors."""


class ValidationError(WizError, ValueError):
    """A command parameter was rejected before any network I/O."""


class OutOfRangeError(ValidationError):
    """A numeric parameter fell outside its allowed range."""

    def __init__(self, name: str, value: int, minimum: int, maximum: int):
        """
        Initialize the error.

        Args:
            name: Parameter name (e.g. ``dimming``)
            value: The rejected value
            minimum: Lowest accepted value (inclusive)
            maximum: Highest accepted value (inclusive)
        """
        super().__init__(f"{name} value must be between {minimum} and {maximum}, got {value}")
        self.name = name
        self.value = value
        self.minimum = minimum
        self.maximum = maximum


class CodecError(WizError):
    """A message could not be encoded or the device reply could not be decoded."""


class TransportError(WizError):
    """The datagram exchange with the device failed."""


class ReceiveTimeoutError(TransportError):
    """No reply datagram arrived before the receive deadline."""


__all__ = [
    "WizError",
    "ValidationError",
    "OutOfRangeError",
    "CodecError",
    "TransportError",
    "ReceiveTimeoutError",
]
