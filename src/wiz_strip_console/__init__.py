"""WiZ Strip Console - command-line control for WiZ light strips.

This package talks to WiZ light strips directly over the local network,
one UDP datagram per command, and provides a small CLI on top.
"""

__version__ = "0.1.0"

from .client import WizLightStrip
from .errors import (
    CodecError,
    OutOfRangeError,
    ReceiveTimeoutError,
    TransportError,
    ValidationError,
    WizError,
)
from .models import Scene, Status

__all__ = [
    "WizLightStrip",
    "Scene",
    "Status",
    "WizError",
    "ValidationError",
    "OutOfRangeError",
    "CodecError",
    "TransportError",
    "ReceiveTimeoutError",
    "__version__",
]
