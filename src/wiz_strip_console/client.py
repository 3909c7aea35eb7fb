"""Device client for WiZ light strips."""

from __future__ import annotations

import logging
from typing import Any

from .codec import decode_response, encode_request
from .errors import ValidationError
from .models import (
    CommandResult,
    Request,
    ResultT,
    Scene,
    Status,
    validate_channel,
    validate_dimming,
    validate_speed,
)
from .transport import CONTROL_PORT, RECEIVE_TIMEOUT, exchange

LOGGER = logging.getLogger(__name__)


class WizLightStrip:
    """Client for a single WiZ light strip.

    The client only remembers the device address. Every call opens its own
    socket, sends one request and waits for one reply, so instances are cheap
    and safe to use from independent threads.
    """

    def __init__(
        self,
        address: str,
        port: int = CONTROL_PORT,
        timeout: float = RECEIVE_TIMEOUT,
    ):
        """
        Initialize the client.

        Args:
            address: IP address of the light strip
            port: UDP control port
            timeout: Seconds to wait for each reply
        """
        self.address = address
        self.port = port
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"WizLightStrip({self.address!r})"

    def _send_request(self, request: Request[Any], result_type: type[ResultT]) -> ResultT:
        """Exchange one request for the ``result`` member of the reply."""
        LOGGER.debug("%s: %s", self.address, request.method.value)
        reply = exchange(
            self.address,
            encode_request(request),
            port=self.port,
            timeout=self.timeout,
        )
        return decode_response(reply, result_type).result

    def _command(self, request: Request[Any]) -> bool:
        result = self._send_request(request, CommandResult)
        if not result.success:
            LOGGER.info("%s rejected %s", self.address, request.method.value)
        return result.success

    # Power

    def turn_on(self) -> bool:
        """Turn the strip on."""
        return self._command(Request.set_state(True))

    def turn_off(self) -> bool:
        """Turn the strip off."""
        return self._command(Request.set_state(False))

    # Pilot

    def set_color(self, red: int, green: int, blue: int, dimming: int) -> bool:
        """
        Show a static color.

        Args:
            red: Red channel, 0-255
            green: Green channel, 0-255
            blue: Blue channel, 0-255
            dimming: Brightness percentage, 10-100

        Returns:
            The device's ``success`` flag

        Raises:
            OutOfRangeError: Before any I/O, if a parameter is out of range
        """
        validate_dimming(dimming)
        validate_channel("red", red)
        validate_channel("green", green)
        validate_channel("blue", blue)
        return self._command(Request.set_color(red, green, blue, dimming))

    def set_scene(self, scene: Scene, speed: int, dimming: int) -> bool:
        """
        Play a dynamic scene.

        Args:
            scene: Scene preset
            speed: Playback speed, 10-200
            dimming: Brightness percentage, 10-100

        Returns:
            The device's ``success`` flag

        Raises:
            OutOfRangeError: Before any I/O, if speed or dimming is out of range
        """
        validate_dimming(dimming)
        validate_speed(speed)
        try:
            scene = Scene(scene)
        except ValueError as exc:
            raise ValidationError(f"unknown scene id: {scene!r}") from exc
        return self._command(Request.set_scene(scene, speed, dimming))

    def get_status(self) -> Status:
        """Query the current pilot state of the strip."""
        return self._send_request(Request.get_pilot(), Status)


__all__ = ["WizLightStrip"]
