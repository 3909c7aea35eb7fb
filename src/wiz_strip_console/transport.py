"""UDP datagram exchange with a single device."""

from __future__ import annotations

import ipaddress
import logging
import socket

from .errors import ReceiveTimeoutError, TransportError

LOGGER = logging.getLogger(__name__)

# Control port every WiZ device listens on
CONTROL_PORT = 38899

# Seconds to wait for the reply datagram
RECEIVE_TIMEOUT = 1.0

# Replies larger than this are truncated
RECV_BUFFER_SIZE = 2048


def _address_family(address: str) -> socket.AddressFamily:
    try:
        ip = ipaddress.ip_address(address)
    except ValueError:
        # Hostname, resolved by connect()
        return socket.AF_INET
    return socket.AF_INET6 if ip.version == 6 else socket.AF_INET


def exchange(
    address: str,
    payload: bytes,
    *,
    port: int = CONTROL_PORT,
    timeout: float = RECEIVE_TIMEOUT,
) -> bytes:
    """
    Send one datagram to a device and wait for one reply.

    A fresh ephemeral socket is used for every call and closed before
    returning, whether the exchange succeeded or not.

    Args:
        address: Device IP address
        payload: Datagram to send
        port: Device UDP port
        timeout: Seconds to wait for the reply

    Returns:
        The reply datagram, at most ``RECV_BUFFER_SIZE`` bytes

    Raises:
        ReceiveTimeoutError: If no reply arrives within ``timeout``
        TransportError: If the socket cannot be bound, connected, or used
    """
    family = _address_family(address)
    try:
        with socket.socket(family, socket.SOCK_DGRAM) as sock:
            sock.bind(("::" if family == socket.AF_INET6 else "", 0))
            sock.connect((address, port))
            sock.settimeout(timeout)

            LOGGER.debug("-> %s:%d %s", address, port, payload)
            sock.send(payload)

            reply = sock.recv(RECV_BUFFER_SIZE)
            LOGGER.debug("<- %s:%d %s", address, port, reply)
            return reply
    except socket.timeout as exc:
        raise ReceiveTimeoutError(
            f"no reply from {address}:{port} within {timeout:g}s"
        ) from exc
    except OSError as exc:
        raise TransportError(f"failed to exchange datagram with {address}:{port}: {exc}") from exc


__all__ = ["CONTROL_PORT", "RECEIVE_TIMEOUT", "RECV_BUFFER_SIZE", "exchange"]
