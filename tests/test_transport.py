"""Tests for the UDP transport."""

import json
import socket
import time

import pytest

from mock_device import MockWizDevice
from wiz_strip_console.errors import ReceiveTimeoutError, TransportError
from wiz_strip_console.transport import CONTROL_PORT, RECEIVE_TIMEOUT, RECV_BUFFER_SIZE, exchange


def test_defaults():
    """Test the fixed port, deadline and buffer size."""
    assert CONTROL_PORT == 38899
    assert RECEIVE_TIMEOUT == 1.0
    assert RECV_BUFFER_SIZE == 2048


@pytest.mark.integration
def test_exchange_round_trip(mock_device):
    """Test that one datagram is sent and the reply returned."""
    payload = b'{"method":"setState","params":{"state":true}}'
    reply = exchange("127.0.0.1", payload, port=mock_device.port)

    assert mock_device.requests == [payload]
    assert json.loads(reply)["result"] == {"success": True}


@pytest.mark.integration
def test_exchange_truncates_large_reply():
    """Test that replies beyond the receive buffer are cut off."""
    with MockWizDevice(b"x" * 4000) as device:
        reply = exchange("127.0.0.1", b"{}", port=device.port)
    assert len(reply) == RECV_BUFFER_SIZE


@pytest.mark.integration
def test_exchange_timeout(silent_device):
    """Test that a silent device raises ReceiveTimeoutError instead of blocking."""
    started = time.monotonic()
    with pytest.raises(ReceiveTimeoutError) as excinfo:
        exchange("127.0.0.1", b"{}", port=silent_device.port, timeout=0.2)
    elapsed = time.monotonic() - started

    assert isinstance(excinfo.value, TransportError)
    assert elapsed < 2.0
    assert silent_device.requests == [b"{}"]


@pytest.mark.integration
def test_exchange_default_timeout_is_bounded(silent_device):
    """Test that the default one second deadline applies."""
    started = time.monotonic()
    with pytest.raises(TransportError):
        exchange("127.0.0.1", b"{}", port=silent_device.port)
    assert time.monotonic() - started < 3.0


@pytest.mark.integration
def test_exchange_closed_port():
    """Test that sending to a port nobody listens on is a TransportError."""
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as probe:
        probe.bind(("127.0.0.1", 0))
        port = probe.getsockname()[1]

    with pytest.raises(TransportError):
        exchange("127.0.0.1", b"{}", port=port, timeout=0.2)


def test_socket_closed_on_error(monkeypatch):
    """Test that the socket is closed when sending fails."""
    closed = []

    class FailingSocket(socket.socket):
        def send(self, data, *args):
            raise OSError("network is down")

        def close(self):
            closed.append(True)
            super().close()

    monkeypatch.setattr(socket, "socket", FailingSocket)
    with pytest.raises(TransportError, match="network is down"):
        exchange("127.0.0.1", b"{}", port=9, timeout=0.1)
    assert closed
