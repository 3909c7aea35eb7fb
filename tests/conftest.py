"""Shared fixtures."""

import pytest

from mock_device import MockWizDevice, rejecting_reply


@pytest.fixture
def mock_device():
    """Mock strip that accepts every command."""
    with MockWizDevice() as device:
        yield device


@pytest.fixture
def rejecting_device():
    """Mock strip that answers every command with success: false."""
    with MockWizDevice(rejecting_reply) as device:
        yield device


@pytest.fixture
def silent_device():
    """Mock strip that never replies."""
    with MockWizDevice(None) as device:
        yield device
