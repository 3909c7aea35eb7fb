"""Configuration management for wiz-strip-console."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional

import yaml

from .transport import RECEIVE_TIMEOUT

LOGGER = logging.getLogger(__name__)

# Default configuration directory
DEFAULT_CONFIG_DIR = Path.home() / ".wiz_strip_console"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"

# Comma-separated aliases or addresses used when no target is given
DEVICES_ENV_VAR = "WIZ_STRIP_DEVICES"


@dataclass
class CommandDefaults:
    """Default values for optional command arguments."""

    speed: int = 20
    brightness: int = 75
    timeout: float = RECEIVE_TIMEOUT

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "speed": self.speed,
            "brightness": self.brightness,
            "timeout": self.timeout,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CommandDefaults:
        """Create from dictionary."""
        timeout = float(data.get("timeout", RECEIVE_TIMEOUT))
        if timeout <= 0:
            raise ValueError(f"timeout must be greater than 0, got {timeout}")
        return cls(
            speed=int(data.get("speed", 20)),
            brightness=int(data.get("brightness", 75)),
            timeout=timeout,
        )


@dataclass
class StripConfig:
    """Main configuration for wiz-strip-console."""

    devices: dict[str, str] = field(default_factory=dict)
    groups: dict[str, list[str]] = field(default_factory=dict)
    defaults: CommandDefaults = field(default_factory=CommandDefaults)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "devices": dict(self.devices),
            "groups": {name: list(members) for name, members in self.groups.items()},
            "defaults": self.defaults.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StripConfig:
        """Create from dictionary."""
        devices = {str(alias): str(address) for alias, address in (data.get("devices") or {}).items()}
        groups = {
            str(name): [str(member) for member in (members or [])]
            for name, members in (data.get("groups") or {}).items()
        }
        return cls(
            devices=devices,
            groups=groups,
            defaults=CommandDefaults.from_dict(data.get("defaults") or {}),
        )

    @classmethod
    def load(cls, config_file: Path = DEFAULT_CONFIG_FILE) -> StripConfig:
        """Load configuration from file, falling back to defaults if it is missing or unreadable."""
        if not config_file.exists():
            return cls()

        try:
            with open(config_file, "r") as f:
                data = yaml.safe_load(f) or {}
            return cls.from_dict(data)
        except (OSError, yaml.YAMLError, AttributeError, TypeError, ValueError) as e:
            LOGGER.warning("Failed to load config from %s: %s", config_file, e)
            return cls()

    def save(self, config_file: Path = DEFAULT_CONFIG_FILE) -> None:
        """Save configuration to file."""
        config_file.parent.mkdir(parents=True, exist_ok=True)

        with open(config_file, "w") as f:
            yaml.safe_dump(self.to_dict(), f, sort_keys=False, default_flow_style=False)

    def resolve(self, name: str) -> str:
        """Resolve a device alias to its address; unknown names are returned as-is."""
        return self.devices.get(name, name)

    def resolve_targets(
        self,
        names: Iterable[str] = (),
        groups: Iterable[str] = (),
    ) -> list[str]:
        """
        Expand aliases and groups into an ordered list of addresses.

        Explicit names come first, then group members in group order.
        Duplicates keep their first position.

        Args:
            names: Device aliases or addresses
            groups: Group names

        Returns:
            Device addresses

        Raises:
            KeyError: If a group is not configured
        """
        addresses: list[str] = []
        for name in names:
            addresses.append(self.resolve(name))
        for group in groups:
            if group not in self.groups:
                raise KeyError(group)
            addresses.extend(self.resolve(member) for member in self.groups[group])
        return list(dict.fromkeys(addresses))

    def env_targets(self) -> Optional[list[str]]:
        """Get targets from the environment variable, if set."""
        raw = os.environ.get(DEVICES_ENV_VAR)
        if not raw:
            return None
        names = [part.strip() for part in raw.split(",") if part.strip()]
        return self.resolve_targets(names)
