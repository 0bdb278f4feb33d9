"""
Configuration management for the Street View master.

This module provides structured configuration classes for input tuning,
message channel names and session defaults, with validation.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional


@dataclass
class InputConfig:
    """Tuning of the controller input translation."""

    # Coefficient of input event value to POV translation
    sensitivity: float = 0.0032
    # Forward/backward signal must exceed this (after sensitivity) to count
    movement_threshold: float = 1.0
    # Momentum needed to move forward or backward
    movement_count: int = 10
    # Wait this long after a move before moving again
    movement_cooldown_ms: float = 250.0

    def __post_init__(self) -> None:
        """Validate input tuning."""
        if self.sensitivity <= 0:
            raise ValueError(f"sensitivity must be positive, got {self.sensitivity}")
        if self.movement_threshold <= 0:
            raise ValueError(
                f"movement_threshold must be positive, got {self.movement_threshold}"
            )
        if self.movement_count < 0:
            raise ValueError(
                f"movement_count must not be negative, got {self.movement_count}"
            )
        if self.movement_cooldown_ms < 0:
            raise ValueError(
                "movement_cooldown_ms must not be negative, "
                f"got {self.movement_cooldown_ms}"
            )


@dataclass
class ChannelConfig:
    """Channel names for inbound and outbound messages."""

    links: str = "links"
    pov: str = "pov"
    pano: str = "pano"
    refresh: str = "refresh"
    key: str = "EV_KEY"
    abs: str = "EV_ABS"
    scene: str = "scene"
    scene_activity: str = "streetview"

    def __post_init__(self) -> None:
        """Validate channel names."""
        for item in fields(self):
            value = getattr(self, item.name)
            if not isinstance(value, str) or not value:
                raise ValueError(f"Channel '{item.name}' must be a non-empty string")

        inbound = self.inbound_channels()
        if len(set(inbound)) != len(inbound):
            raise ValueError(f"Inbound channel names must be unique: {inbound}")

    def inbound_channels(self) -> list[str]:
        return [
            self.links,
            self.pov,
            self.pano,
            self.refresh,
            self.key,
            self.abs,
            self.scene,
        ]


_ENV_INPUT_KEYS = {
    "STREETVIEW_INPUT_SENSITIVITY": ("sensitivity", float),
    "STREETVIEW_MOVEMENT_THRESHOLD": ("movement_threshold", float),
    "STREETVIEW_MOVEMENT_COUNT": ("movement_count", int),
    "STREETVIEW_MOVEMENT_COOLDOWN_MS": ("movement_cooldown_ms", float),
}
_ENV_START_ACTIVE = "STREETVIEW_START_ACTIVE"
_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off", ""}


@dataclass
class MasterConfig:
    """
    Complete configuration for a Street View master session.

    Groups input tuning, channel names and the initial session state.
    """

    input_config: InputConfig = field(default_factory=InputConfig)
    channel_config: ChannelConfig = field(default_factory=ChannelConfig)

    initial_heading: float = 0.0
    initial_pitch: float = 0.0

    # Handle input device events from startup
    start_active: bool = False

    def __post_init__(self) -> None:
        """Normalize numeric fields."""
        self.initial_heading = float(self.initial_heading)
        self.initial_pitch = float(self.initial_pitch)

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, object] | None) -> "MasterConfig":
        """
        Create configuration from dictionary.

        Args:
            config_dict: Configuration mapping (can be None)

        Returns:
            MasterConfig instance
        """
        if not config_dict:
            return cls()

        config_data: Dict[str, object] = dict(config_dict)

        allowed_top_level = {
            "input_config",
            "channel_config",
            "initial_heading",
            "initial_pitch",
            "start_active",
        }
        unexpected = set(config_data) - allowed_top_level
        if unexpected:
            raise ValueError(
                f"Unsupported configuration keys provided: {sorted(unexpected)}"
            )

        input_config = _build_nested(InputConfig, config_data, "input_config")
        channel_config = _build_nested(ChannelConfig, config_data, "channel_config")

        primary_keys = {"initial_heading", "initial_pitch", "start_active"}
        main_config = {
            key: config_data[key] for key in primary_keys if key in config_data
        }

        return cls(
            **main_config,
            input_config=input_config,
            channel_config=channel_config,
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "MasterConfig":
        """
        Create configuration from ``STREETVIEW_*`` environment variables.

        Args:
            environ: Environment mapping, defaults to ``os.environ``

        Returns:
            MasterConfig instance with unset values left at their defaults
        """
        env = os.environ if environ is None else environ

        input_params: Dict[str, Any] = {}
        for env_key, (name, caster) in _ENV_INPUT_KEYS.items():
            raw = env.get(env_key)
            if raw is None:
                continue
            try:
                input_params[name] = caster(raw)
            except ValueError as exc:
                raise ValueError(f"Invalid value for {env_key}: {raw!r}") from exc

        start_active = False
        raw_active = env.get(_ENV_START_ACTIVE)
        if raw_active is not None:
            lowered = raw_active.strip().lower()
            if lowered in _TRUE_STRINGS:
                start_active = True
            elif lowered not in _FALSE_STRINGS:
                raise ValueError(f"Invalid value for {_ENV_START_ACTIVE}: {raw_active!r}")

        return cls(input_config=InputConfig(**input_params), start_active=start_active)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert configuration to dictionary.

        Returns:
            Dictionary representation of configuration
        """
        return {
            "input_config": {
                "sensitivity": self.input_config.sensitivity,
                "movement_threshold": self.input_config.movement_threshold,
                "movement_count": self.input_config.movement_count,
                "movement_cooldown_ms": self.input_config.movement_cooldown_ms,
            },
            "channel_config": {
                item.name: getattr(self.channel_config, item.name)
                for item in fields(self.channel_config)
            },
            "initial_heading": self.initial_heading,
            "initial_pitch": self.initial_pitch,
            "start_active": self.start_active,
        }


def _build_nested(config_cls: Any, source: Mapping[str, object], key: str) -> Any:
    """Build a nested config from a mapping or pass an instance through."""

    value = source.get(key)
    if value is None:
        return config_cls()
    if isinstance(value, config_cls):
        return value
    if not isinstance(value, Mapping):
        raise ValueError(f"Configuration field '{key}' must be a mapping")

    known = {item.name for item in fields(config_cls)}
    unexpected = set(value) - known
    if unexpected:
        raise ValueError(
            f"Unsupported keys in '{key}': {sorted(str(name) for name in unexpected)}"
        )
    return config_cls(**dict(value))
