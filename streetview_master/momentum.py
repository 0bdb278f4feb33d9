"""
Translation of controller input into orientation changes and moves.

A six axis controller reports continuous axis values. Yaw maps directly to
heading changes. Pushing or tilting the controller forward or backward
builds up momentum, and a move fires only after the push has been held past
the threshold for enough consecutive samples. After a move, further moves
are suppressed for a short cooldown.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from .config import InputConfig
from .types import Millis, NumberLike

logger = logging.getLogger(__name__)


class MoveDecision(Enum):
    """Discrete navigation outcome of an input sample."""

    NONE = "none"
    FORWARD = "forward"
    BACKWARD = "backward"


class InputEventCodes:
    """Linux evdev codes used by the Street View controls."""

    ABS_Y = 0x01
    ABS_RX = 0x03
    ABS_RZ = 0x05

    BTN_0 = 0x100
    BTN_1 = 0x101

    YAW_AXIS = ABS_RZ
    MOMENTUM_AXES = (ABS_Y, ABS_RX)
    MOVE_FORWARD_BUTTON = BTN_1
    MOVE_BACKWARD_BUTTON = BTN_0


class MomentumInputTranslator:
    """
    Momentum filter turning axis samples into cooldown gated moves.

    The counter grows while the forward signal stays above the threshold,
    shrinks while it stays below the negative threshold, and is cleared as
    soon as a sample falls inside the dead zone. Calls must be serialized by
    the owner.
    """

    def __init__(self, config: Optional[InputConfig] = None, now: Millis = 0.0) -> None:
        """
        Initialize the translator.

        Args:
            config: Input tuning, defaults to the stock controller settings
            now: Current time in milliseconds
        """
        self.config = config or InputConfig()
        self.last_move_time: Millis = now
        self.momentum_counter: int = 0

    def reset(self, now: Millis) -> None:
        """Clear momentum and restart the cooldown window at ``now``."""
        self.last_move_time = now
        self.momentum_counter = 0

    def in_cooldown(self, now: Millis) -> bool:
        return (now - self.last_move_time) < self.config.movement_cooldown_ms

    def on_yaw_sample(self, raw_value: NumberLike) -> Optional[float]:
        """
        Convert a raw yaw axis value into a heading change.

        Args:
            raw_value: Raw axis value

        Returns:
            Heading delta in degrees, or None when there is no rotation
        """
        delta = raw_value * self.config.sensitivity
        if delta == 0:
            return None
        return float(delta)

    def on_momentum_sample(
        self, raw_axis_a: NumberLike, raw_axis_b: NumberLike, now: Millis
    ) -> MoveDecision:
        """
        Feed one sample of the two forward/backward axes.

        Both axes are summed so that either pushing or tilting the
        controller contributes to the movement.

        Args:
            raw_axis_a: Raw value of the first forward axis
            raw_axis_b: Raw value of the second forward axis
            now: Sample time in milliseconds

        Returns:
            The move to attempt, if any
        """
        config = self.config
        signal = -config.sensitivity * (raw_axis_a + raw_axis_b)

        if signal > config.movement_threshold:
            self.momentum_counter += 1
        elif signal < -config.movement_threshold:
            self.momentum_counter -= 1
        else:
            self.momentum_counter = 0

        if self.in_cooldown(now):
            self.momentum_counter = 0
            return MoveDecision.NONE

        if self.momentum_counter > config.movement_count:
            logger.debug("Forward momentum reached (%d)", self.momentum_counter)
            return MoveDecision.FORWARD
        if self.momentum_counter < -config.movement_count:
            logger.debug("Backward momentum reached (%d)", self.momentum_counter)
            return MoveDecision.BACKWARD

        return MoveDecision.NONE

    @staticmethod
    def on_button(code: int, value: NumberLike) -> MoveDecision:
        """
        Map a button press directly to a move, bypassing momentum.

        Args:
            code: Button code
            value: Button value, positive when pressed

        Returns:
            The move to attempt, if any
        """
        if value <= 0:
            return MoveDecision.NONE
        if code == InputEventCodes.MOVE_FORWARD_BUTTON:
            return MoveDecision.FORWARD
        if code == InputEventCodes.MOVE_BACKWARD_BUTTON:
            return MoveDecision.BACKWARD
        return MoveDecision.NONE
