"""
Street View master: authoritative navigation state and input handling.

The master reconciles updates from the browser, the input device and scene
selections into one navigation state and broadcasts pano and pov changes.

Session states:

- running: state updates and refresh requests are always handled.
- active: input device events (buttons and axes) are handled as well.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Dict, Optional

from .config import MasterConfig
from .domain import LinkSet, Pano, Pov
from .events import (
    INPUT_EVENTS,
    AxisEvent,
    ButtonEvent,
    EventDecoder,
    EventDecodingError,
    InboundEvent,
    LinksUpdate,
    PanoUpdate,
    PovUpdate,
    RefreshRequest,
    SceneSelect,
    UnknownChannelError,
)
from .geometry_utils import GeometryUtils
from .momentum import InputEventCodes, MomentumInputTranslator, MoveDecision
from .navigation_state import NavigationState
from .types import Clock, Millis, Publisher

logger = logging.getLogger(__name__)


def monotonic_millis() -> Millis:
    """Default clock, in milliseconds."""
    return time.monotonic() * 1000.0


class StreetviewMaster:
    """
    Owner of one viewer session's navigation state and input translator.

    All events are serialized through a single lock; the navigation state
    and the momentum state are never mutated concurrently.
    """

    def __init__(
        self,
        config: Optional[MasterConfig] = None,
        publisher: Optional[Publisher] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        """
        Initialize the master.

        Args:
            config: Session configuration
            publisher: Callable receiving ``(channel, payload)`` broadcasts
            clock: Callable returning the current time in milliseconds
        """
        self.config = config or MasterConfig()
        self._publisher = publisher
        self._clock: Clock = clock or monotonic_millis
        self._lock = threading.RLock()

        self._decoder = EventDecoder(self.config.channel_config)
        self._state = NavigationState(
            Pov(self.config.initial_heading, self.config.initial_pitch)
        )
        self._translator = MomentumInputTranslator(
            self.config.input_config, now=self._clock()
        )
        self._axis_values: Dict[int, float] = {}
        self._active = self.config.start_active

    # --- State access ---
    @property
    def pano(self) -> Optional[Pano]:
        return self._state.pano

    @property
    def pov(self) -> Optional[Pov]:
        return self._state.pov

    @property
    def links(self) -> Optional[LinkSet]:
        return self._state.links

    @property
    def links_dirty(self) -> bool:
        return self._state.links_dirty

    @property
    def translator(self) -> MomentumInputTranslator:
        return self._translator

    @property
    def is_active(self) -> bool:
        return self._active

    # --- Activation ---
    def activate(self) -> None:
        """Start handling input device events. Momentum starts from rest."""
        with self._lock:
            self._active = True
            self._axis_values.clear()
            self._translator.reset(self._clock())
        logger.info("Street View input activated")

    def deactivate(self) -> None:
        """Stop handling input device events."""
        with self._lock:
            self._active = False
        logger.info("Street View input deactivated")

    # --- Inbound ---
    def handle_message(self, channel: str, message: Any) -> bool:
        """
        Decode and handle a message from a channel.

        Args:
            channel: Channel name
            message: Decoded JSON payload

        Returns:
            True if anything was broadcast
        """
        try:
            event = self._decoder.decode(channel, message)
        except UnknownChannelError:
            logger.warning("Ignoring message on unknown channel %s", channel)
            return False
        except EventDecodingError as exc:
            if channel == self.config.channel_config.scene:
                logger.error("Error while parsing scene message: %s", exc)
            else:
                logger.warning("Dropping undecodable message: %s", exc)
            return False

        if event is None:
            return False

        return self.handle_event(event)

    def handle_event(self, event: InboundEvent) -> bool:
        """
        Apply one inbound event to the session.

        Args:
            event: Decoded event

        Returns:
            True if anything was broadcast
        """
        with self._lock:
            if isinstance(event, INPUT_EVENTS) and not self._active:
                logger.debug("Inactive; dropping %s", type(event).__name__)
                return False

            if isinstance(event, LinksUpdate):
                return self._on_links(event)
            if isinstance(event, PovUpdate):
                self._state.set_pov(event.pov)
                return False
            if isinstance(event, PanoUpdate):
                return self._on_pano(event)
            if isinstance(event, RefreshRequest):
                return self._on_refresh()
            if isinstance(event, ButtonEvent):
                return self._on_button(event)
            if isinstance(event, AxisEvent):
                return self._on_axes(event)
            if isinstance(event, SceneSelect):
                return self._on_scene(event)

        raise TypeError(f"Unsupported event type: {type(event).__name__}")

    def _on_links(self, event: LinksUpdate) -> bool:
        links = event.links
        if links.pano is None:
            links = LinkSet(links.links, self._state.pano)
        elif links.pano != self._state.pano:
            logger.debug(
                "Applying links reported for %s while on %s",
                links.pano,
                self._state.pano,
            )
        self._state.set_links(links)
        return False

    def _on_pano(self, event: PanoUpdate) -> bool:
        if self._state.set_pano(event.pano):
            logger.debug("Pano set externally to %s", event.pano.pano_id)
            self._translator.reset(self._clock())
        return False

    def _on_refresh(self) -> bool:
        broadcast = False
        if self._state.pano is not None:
            self._broadcast_pano()
            broadcast = True
        if self._state.pov is not None:
            self._broadcast_pov()
            broadcast = True
        return broadcast

    def _on_button(self, event: ButtonEvent) -> bool:
        decision = self._translator.on_button(event.code, event.value)
        return self._apply_move(decision)

    def _on_axes(self, event: AxisEvent) -> bool:
        """
        Merge the axis update into the held snapshot and evaluate yaw and momentum.

        Every axis message counts as one momentum sample, so how fast momentum
        builds depends on how often the device sends axis messages.
        """
        self._axis_values.update(event.values)
        values = self._axis_values
        broadcast = False

        yaw = self._translator.on_yaw_sample(values.get(InputEventCodes.YAW_AXIS, 0))
        if yaw is not None and self._state.pov is not None:
            self._state.set_pov(self._state.pov.translate(yaw, 0))
            self._broadcast_pov()
            broadcast = True

        axis_a, axis_b = InputEventCodes.MOMENTUM_AXES
        decision = self._translator.on_momentum_sample(
            values.get(axis_a, 0), values.get(axis_b, 0), self._clock()
        )
        if self._apply_move(decision):
            broadcast = True

        return broadcast

    def _on_scene(self, event: SceneSelect) -> bool:
        selection = event.selection
        logger.info("Street View scene")
        logger.info("Setting pano to %s", selection.pano_id)

        self._state.set_pano(selection.pano)
        self._broadcast_pano()

        self._state.set_pov(selection.resolve_pov(self._state.pov))
        self._broadcast_pov()
        return True

    def _apply_move(self, decision: MoveDecision) -> bool:
        if decision is MoveDecision.FORWARD:
            moved = self._state.move_forward()
        elif decision is MoveDecision.BACKWARD:
            moved = self._state.move_backward()
        else:
            return False

        if not moved:
            return False

        heading = self._state.pov.heading if self._state.pov is not None else 0.0
        logger.info(
            "Moved %s to %s (heading %.1f)",
            decision.value,
            self._state.pano,
            GeometryUtils.normalize_heading(heading),
        )
        self._broadcast_pano()
        return True

    # --- Outbound ---
    def _broadcast_pano(self) -> None:
        pano = self._state.pano
        if pano is None:
            return
        self._publish(self.config.channel_config.pano, pano.to_payload())
        # momentum never carries across a pano change
        self._translator.reset(self._clock())

    def _broadcast_pov(self) -> None:
        pov = self._state.pov
        if pov is None:
            return
        self._publish(self.config.channel_config.pov, pov.to_payload())

    def _publish(self, channel: str, payload: Any) -> None:
        if self._publisher is None:
            return
        try:
            self._publisher(channel, payload)
        except Exception as exc:
            logger.warning("Publisher failed on channel %s: %s", channel, exc)
