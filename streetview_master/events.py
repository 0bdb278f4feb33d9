"""
Inbound events handled by the Street View master.

Every message the master reacts to is decoded into one of a fixed set of
event classes. Decoding validates the payload completely, so handlers only
ever see well formed values.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from .config import ChannelConfig
from .domain import LinkSet, Pano, Pov
from .scene_parser import SceneParser, SceneParsingError, SceneSelection
from .wire_models import InputAbsMessage, InputKeyMessage


class EventDecodingError(Exception):
    """Exception raised when an inbound message cannot be decoded."""

    pass


class UnknownChannelError(EventDecodingError):
    """Raised for messages on channels the master does not listen to."""

    pass


@dataclass(frozen=True)
class LinksUpdate:
    """Links for the current pano, reported by the browser."""

    links: LinkSet


@dataclass(frozen=True)
class PovUpdate:
    """Point of view set by an external producer."""

    pov: Pov


@dataclass(frozen=True)
class PanoUpdate:
    """Pano set by an external producer."""

    pano: Pano


@dataclass(frozen=True)
class RefreshRequest:
    """Request to re-broadcast the current state."""


@dataclass(frozen=True)
class ButtonEvent:
    """Input device button state change."""

    code: int
    value: int


@dataclass(frozen=True)
class AxisEvent:
    """Input device axis values, keyed by axis code."""

    values: Dict[int, float] = field(default_factory=dict)


@dataclass(frozen=True)
class SceneSelect:
    """Scene selecting a pano and optionally an orientation."""

    selection: SceneSelection


InboundEvent = Union[
    LinksUpdate,
    PovUpdate,
    PanoUpdate,
    RefreshRequest,
    ButtonEvent,
    AxisEvent,
    SceneSelect,
]

INPUT_EVENTS = (ButtonEvent, AxisEvent)


class EventDecoder:
    """Decode channel messages into inbound events."""

    def __init__(self, channels: Optional[ChannelConfig] = None) -> None:
        """
        Initialize the decoder.

        Args:
            channels: Channel names to listen on
        """
        self.channels = channels or ChannelConfig()
        self.scene_parser = SceneParser(activity=self.channels.scene_activity)

    def decode(self, channel: str, message: Any) -> Optional[InboundEvent]:
        """
        Decode one message.

        Args:
            channel: Channel the message arrived on
            message: Decoded JSON payload

        Returns:
            The event, or None for a scene without a Street View window

        Raises:
            UnknownChannelError: If nothing listens on ``channel``
            EventDecodingError: If the payload is malformed
        """
        channels = self.channels
        try:
            if channel == channels.links:
                return LinksUpdate(LinkSet.from_payload(self._links_payload(message)))
            if channel == channels.pov:
                return PovUpdate(Pov.from_payload(self._mapping(message, channel)))
            if channel == channels.pano:
                return PanoUpdate(Pano.from_payload(self._mapping(message, channel)))
            if channel == channels.refresh:
                return RefreshRequest()
            if channel == channels.key:
                key = InputKeyMessage.model_validate(self._mapping(message, channel))
                return ButtonEvent(code=key.code, value=key.value)
            if channel == channels.abs:
                axes = InputAbsMessage.model_validate(self._mapping(message, channel))
                return AxisEvent(values=axes.as_axis_values())
            if channel == channels.scene:
                selection = self.scene_parser.parse_scene(message)
                return SceneSelect(selection) if selection is not None else None
        except ValidationError as exc:
            raise EventDecodingError(
                f"Invalid message on channel '{channel}': {exc}"
            ) from exc
        except SceneParsingError as exc:
            raise EventDecodingError(
                f"Invalid scene on channel '{channel}': {exc}"
            ) from exc

        raise UnknownChannelError(f"No handler for channel '{channel}'")

    @staticmethod
    def _mapping(message: Any, channel: str) -> Mapping[str, object]:
        if not isinstance(message, Mapping):
            raise EventDecodingError(
                f"Message on channel '{channel}' must be a mapping, got {type(message)}"
            )
        return message

    @staticmethod
    def _links_payload(
        message: Any,
    ) -> Mapping[str, object] | Sequence[Mapping[str, object]]:
        if isinstance(message, Mapping):
            return message
        if isinstance(message, Sequence) and not isinstance(message, (str, bytes)):
            return message
        raise EventDecodingError(
            f"Links message must be a mapping or list, got {type(message)}"
        )
