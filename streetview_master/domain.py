"""
Value types describing Street View navigation state.

Panoramas, points of view and links are immutable; mutation happens only by
replacing values held by :class:`~streetview_master.navigation_state.NavigationState`.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .types import LinkPayload, PanoPayload, PovPayload
from .wire_models import LinkMessage, LinksMessage, PanoMessage, PovMessage


@dataclass(frozen=True)
class Pano:
    """A panorama, identified by an opaque id."""

    pano_id: str

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> "Pano":
        """Build from a ``{"panoid": ...}`` mapping."""
        message = PanoMessage.model_validate(payload)
        return cls(pano_id=message.panoid)

    def to_payload(self) -> PanoPayload:
        return {"panoid": self.pano_id}


@dataclass(frozen=True)
class Pov:
    """Viewing orientation in degrees. Pitch is not clamped here."""

    heading: float = 0.0
    pitch: float = 0.0

    def translate(self, heading_delta: float, pitch_delta: float) -> "Pov":
        """
        Return this orientation rotated by the given deltas.

        Args:
            heading_delta: Degrees added to the heading
            pitch_delta: Degrees added to the pitch

        Returns:
            New point of view
        """
        return Pov(self.heading + heading_delta, self.pitch + pitch_delta)

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> "Pov":
        """Build from a ``{"heading": ..., "pitch": ...}`` mapping."""
        message = PovMessage.model_validate(payload)
        return cls(heading=message.heading, pitch=message.pitch)

    def to_payload(self) -> PovPayload:
        return {"heading": self.heading, "pitch": self.pitch}


@dataclass(frozen=True)
class Link:
    """A neighbor panorama and the heading at which it departs."""

    pano: Pano
    heading: float

    @classmethod
    def from_message(cls, message: LinkMessage) -> "Link":
        return cls(pano=Pano(message.pano), heading=message.heading)

    def to_payload(self) -> LinkPayload:
        return {"pano": self.pano.pano_id, "heading": self.heading}


@dataclass(frozen=True)
class LinkSet:
    """
    Ordered links available from one panorama.

    An empty link set is a valid dead end. ``pano`` names the panorama the
    links were computed for when the producer reported it.
    """

    links: Tuple[Link, ...] = field(default_factory=tuple)
    pano: Optional[Pano] = None

    @classmethod
    def of(cls, links: Iterable[Link], pano: Optional[Pano] = None) -> "LinkSet":
        """Build a link set from any iterable of links."""
        return cls(links=tuple(links), pano=pano)

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, object] | Sequence[Mapping[str, object]],
        pano: Optional[Pano] = None,
    ) -> "LinkSet":
        """
        Build from a links message.

        Accepts either a bare list of ``{"pano", "heading"}`` entries or a
        mapping with ``links`` and an optional ``pano`` id. An explicit
        ``pano`` argument is used when the payload names none.
        """
        if isinstance(payload, Mapping):
            message = LinksMessage.model_validate(payload)
        else:
            message = LinksMessage.model_validate({"links": list(payload)})

        owner = Pano(message.pano) if message.pano else pano
        return cls.of((Link.from_message(link) for link in message.links), owner)

    def __iter__(self) -> Iterator[Link]:
        return iter(self.links)

    def __len__(self) -> int:
        return len(self.links)

    def __bool__(self) -> bool:
        # An empty link set is still a link set.
        return True
