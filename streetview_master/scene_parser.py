"""
Scene parsing utilities for the Street View master.

A scene message lists windows, each naming an activity and its assets. The
Street View window carries a single asset field:

- Pano only:        "<panoid>"
- Pano and pov:     "<panoid>,<heading>[,<pitch>]"

The field is parsed completely before anything is applied, so a malformed
field never causes a partial pano or pov change.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import ValidationError

from .domain import Pano, Pov
from .wire_models import Scene

SCENE_FIELD_SEPARATOR = ","
SCENE_FIELD_MAX_PARTS = 3


class SceneParsingError(Exception):
    """Exception raised when scene parsing fails."""

    pass


@dataclass(frozen=True)
class SceneSelection:
    """Pano and optional orientation selected by a scene."""

    pano_id: str
    heading: Optional[float] = None
    pitch: Optional[float] = None

    @property
    def pano(self) -> Pano:
        return Pano(self.pano_id)

    def resolve_pov(self, current: Optional[Pov]) -> Pov:
        """
        Combine the selected orientation with the current one.

        Args:
            current: Current point of view, if any

        Returns:
            Point of view with missing components taken from ``current``
        """
        base = current if current is not None else Pov(0.0, 0.0)
        heading = self.heading if self.heading is not None else base.heading
        pitch = self.pitch if self.pitch is not None else base.pitch
        return Pov(heading, pitch)


class SceneParser:
    """Parser for Street View scene selections."""

    def __init__(self, activity: str = "streetview") -> None:
        """
        Initialize the scene parser.

        Args:
            activity: Activity name of the Street View window
        """
        self.activity = activity

    def parse_scene(
        self, message: Mapping[str, object] | str
    ) -> Optional[SceneSelection]:
        """
        Parse a scene message.

        Supported inputs:
        - JSON string: '{"windows": [{"activity": "streetview", "assets": ["..."]}]}'
        - Mapping with the same structure

        Returns the selection of the first Street View window, or None when
        the scene has no Street View window.
        """
        scene = self._validate_scene(message)

        for window in scene.windows:
            if window.activity != self.activity:
                continue
            if not window.assets:
                raise SceneParsingError(
                    f"Scene window for '{self.activity}' has no assets"
                )
            return self.parse_field(window.assets[0])

        return None

    def parse_field(self, scene_field: str) -> SceneSelection:
        """
        Parse a ``panoid[,heading[,pitch]]`` asset field.

        Args:
            scene_field: Comma separated field

        Returns:
            Parsed scene selection
        """
        if not isinstance(scene_field, str):
            raise SceneParsingError(
                f"Scene field must be a string, got {type(scene_field)}"
            )

        parts = scene_field.split(SCENE_FIELD_SEPARATOR, SCENE_FIELD_MAX_PARTS - 1)

        pano_id = parts[0].strip()
        if not pano_id:
            raise SceneParsingError(f"Scene field has no panorama id: {scene_field!r}")

        heading = None
        pitch = None
        if len(parts) > 1:
            heading = self._parse_angle(parts[1], name="heading")
        if len(parts) > 2:
            pitch = self._parse_angle(parts[2], name="pitch")

        return SceneSelection(pano_id=pano_id, heading=heading, pitch=pitch)

    def _validate_scene(self, message: Mapping[str, object] | str) -> Scene:
        """Coerce supported scene inputs into a validated model."""

        candidate: Any = message
        if isinstance(message, str):
            try:
                candidate = json.loads(message.strip())
            except json.JSONDecodeError as exc:
                raise SceneParsingError(f"Invalid JSON string: {exc}") from exc

        if not isinstance(candidate, Mapping):
            raise SceneParsingError(
                f"Scene must be mapping or JSON string, got {type(candidate)}"
            )

        try:
            return Scene.model_validate(dict(candidate))
        except ValidationError as exc:
            raise SceneParsingError(f"Invalid scene message: {exc}") from exc

    @staticmethod
    def _parse_angle(raw: str, *, name: str) -> float:
        """Parse one numeric component of a scene field."""
        try:
            value = float(raw)
        except ValueError as exc:
            raise SceneParsingError(f"Scene {name} must be numeric: {raw!r}") from exc
        if not math.isfinite(value):
            raise SceneParsingError(f"Scene {name} must be finite: {raw!r}")
        return value
