"""Pydantic models for inbound Street View and input device messages."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, model_validator


class PanoMessage(BaseModel):
    """Panorama identity."""
    panoid: str = Field(min_length=1)

    model_config = {"extra": "ignore"}


class PovMessage(BaseModel):
    """Point of view; pitch defaults to level."""
    heading: float
    pitch: float = 0.0

    model_config = {"extra": "ignore", "allow_inf_nan": False}


class LinkMessage(BaseModel):
    """A link to a neighboring panorama with its departure heading."""
    pano: str = Field(min_length=1)
    heading: float

    model_config = {"extra": "ignore", "allow_inf_nan": False}


class LinksMessage(BaseModel):
    """Links of a panorama, in browser order."""
    pano: Optional[str] = None
    links: List[LinkMessage] = Field(default_factory=list)

    model_config = {"extra": "ignore"}


class InputKeyMessage(BaseModel):
    """EV_KEY state change for a single button."""
    code: int
    value: int

    model_config = {"extra": "ignore"}


class InputAbsMessage(BaseModel):
    """EV_ABS update, either one axis or a snapshot of several axes."""
    code: Optional[int] = None
    value: Optional[float] = None
    values: Dict[int, float] = Field(default_factory=dict)

    model_config = {"extra": "ignore", "allow_inf_nan": False}

    @model_validator(mode="after")
    def require_axis_data(self) -> "InputAbsMessage":
        if (self.code is None) != (self.value is None):
            raise ValueError("Axis update requires both 'code' and 'value'")
        if self.code is None and not self.values:
            raise ValueError("Axis update carries no axis values")
        return self

    def as_axis_values(self) -> Dict[int, float]:
        """Flatten into a code to value mapping."""
        merged = dict(self.values)
        if self.code is not None and self.value is not None:
            merged[self.code] = self.value
        return merged


class SceneWindow(BaseModel):
    """A window in a scene; ``assets`` carry activity specific data."""
    activity: str
    assets: List[str] = Field(default_factory=list)

    model_config = {"extra": "ignore"}


class Scene(BaseModel):
    """Scene message describing what each activity should show."""
    windows: List[SceneWindow] = Field(default_factory=list)

    model_config = {"extra": "ignore"}
