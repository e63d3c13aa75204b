# features.py
from dataclasses import dataclass
from typing import Any, Optional

from .config import Representation

PLANE = "plane"
LINE = "line"


@dataclass(frozen=True)
class Measurement:
    """Dip angle (0-90) and dip direction (0-360, clockwise from north), in degrees."""
    dip_angle: float
    dip_direction: float


@dataclass(frozen=True)
class PoleCoordinates:
    dip_direction: float
    complement: float


@dataclass
class PlaneFeature:
    id: int
    measurement: Measurement
    representation: Representation
    handle: Optional[Any] = None


@dataclass
class LineFeature:
    id: int
    measurement: Measurement
    handle: Optional[Any] = None


@dataclass(frozen=True)
class HoverHandler:
    """Hover binding for one plotted feature, handed to the drawing surface."""
    feature_id: int
    kind: str
    style_class: str
    measurement: Measurement

    def text(self):
        m = self.measurement
        return f"Dip: {m.dip_angle}°, Dip Direction: {m.dip_direction}°"
