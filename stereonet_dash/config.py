# config.py
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Optional

from .errors import ConfigurationError, InvalidRepresentationError

# -------------------------
# Layout constants
# -------------------------
DEFAULT_ANIMATION_MS = 300
DEFAULT_POINT_SIZE = 5
ARC_BAND_WIDTH = 1.0         # degrees between the meridians drawn for one plane
SAMPLE_PRECISION = 1.0       # degrees between samples along meridians/parallels
GRATICULE_MINOR_STEP = 2.0
GRATICULE_MAJOR_STEP = 10.0
CROSSHAIR_HALF_EXTENT = 5.49
CARDINAL_VALUES = ["N", "E", "S", "W"]
CARDINAL_OFFSET = 1.06       # label radius as a fraction of the outline radius
HOVER_STROKE_WIDTH = 10
HOVER_OPACITY = 0.6
HOVER_POINT_FACTOR = 1.7


class Representation(StrEnum):
    """How planes are drawn: a great-circle arc or the point of their pole."""
    ARC = "arc"
    POLE = "pole"


def coerce_representation(mode):
    try:
        return Representation(mode)
    except ValueError:
        raise InvalidRepresentationError(
            f'Invalid representation type: {mode}. Use "pole" or "arc".'
        ) from None


@dataclass
class StereonetOptions:
    """Options recognised when a stereonet is created."""
    selector: Optional[str] = None
    container: Any = None
    size: Optional[float] = None
    style: dict = field(default_factory=dict)
    animations: Any = field(default_factory=lambda: {"duration": DEFAULT_ANIMATION_MS})
    show_graticules: bool = True
    plane_representation: str = Representation.ARC
    point_size: float = DEFAULT_POINT_SIZE

    def validate(self):
        if self.selector is None and self.container is None:
            raise ConfigurationError(
                "Either 'selector' or 'container' must be provided to initialize Stereonet."
            )
        if self.selector is not None and self.container is not None:
            raise ConfigurationError("Provide only one of 'selector' or 'container'.")
        if self.size is not None and self.size <= 0:
            raise ConfigurationError(f"Size must be positive ({self.size} provided).")
        if self.point_size < 0:
            raise ConfigurationError(f"Point size must not be negative ({self.point_size} provided).")
        if self.animation_duration < 0:
            raise ConfigurationError("Animation duration must not be negative.")
        self.plane_representation = coerce_representation(self.plane_representation)
        return self

    @property
    def animation_duration(self):
        """Duration in ms, 0 when animations are disabled."""
        if not self.animations:
            return 0
        return self.animations.get("duration", DEFAULT_ANIMATION_MS)
