# render.py
from abc import ABC, abstractmethod
from enum import StrEnum


class PrimitiveKind(StrEnum):
    ARC = "arc"        # polyline(s): great circles, graticules, outline
    POINT = "point"    # poles and lines
    LABEL = "label"    # cardinal text


class RenderAdapter(ABC):
    """
    Drawing surface the stereonet emits geometry to.

    Handles returned by create_primitive are opaque to the caller; the
    surface owns the visual resource behind them. Geometry is passed in its
    canonical orientation together with the rotation (degrees, clockwise
    about the plot centre) the surface must apply.
    """

    @abstractmethod
    def create_primitive(self, kind, geometry, style_class, rotation=0.0, handler=None):
        """Draw a primitive and return its handle."""

    @abstractmethod
    def update_primitive(self, handle, geometry=None, rotation=None, style_class=None,
                         visible=None):
        """Change any of geometry, rotation, style or visibility of a live primitive."""

    @abstractmethod
    def dispose_primitive(self, handle):
        """Remove a primitive. Unknown handles are ignored."""

    @abstractmethod
    def clear(self):
        """Remove every primitive."""

    def resize(self, width, height):
        pass

    # Optional presentation hooks; the defaults disable them.
    def animate(self, handle, from_state, to_state, duration_ms):
        pass

    def on_hover(self, handle, measurement=None):
        pass

    def on_hover_end(self, handle):
        pass
