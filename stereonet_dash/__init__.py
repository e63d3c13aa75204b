"""Equal-area stereonet of structural planes and lines, drawn with plotly."""
from .config import Representation, StereonetOptions
from .errors import (
    ConfigurationError,
    DataFormatError,
    InvalidRepresentationError,
    StereonetError,
    StyleNotFoundError,
)
from .features import Measurement
from .layout import Container
from .stereonet import Stereonet

__all__ = [
    "ConfigurationError",
    "Container",
    "DataFormatError",
    "InvalidRepresentationError",
    "Measurement",
    "Representation",
    "Stereonet",
    "StereonetError",
    "StereonetOptions",
    "StyleNotFoundError",
]
