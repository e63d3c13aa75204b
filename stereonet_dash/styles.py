# styles.py
import logging

from .errors import StyleNotFoundError

logger = logging.getLogger(__name__)

# -------------------------
# Default style table (CSS-like keys, translated by the drawing surface)
# -------------------------
DEFAULT_STYLE = {
    "outline": {
        "fill": "none",
        "stroke": "#000",
        "stroke-width": "4px",
        "stroke-opacity": 0.5,
    },
    "graticule": {
        "fill": "none",
        "stroke": "#777",
        "stroke-width": ".5px",
        "stroke-opacity": 0.5,
    },
    "graticule_10_deg": {
        "stroke": "#000",
        "stroke-width": 0.6,
        "fill": "none",
    },
    "crosshairs": {
        "stroke": "#000",
        "stroke-width": 1,
        "fill": "none",
    },
    "data_plane": {
        "stroke": "#d14747",
        "stroke-width": 3,
        "fill": "none",
    },
    "data_plane_pole": {
        "fill": "#d14747",
        "stroke": "#d14747",
        "stroke-width": 2,
        "stroke-opacity": 0.5,
        "fill-opacity": 1,
    },
    "data_line": {
        "fill": "#0328fc",
        "stroke": "#0328fc",
        "stroke-width": 2,
        "stroke-opacity": 0.5,
        "fill-opacity": 1,
    },
    "cardinal": {
        "fill": "#000",
        "font-size": "12px",
        "text-anchor": "middle",
    },
}


def px(value, default=1.0):
    """'4px', '.5px', 3 -> float pixels."""
    if value is None:
        return default
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    if text.endswith("px"):
        text = text[:-2]
    return float(text)


class StyleTable:
    """
    Style lookup keyed by feature class name.

    User entries replace the default entry of the same class wholesale;
    classes the user does not mention keep their defaults.
    """

    def __init__(self, overrides=None):
        self._styles = {name: dict(spec) for name, spec in DEFAULT_STYLE.items()}
        for name, spec in (overrides or {}).items():
            self._styles[name] = dict(spec)

    def __contains__(self, class_name):
        return class_name in self._styles

    def get(self, class_name):
        try:
            return dict(self._styles[class_name])
        except KeyError:
            raise StyleNotFoundError(f'Style for class "{class_name}" not found.') from None

    def set(self, class_name, style_spec):
        logger.debug("Style for class %r set to %r", class_name, style_spec)
        self._styles[class_name] = dict(style_spec)

    def css(self, class_name):
        return " ".join(f"{key}: {value};" for key, value in self.get(class_name).items())
