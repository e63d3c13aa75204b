# stereonet.py
import logging

from .config import StereonetOptions
from .layout import LayoutController, resolve_container
from .plotly_surface import PlotlySurface
from .registry import FeatureRegistry
from .styles import StyleTable

logger = logging.getLogger(__name__)


class Stereonet:
    """
    Equal-area stereonet of planes and lines.

    Either pass a StereonetOptions or the same fields as keywords:

        net = Stereonet(selector="#stereo_graph", size=900)
        net.add_plane(30, 45)
        net.add_line(83.2, 257)
        net.set_plane_representation("pole")

    Without an explicit surface the net is drawn to a plotly Figure,
    available as `net.figure`.
    """

    def __init__(self, options=None, surface=None, **kwargs):
        options = (options or StereonetOptions(**kwargs)).validate()
        self.options = options
        self.container = resolve_container(options.selector, options.container)
        self.styles = StyleTable(options.style)
        if surface is None:
            surface = PlotlySurface(self.styles, point_size=options.point_size)
        self.surface = surface
        width = options.size or self.container.width
        self.registry = FeatureRegistry(
            surface,
            self.styles,
            representation=options.plane_representation,
            point_size=options.point_size,
            animation_duration=options.animation_duration,
        )
        self.layout = LayoutController(surface, self.registry, width, options.show_graticules)
        self.layout.render()
        self._subscription = self.container.subscribe(self._on_container_resize)
        logger.info("Stereonet created in %r (%s px)", self.container, width)

    # -------------------------
    # Size
    # -------------------------
    @property
    def width(self):
        return self.layout.width

    @property
    def height(self):
        return self.layout.height

    @property
    def scale(self):
        return self.layout.scale

    @property
    def figure(self):
        return getattr(self.surface, "figure", None)

    def _on_container_resize(self, width):
        self.resize(width)

    def resize(self, width=None):
        self.layout.resize(width if width is not None else self.container.width)

    def close(self):
        """Stop following container resizes."""
        self._subscription.unsubscribe()

    # -------------------------
    # Features
    # -------------------------
    def add_plane(self, dip_angle, dip_direction):
        return self.registry.add_plane(dip_angle, dip_direction)

    def remove_plane(self, plane_id):
        self.registry.remove_plane(plane_id)

    def get_planes(self):
        return self.registry.get_planes()

    def add_line(self, dip_angle, dip_direction):
        return self.registry.add_line(dip_angle, dip_direction)

    def remove_line(self, line_id):
        self.registry.remove_line(line_id)

    def get_lines(self):
        return self.registry.get_lines()

    @property
    def plane_representation(self):
        return self.registry.representation

    def set_plane_representation(self, mode):
        self.registry.set_representation(mode)

    # -------------------------
    # Styles & graticules
    # -------------------------
    def get_style(self, class_name):
        return self.registry.get_style(class_name)

    def set_style(self, class_name, style_spec):
        self.registry.set_style(class_name, style_spec)

    def style_string(self, class_name):
        return self.styles.css(class_name)

    @property
    def graticules_visible(self):
        return self.layout.graticules_visible

    def toggle_graticules(self, visible=None):
        return self.layout.toggle_graticules(visible)

    def show_graticules(self):
        self.toggle_graticules(True)

    def hide_graticules(self):
        self.toggle_graticules(False)

    # -------------------------
    # Hover
    # -------------------------
    def hover(self, handle):
        """Emphasise a data primitive; returns its (kind, feature) or None."""
        found = self.registry.find_handle(handle)
        if found is None:
            return None
        self.surface.on_hover(handle, found[1].measurement)
        return found

    def hover_end(self, handle):
        if self.registry.find_handle(handle) is not None:
            self.surface.on_hover_end(handle)
