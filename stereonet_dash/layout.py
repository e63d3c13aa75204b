# layout.py
import logging

from .config import GRATICULE_MAJOR_STEP, GRATICULE_MINOR_STEP
from .errors import ConfigurationError
from .projection import (
    cardinal_geometry,
    crosshair_geometry,
    graticule_geometry,
    outline_geometry,
    projection_scale,
)
from .render import PrimitiveKind

logger = logging.getLogger(__name__)

_CONTAINERS = {}

GRATICULE_PARTS = ("graticule", "graticule_10", "graticule_outline")


# -------------------------
# Container & resize subscription
# -------------------------
class Subscription:
    def __init__(self, container, callback):
        self._container = container
        self.callback = callback

    @property
    def active(self):
        return self._container is not None

    def unsubscribe(self):
        if self._container is None:
            return
        self._container._subscriptions.discard(self)
        self._container = None


class Container:
    """
    Something the stereonet is drawn into: an id other code can refer to
    and a width that changes over time. Size changes go out to subscribers.
    """

    def __init__(self, id, width):
        if width <= 0:
            raise ConfigurationError(f"Container width must be positive ({width} provided).")
        self.id = id
        self.width = width
        self._subscriptions = set()
        _CONTAINERS[id] = self

    def __repr__(self):
        return f"Container({self.id!r}, width={self.width})"

    @classmethod
    def lookup(cls, selector):
        return _CONTAINERS.get(selector.lstrip("#"))

    def close(self):
        """Forget this container: selectors stop resolving to it."""
        if _CONTAINERS.get(self.id) is self:
            del _CONTAINERS[self.id]

    def subscribe(self, callback):
        subscription = Subscription(self, callback)
        self._subscriptions.add(subscription)
        return subscription

    @property
    def subscriber_count(self):
        return len(self._subscriptions)

    def resize(self, width):
        if width <= 0:
            raise ConfigurationError(f"Container width must be positive ({width} provided).")
        self.width = width
        for subscription in list(self._subscriptions):
            subscription.callback(width)


def resolve_container(selector=None, container=None):
    if container is not None:
        return container
    if selector is not None:
        found = Container.lookup(selector)
        if found is not None:
            return found
        raise ConfigurationError(f"No container matches selector {selector!r}.")
    raise ConfigurationError(
        "Either 'selector' or 'container' must be provided to initialize Stereonet."
    )


# -------------------------
# Layout / resize
# -------------------------
class LayoutController:
    """Owns plot size and scale, the reference net, and full rebuilds on resize."""

    def __init__(self, surface, registry, width, show_graticules=True):
        self.surface = surface
        self.registry = registry
        self.graticules_visible = show_graticules
        self._base = {}
        self.width = self.height = width

    @property
    def scale(self):
        return projection_scale(self.width)

    def _create(self, name, kind, geometry, style_class):
        self._base[name] = self.surface.create_primitive(kind, geometry, style_class)

    def render_graticules(self):
        scale = self.scale
        self._create("graticule", PrimitiveKind.ARC,
                     graticule_geometry(GRATICULE_MINOR_STEP, scale), "graticule")
        self._create("graticule_10", PrimitiveKind.ARC,
                     graticule_geometry(GRATICULE_MAJOR_STEP, scale), "graticule_10_deg")
        self._create("graticule_outline", PrimitiveKind.ARC, outline_geometry(scale), "outline")

    def render_outline(self):
        scale = self.scale
        self._create("crosshairs", PrimitiveKind.ARC, crosshair_geometry(scale), "crosshairs")
        self._create("outline", PrimitiveKind.ARC, outline_geometry(scale), "outline")
        self._create("cardinal", PrimitiveKind.LABEL, cardinal_geometry(scale), "cardinal")

    def render(self):
        """Build the whole plot from scratch at the current size."""
        self.surface.clear()
        self._base.clear()
        self.surface.resize(self.width, self.height)
        self.registry.scale = self.scale
        if self.graticules_visible:
            self.render_graticules()
        self.render_outline()
        self.registry.redraw_all(self.scale)

    def resize(self, width):
        # square plot: height follows width
        self.width = self.height = width
        logger.debug("Resizing stereonet to %s", width)
        self.render()

    def toggle_graticules(self, visible=None):
        show = (not self.graticules_visible) if visible is None else bool(visible)
        self.graticules_visible = show
        if show and "graticule" not in self._base:
            # rebuild so the graticule stays beneath the data
            self.render()
            return show
        for name in GRATICULE_PARTS:
            handle = self._base.get(name)
            if handle is not None:
                self.surface.update_primitive(handle, visible=show)
        return show
