import itertools

import pytest

from stereonet_dash import Container, Stereonet
from stereonet_dash.registry import FeatureRegistry
from stereonet_dash.render import RenderAdapter
from stereonet_dash.styles import StyleTable


class RecordingSurface(RenderAdapter):
    """In-memory surface that keeps every call it receives."""

    def __init__(self):
        self.live = {}
        self.disposed = []
        self.animations = []
        self.hover_events = []
        self.cleared = 0
        self.size = None
        self.fail_after = None
        self.created = 0
        self._ids = itertools.count()

    def create_primitive(self, kind, geometry, style_class, rotation=0.0, handler=None):
        if self.fail_after is not None and self.created >= self.fail_after:
            raise RuntimeError("surface failure")
        self.created += 1
        handle = f"h{next(self._ids)}"
        self.live[handle] = dict(kind=kind, geometry=geometry, style_class=style_class,
                                 rotation=rotation, handler=handler, visible=True)
        return handle

    def update_primitive(self, handle, geometry=None, rotation=None, style_class=None,
                         visible=None):
        record = self.live[handle]
        for key, value in (("geometry", geometry), ("rotation", rotation),
                           ("style_class", style_class), ("visible", visible)):
            if value is not None:
                record[key] = value

    def dispose_primitive(self, handle):
        if self.live.pop(handle, None) is not None:
            self.disposed.append(handle)

    def clear(self):
        self.live.clear()
        self.cleared += 1

    def resize(self, width, height):
        self.size = (width, height)

    def animate(self, handle, from_state, to_state, duration_ms):
        self.animations.append((handle, from_state, to_state, duration_ms))

    def on_hover(self, handle, measurement=None):
        self.hover_events.append(("over", handle, measurement))

    def on_hover_end(self, handle):
        self.hover_events.append(("out", handle))

    def with_style(self, style_class):
        return [h for h, r in self.live.items() if r["style_class"] == style_class]


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def registry(surface):
    return FeatureRegistry(surface, StyleTable(), scale=100.0)


@pytest.fixture
def container():
    return Container("net", 600)


@pytest.fixture
def net(container, surface):
    return Stereonet(container=container, surface=surface, animations=False)
