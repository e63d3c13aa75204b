# registry.py
import dataclasses
import logging

from .config import ARC_BAND_WIDTH, DEFAULT_POINT_SIZE, Representation, coerce_representation
from .features import (
    LINE,
    PLANE,
    HoverHandler,
    LineFeature,
    Measurement,
    PlaneFeature,
)
from .projection import (
    line_to_point_geometry,
    plane_to_arc_geometry,
    plane_to_pole_geometry,
)
from .render import PrimitiveKind
from .validation import validate

logger = logging.getLogger(__name__)

PLANE_STYLE = {
    Representation.ARC: "data_plane",
    Representation.POLE: "data_plane_pole",
}
LINE_STYLE = "data_line"


class FeatureRegistry:
    """
    Authoritative store of plotted planes and lines.

    Planes and lines are numbered independently from 0 by their own
    counters; ids are never handed out twice, even after removal. Each
    feature keeps its source measurement so geometry can be derived again
    for a new representation or scale.
    """

    def __init__(self, surface, styles, scale=1.0, representation=Representation.ARC,
                 point_size=DEFAULT_POINT_SIZE, animation_duration=0,
                 band_width=ARC_BAND_WIDTH):
        self.surface = surface
        self.styles = styles
        self.scale = scale
        self.point_size = point_size
        self.animation_duration = animation_duration
        self.band_width = band_width
        self._representation = coerce_representation(representation)
        self._planes = {}
        self._lines = {}
        self._next_plane_id = 0
        self._next_line_id = 0

    @property
    def representation(self):
        return self._representation

    # -------------------------
    # Geometry
    # -------------------------
    def _plane_primitive(self, measurement, representation):
        if representation == Representation.ARC:
            geometry, rotation = plane_to_arc_geometry(
                measurement.dip_angle, measurement.dip_direction, self.scale,
                band_width=self.band_width,
            )
            return PrimitiveKind.ARC, geometry, rotation
        geometry, rotation = plane_to_pole_geometry(
            measurement.dip_angle, measurement.dip_direction, self.scale
        )
        return PrimitiveKind.POINT, geometry, rotation

    def _line_primitive(self, measurement):
        geometry, rotation = line_to_point_geometry(
            measurement.dip_angle, measurement.dip_direction, self.scale
        )
        return PrimitiveKind.POINT, geometry, rotation

    def _draw(self, kind, geometry, rotation, style_class, handler):
        handle = self.surface.create_primitive(
            kind, geometry, style_class, rotation=rotation, handler=handler
        )
        if self.animation_duration:
            from_state = {"opacity": 0}
            to_state = {"opacity": 1}
            if kind == PrimitiveKind.POINT:
                from_state["size"] = 0
                to_state["size"] = self.point_size
            self.surface.animate(handle, from_state, to_state, self.animation_duration)
        return handle

    def _draw_plane(self, feature_id, measurement, representation):
        kind, geometry, rotation = self._plane_primitive(measurement, representation)
        style_class = PLANE_STYLE[representation]
        handler = HoverHandler(feature_id, PLANE, style_class, measurement)
        return self._draw(kind, geometry, rotation, style_class, handler)

    def _draw_line(self, feature_id, measurement):
        kind, geometry, rotation = self._line_primitive(measurement)
        handler = HoverHandler(feature_id, LINE, LINE_STYLE, measurement)
        return self._draw(kind, geometry, rotation, LINE_STYLE, handler)

    # -------------------------
    # Planes
    # -------------------------
    def add_plane(self, dip_angle, dip_direction):
        if not validate(dip_angle, dip_direction):
            return None
        feature_id = self._next_plane_id
        measurement = Measurement(dip_angle, dip_direction)
        feature = PlaneFeature(feature_id, measurement, self._representation)
        feature.handle = self._draw_plane(feature_id, measurement, self._representation)
        self._planes[feature_id] = feature
        self._next_plane_id += 1
        logger.debug("Plane %d added (%s/%s)", feature_id, dip_angle, dip_direction)
        return feature_id

    def remove_plane(self, plane_id):
        feature = self._planes.get(plane_id)
        if feature is None:
            return
        if feature.handle is not None:
            self.surface.dispose_primitive(feature.handle)
        del self._planes[plane_id]
        logger.debug("Plane %d removed", plane_id)

    def get_planes(self):
        return [(f.id, f.handle) for f in self._planes.values()]

    def get_plane(self, plane_id):
        feature = self._planes.get(plane_id)
        return dataclasses.replace(feature) if feature is not None else None

    # -------------------------
    # Lines
    # -------------------------
    def add_line(self, dip_angle, dip_direction):
        if not validate(dip_angle, dip_direction):
            return None
        feature_id = self._next_line_id
        measurement = Measurement(dip_angle, dip_direction)
        feature = LineFeature(feature_id, measurement)
        feature.handle = self._draw_line(feature_id, measurement)
        self._lines[feature_id] = feature
        self._next_line_id += 1
        logger.debug("Line %d added (%s/%s)", feature_id, dip_angle, dip_direction)
        return feature_id

    def remove_line(self, line_id):
        feature = self._lines.get(line_id)
        if feature is None:
            return
        if feature.handle is not None:
            self.surface.dispose_primitive(feature.handle)
        del self._lines[line_id]
        logger.debug("Line %d removed", line_id)

    def get_lines(self):
        return [(f.id, f.handle) for f in self._lines.values()]

    def get_line(self, line_id):
        feature = self._lines.get(line_id)
        return dataclasses.replace(feature) if feature is not None else None

    def find_handle(self, handle):
        """(kind, feature copy) owning a rendered handle, or None."""
        for kind, features in ((PLANE, self._planes), (LINE, self._lines)):
            for feature in features.values():
                if feature.handle == handle:
                    return kind, dataclasses.replace(feature)
        return None

    # -------------------------
    # Bulk re-derivation
    # -------------------------
    def set_representation(self, mode):
        """
        Redraw every plane as arc or pole. New primitives are all created
        before any old one is disposed; if drawing fails part way the ones
        already created are disposed and the old plot is left untouched.
        """
        mode = coerce_representation(mode)
        planes = list(self._planes.values())
        staged = [(f, self._plane_primitive(f.measurement, mode)) for f in planes]
        style_class = PLANE_STYLE[mode]
        created = []
        try:
            for feature, (kind, geometry, rotation) in staged:
                handler = HoverHandler(feature.id, PLANE, style_class, feature.measurement)
                created.append(self._draw(kind, geometry, rotation, style_class, handler))
        except Exception:
            for handle in created:
                self.surface.dispose_primitive(handle)
            raise
        for feature, handle in zip(planes, created):
            if feature.handle is not None:
                self.surface.dispose_primitive(feature.handle)
            feature.handle = handle
            feature.representation = mode
        self._representation = mode
        logger.debug("Planes switched to %s (%d redrawn)", mode, len(planes))

    def redraw_all(self, scale=None):
        """
        Draw every feature again from its measurement, e.g. after the surface
        was cleared for a resize. Old handles are assumed gone.
        """
        if scale is not None:
            self.scale = scale
        for feature in self._planes.values():
            feature.handle = None
            feature.handle = self._draw_plane(feature.id, feature.measurement, self._representation)
            feature.representation = self._representation
        for feature in self._lines.values():
            feature.handle = None
            feature.handle = self._draw_line(feature.id, feature.measurement)

    # -------------------------
    # Styles
    # -------------------------
    def set_style(self, class_name, style_spec):
        self.styles.set(class_name, style_spec)

    def get_style(self, class_name):
        return self.styles.get(class_name)

    def __len__(self):
        return len(self._planes) + len(self._lines)

    @property
    def plane_count(self):
        return len(self._planes)

    @property
    def line_count(self):
        return len(self._lines)
