# plotly_surface.py
import itertools
import logging

import plotly.graph_objects as go

from .config import HOVER_OPACITY, HOVER_POINT_FACTOR, HOVER_STROKE_WIDTH
from .projection import rotate_xy
from .render import PrimitiveKind, RenderAdapter
from .styles import px

logger = logging.getLogger(__name__)

PLOT_MARGIN = dict(l=10, r=10, t=10, b=10)
HOVERLABEL = dict(bgcolor="rgba(0,0,0,0.7)", font=dict(color="#fff", size=18))


def _color(value, default=None):
    if value is None or str(value).strip() == "none":
        return default
    return str(value).strip()


def line_props(style):
    return dict(color=_color(style.get("stroke"), "#000"), width=px(style.get("stroke-width")))


def marker_props(style, point_size):
    # point_size is a radius, plotly wants a diameter
    return dict(
        size=2 * point_size,
        color=_color(style.get("fill"), _color(style.get("stroke"), "#000")),
        line=dict(color=_color(style.get("stroke"), "#000"), width=px(style.get("stroke-width"), 0)),
    )


class PlotlySurface(RenderAdapter):
    """Draws primitives as traces of a plotly Figure, one go.Scatter per handle."""

    def __init__(self, styles, point_size=5, figure=None):
        self.styles = styles
        self.point_size = point_size
        self.figure = figure if figure is not None else go.Figure()
        self._ids = itertools.count()
        self._records = {}
        self._hoverlabel_ready = False
        self.figure.update_layout(
            margin=PLOT_MARGIN,
            showlegend=False,
            plot_bgcolor="white",
            hovermode="closest",
        )

    def __contains__(self, handle):
        return handle in self._records

    def __len__(self):
        return len(self._records)

    # -------------------------
    # Trace construction
    # -------------------------
    def _coords(self, record):
        geometry = record["geometry"]
        return rotate_xy(geometry.x, geometry.y, record["rotation"])

    def _style_props(self, kind, style):
        if kind == PrimitiveKind.POINT:
            return dict(
                mode="markers",
                marker=marker_props(style, self.point_size),
                opacity=float(style.get("fill-opacity", 1)),
            )
        if kind == PrimitiveKind.LABEL:
            return dict(
                mode="text",
                textfont=dict(color=_color(style.get("fill"), "#000"), size=px(style.get("font-size"), 12)),
                opacity=1.0,
            )
        return dict(
            mode="lines",
            line=line_props(style),
            opacity=float(style.get("stroke-opacity", 1)),
        )

    def _build_trace(self, handle, record):
        x, y = self._coords(record)
        props = self._style_props(record["kind"], self.styles.get(record["style_class"]))
        handler = record["handler"]
        if handler is not None:
            props.update(hovertext=handler.text(), hoverinfo="text")
        else:
            props.update(hoverinfo="skip")
        if record["kind"] == PrimitiveKind.LABEL:
            props.update(text=list(record["geometry"].text or ()))
        return go.Scatter(x=x, y=y, uid=handle, name=record["style_class"], **props)

    def trace(self, handle):
        for trace in self.figure.data:
            if trace.uid == handle:
                return trace
        raise KeyError(handle)

    def handle_at(self, curve_number):
        """Handle of the trace at a figure index (as reported in Dash hoverData)."""
        if curve_number is None or curve_number < 0:
            return None
        try:
            uid = self.figure.data[curve_number].uid
        except IndexError:
            return None
        return uid if uid in self._records else None

    # -------------------------
    # RenderAdapter
    # -------------------------
    def create_primitive(self, kind, geometry, style_class, rotation=0.0, handler=None):
        handle = f"primitive-{next(self._ids)}"
        record = dict(
            kind=PrimitiveKind(kind),
            geometry=geometry,
            rotation=rotation,
            style_class=style_class,
            handler=handler,
        )
        trace = self._build_trace(handle, record)
        if handler is not None:
            self._ensure_hoverlabel()
        self.figure.add_trace(trace)
        self._records[handle] = record
        return handle

    def update_primitive(self, handle, geometry=None, rotation=None, style_class=None,
                         visible=None):
        record = self._records[handle]
        self._stop_transition()
        if geometry is not None:
            record["geometry"] = geometry
        if rotation is not None:
            record["rotation"] = rotation
        if style_class is not None:
            record["style_class"] = style_class
        trace = self.trace(handle)
        if geometry is not None or rotation is not None:
            x, y = self._coords(record)
            trace.update(x=x, y=y)
        if style_class is not None:
            trace.update(**self._style_props(record["kind"], self.styles.get(style_class)))
        if visible is not None:
            trace.visible = bool(visible)

    def dispose_primitive(self, handle):
        if self._records.pop(handle, None) is None:
            return
        self.figure.data = tuple(t for t in self.figure.data if t.uid != handle)

    def clear(self):
        self._stop_transition()
        self._records.clear()
        self.figure.data = ()

    def resize(self, width, height):
        half = width / 2.0
        self.figure.update_layout(width=width, height=height)
        self.figure.update_xaxes(
            range=[-half, half], zeroline=False, showgrid=False, showticklabels=False,
            constrain='domain',
        )
        self.figure.update_yaxes(
            range=[-half, half], zeroline=False, showgrid=False, showticklabels=False,
            scaleanchor='x', scaleratio=1,
        )

    def animate(self, handle, from_state, to_state, duration_ms):
        """
        Plotly transitions are figure-wide and run on the client from whatever
        it currently shows, so from_state is not applied here. The transition
        stays set until the next update or hover, which turn it off again.
        """
        if handle not in self._records:
            return
        trace = self.trace(handle)
        if "opacity" in to_state:
            trace.opacity = to_state["opacity"]
        if "size" in to_state and self._records[handle]["kind"] == PrimitiveKind.POINT:
            trace.marker.size = 2 * to_state["size"]
        self.figure.update_layout(transition=dict(duration=duration_ms, easing="cubic-in-out"))

    def on_hover(self, handle, measurement=None):
        record = self._records.get(handle)
        if record is None:
            return
        self._stop_transition()
        trace = self.trace(handle)
        if record["kind"] == PrimitiveKind.POINT:
            trace.marker.size = 2 * self.point_size * HOVER_POINT_FACTOR
            trace.marker.line.width = HOVER_STROKE_WIDTH
        else:
            trace.line.width = HOVER_STROKE_WIDTH
            trace.opacity = HOVER_OPACITY

    def on_hover_end(self, handle):
        record = self._records.get(handle)
        if record is None:
            return
        self._stop_transition()
        props = self._style_props(record["kind"], self.styles.get(record["style_class"]))
        self.trace(handle).update(**props)

    def _stop_transition(self):
        if self.figure.layout.transition.duration:
            self.figure.update_layout(transition=dict(duration=0))

    def _ensure_hoverlabel(self):
        # one hover label per surface, configured on first use
        if self._hoverlabel_ready:
            return
        self.figure.update_layout(hoverlabel=HOVERLABEL)
        self._hoverlabel_ready = True
