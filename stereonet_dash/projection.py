# projection.py
"""
Azimuthal equal-area (Schmidt net) geometry.

Spherical positions are (longitude, latitude) about a projection centre at
(0, 0), plot y points north and rotations are clockwise, as on a compass.
Every data shape is built once in a canonical orientation and then turned
about the plot centre, so a plane's arc only depends on its dip until the
final rotation.
"""
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .config import (
    ARC_BAND_WIDTH,
    CARDINAL_OFFSET,
    CARDINAL_VALUES,
    CROSSHAIR_HALF_EXTENT,
    SAMPLE_PRECISION,
)
from .features import PoleCoordinates

SQRT2 = np.sqrt(2.0)


@dataclass(frozen=True)
class Geometry:
    """Plot-space coordinates; NaN separates polylines."""
    x: np.ndarray
    y: np.ndarray
    text: Optional[tuple] = field(default=None)

    def __len__(self):
        return len(self.x)


# -------------------------
# Core mapping
# -------------------------
def projection_scale(width):
    """Projection scale for a square plot of the given width."""
    return width / np.pi


def outline_radius(scale):
    # 90 degrees from the centre
    return scale * SQRT2


def equal_area_xy(lon_deg, lat_deg, scale=1.0):
    lam = np.radians(np.asarray(lon_deg, dtype=float))
    phi = np.radians(np.asarray(lat_deg, dtype=float))
    cos_c = np.cos(phi) * np.cos(lam)
    # antipode of the centre has no finite image
    with np.errstate(divide='ignore', invalid='ignore'):
        k = np.sqrt(2.0 / (1.0 + cos_c))
    x = scale * k * np.cos(phi) * np.sin(lam)
    y = scale * k * np.sin(phi)
    return x, y


def inverse_equal_area(x, y, scale=1.0):
    """Plot point -> (longitude, latitude) in degrees."""
    xs = np.asarray(x, dtype=float) / scale
    ys = np.asarray(y, dtype=float) / scale
    rho = np.hypot(xs, ys)
    c = 2.0 * np.arcsin(np.clip(rho / 2.0, 0.0, 1.0))
    with np.errstate(divide='ignore', invalid='ignore'):
        lat = np.where(rho > 0, np.arcsin(np.clip(ys * np.sin(c) / rho, -1.0, 1.0)), 0.0)
    lon = np.arctan2(xs * np.sin(c), rho * np.cos(c))
    return np.degrees(lon), np.degrees(lat)


def rotate_xy(x, y, rotation_deg):
    """Clockwise rotation about the plot centre."""
    t = np.radians(rotation_deg)
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    return x * np.cos(t) + y * np.sin(t), -x * np.sin(t) + y * np.cos(t)


def point_to_line(x, y, scale=1.0):
    """
    Orientation of the line that plots at (x, y): returns (plunge, trend).
    Points outside the net are clamped to the primitive circle.
    """
    r = np.hypot(x, y) / scale
    c = 2.0 * np.degrees(np.arcsin(min(r / 2.0, SQRT2 / 2.0)))
    trend = np.degrees(np.arctan2(x, y)) % 360.0
    return float(90.0 - c), float(trend)


def pole_coordinates(dip_angle, dip_direction):
    return PoleCoordinates(
        dip_direction=(dip_direction + 180.0) % 360.0,
        complement=90.0 - dip_angle,
    )


def pole_to_plane(plunge, trend):
    """Plane (dip, dip direction) whose pole is the line (plunge, trend)."""
    return 90.0 - plunge, (trend + 180.0) % 360.0


# -------------------------
# Polyline sampling
# -------------------------
def _samples(start, stop, step):
    values = np.arange(start, stop, step)
    if len(values) == 0 or values[-1] < stop:
        values = np.append(values, stop)
    return values


def _join(segments):
    """Concatenate (x, y) segments with NaN breaks."""
    xs, ys = [], []
    for x, y in segments:
        if xs:
            xs.append([np.nan])
            ys.append([np.nan])
        xs.append(x)
        ys.append(y)
    if not xs:
        return np.array([]), np.array([])
    return np.concatenate(xs), np.concatenate(ys)


def meridian(lon, scale, lat_range=(-90.0, 90.0), precision=SAMPLE_PRECISION):
    lat = _samples(lat_range[0], lat_range[1], precision)
    return equal_area_xy(np.full_like(lat, lon), lat, scale)


def parallel(lat, scale, lon_range=(-90.0, 90.0), precision=SAMPLE_PRECISION):
    lon = _samples(lon_range[0], lon_range[1], precision)
    return equal_area_xy(lon, np.full_like(lon, lat), scale)


# -------------------------
# Data shapes: (geometry, rotation)
# -------------------------
def plane_to_arc_geometry(dip_angle, dip_direction, scale=1.0,
                          band_width=ARC_BAND_WIDTH, precision=SAMPLE_PRECISION):
    """
    Great circle of a plane as a thin band of meridians 90 - dip from the
    centre, turned by dip_direction - 90 so the band faces down-dip.
    """
    start = 90.0 - dip_angle
    stop = min(start + band_width, 90.0)
    lons = np.unique(np.append(np.arange(start, stop, 1.0), stop))
    x, y = _join(meridian(lon, scale, precision=precision) for lon in lons)
    return Geometry(x, y), dip_direction - 90.0


def plane_to_pole_geometry(dip_angle, dip_direction, scale=1.0):
    pole = pole_coordinates(dip_angle, dip_direction)
    x, y = equal_area_xy([0.0], [90.0 - pole.complement], scale)
    return Geometry(x, y), pole.dip_direction


def line_to_point_geometry(dip_angle, dip_direction, scale=1.0):
    x, y = equal_area_xy([0.0], [90.0 - dip_angle], scale)
    return Geometry(x, y), dip_direction


# -------------------------
# Reference shapes
# -------------------------
def graticule_geometry(step, scale=1.0, precision=SAMPLE_PRECISION):
    lons = np.arange(-90.0, 90.0 + 1e-9, step)
    lats = np.arange(-90.0 + step, 90.0, step)
    segments = [meridian(lon, scale, precision=precision) for lon in lons]
    segments += [parallel(lat, scale, precision=precision) for lat in lats]
    x, y = _join(segments)
    return Geometry(x, y)


def outline_geometry(scale=1.0, samples=361):
    theta = np.linspace(0, 2 * np.pi, samples)
    r = outline_radius(scale)
    return Geometry(r * np.sin(theta), r * np.cos(theta))


def crosshair_geometry(scale=1.0, half_extent=CROSSHAIR_HALF_EXTENT):
    span = (-half_extent, half_extent)
    x, y = _join([
        meridian(0.0, scale, lat_range=span, precision=half_extent),
        parallel(0.0, scale, lon_range=span, precision=half_extent),
    ])
    return Geometry(x, y)


def cardinal_geometry(scale=1.0, labels=CARDINAL_VALUES, offset=CARDINAL_OFFSET):
    azimuths = np.radians(np.arange(len(labels)) * 360.0 / len(labels))
    r = outline_radius(scale) * offset
    return Geometry(r * np.sin(azimuths), r * np.cos(azimuths), text=tuple(labels))
