# tokenpad/core/geometry.py
"""
Geometry helpers for measuring placements: curve polyline, arc position of
each token along it, consecutive gaps, bounds.
"""

from __future__ import annotations

import numpy as np
from shapely.geometry import LineString, Point

from tokenpad.core.curves import CurveFamily
from tokenpad.core.placement import parameter_grid
from tokenpad.core.types import CoordinateList, Curve


def curve_polyline(
    family: CurveFamily,
    curve: Curve,
    n_samples: int | None = None,
) -> LineString:
    """
    Closed polyline through family.point on the sweep grid, starting at the
    phase so the first token projects to arc position 0.
    n_samples thins the grid evenly; None keeps every sweep step.
    """
    t = parameter_grid(family)
    if n_samples is not None and 0 < n_samples < t.size:
        t = t[np.linspace(0, t.size - 1, n_samples).astype(int)]
    with np.errstate(all="ignore"):
        xs, ys = family.point(t, curve.cx, curve.cy, curve.rx, curve.ry)
    xy = np.column_stack([np.broadcast_to(xs, t.shape), np.broadcast_to(ys, t.shape)])
    if xy.shape[0] == 0:
        return LineString()
    xy = np.vstack([xy, xy[:1]])
    return LineString(xy)


def chord_polyline(coords: CoordinateList) -> LineString:
    """Open polyline through the coordinates in order."""
    if len(coords) < 2:
        return LineString()
    return LineString(coords)


def arc_positions(line: LineString, coords: CoordinateList) -> np.ndarray:
    """Distance along line of the nearest point to each coordinate."""
    if line.is_empty:
        return np.zeros(len(coords))
    return np.array([line.project(Point(x, y)) for x, y in coords], dtype=float)


def arc_gaps(positions: np.ndarray, length: float, closed: bool = True) -> np.ndarray:
    """Consecutive differences of positions; closed adds the gap from the last back to the first."""
    if positions.size == 0:
        return np.zeros(0)
    gaps = np.diff(positions)
    if closed:
        gaps = np.append(gaps, length - positions[-1] + positions[0])
    return gaps


def coordinates_bounds(coords: CoordinateList) -> tuple[float, float, float, float]:
    """Return (minx, miny, maxx, maxy)."""
    if not coords:
        return (0.0, 0.0, 0.0, 0.0)
    xy = np.asarray(coords, dtype=float)
    return (float(xy[:, 0].min()), float(xy[:, 1].min()), float(xy[:, 0].max()), float(xy[:, 1].max()))
