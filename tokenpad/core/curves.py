# tokenpad/core/curves.py
"""
Closed reference curves: speed s(t) = |d/dt (x(t), y(t))| and point p(t)
for ellipse, rect_ellipse (superellipse) and rect. Functions are numpy
vectorized, so t may be a scalar or an array.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

import numpy as np

from tokenpad.core.config import (
    PHASE_ELLIPSE,
    PHASE_RECT,
    PHASE_RECT_ELLIPSE,
    PRECISION_DEFAULT,
    PRECISION_RECT_ELLIPSE,
)
from tokenpad.core.error_codes import ConfigurationError

TWO_PI = 2.0 * math.pi
HALF_PI = 0.5 * math.pi

SpeedFn = Callable[[np.ndarray, float, float], np.ndarray]
PointFn = Callable[[np.ndarray, float, float, float, float], tuple[np.ndarray, np.ndarray]]


@dataclass(frozen=True)
class CurveFamily:
    """One closed layout shape, swept once over [phase, phase + 2π) in steps of precision."""
    name: str
    phase: float
    precision: float
    speed: SpeedFn
    point: PointFn

    @property
    def domain(self) -> tuple[float, float]:
        return (self.phase, self.phase + TWO_PI)


def ellipse_speed(t, rx: float, ry: float):
    return np.sqrt((rx * np.sin(t)) ** 2 + (ry * np.cos(t)) ** 2)


def ellipse_point(t, cx: float, cy: float, rx: float, ry: float):
    return cx + np.cos(t) * rx, cy + np.sin(t) * ry


def rect_ellipse_speed(t, rx: float, ry: float):
    dx = rx / 3 / np.cbrt(np.cos(t)) ** 2 * -np.sin(t)
    dy = ry / 3 / np.cbrt(np.sin(t)) ** 2 * np.cos(t)
    return np.sqrt(dx ** 2 + dy ** 2)


def rect_ellipse_point(t, cx: float, cy: float, rx: float, ry: float):
    return cx + np.cbrt(np.cos(t)) * rx, cy + np.cbrt(np.sin(t)) * ry


def rect_speed(t, rx: float, ry: float):
    """
    Piecewise speed over the four quadrants of t normalized into [0, 2π).
    x moves on [0, π/2) and [π, 3π/2); y moves on the other two.
    """
    scalar = np.ndim(t) == 0
    t = np.atleast_1d(np.asarray(t, dtype=float))
    t = np.where(t < 0, t + TWO_PI, t)
    t = np.where(t >= TWO_PI, t - TWO_PI, t)
    edge = 2 * np.abs(np.sin(2 * t))
    quadrants = [
        (0 <= t) & (t < HALF_PI),
        (HALF_PI <= t) & (t < math.pi),
        (math.pi <= t) & (t < 3 * HALF_PI),
        (3 * HALF_PI <= t) & (t < TWO_PI),
    ]
    out = np.select(quadrants, [rx * edge, ry * edge, rx * edge, ry * edge], default=0.0)
    return float(out[0]) if scalar else out


def rect_point(t, cx: float, cy: float, rx: float, ry: float):
    c = np.cos(t)
    s = np.sin(t)
    x = cx + (np.abs(c) * c - np.abs(s) * s) * rx
    y = cy + (np.abs(c) * c + np.abs(s) * s) * ry
    return x, y


ELLIPSE = CurveFamily("ellipse", PHASE_ELLIPSE, PRECISION_DEFAULT, ellipse_speed, ellipse_point)
RECT_ELLIPSE = CurveFamily("rect_ellipse", PHASE_RECT_ELLIPSE, PRECISION_RECT_ELLIPSE, rect_ellipse_speed, rect_ellipse_point)
RECT = CurveFamily("rect", PHASE_RECT, PRECISION_DEFAULT, rect_speed, rect_point)

CURVE_FAMILIES: dict[str, CurveFamily] = {
    family.name: family for family in (ELLIPSE, RECT_ELLIPSE, RECT)
}


def get_curve_family(name: str) -> CurveFamily:
    """Look up a closed curve family by canonical name. Raises ConfigurationError if unknown."""
    try:
        return CURVE_FAMILIES[name]
    except KeyError:
        raise ConfigurationError(f'Unrecognised curve family "{name}"') from None
