# tokenpad/core/types.py
"""
Dataclasses for placement requests, derived curves and placement results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

import numpy as np


CurveLayout = Literal["ellipse", "rect_ellipse", "rect"]
LinearLayout = Literal["diagonal", "horizontal", "vertical", "linear"]

Coordinate = tuple[float, float]
CoordinateList = tuple[Coordinate, ...]


@dataclass(frozen=True)
class PlacementRequest:
    """Container size, token size, token count and layout name. Fully determines output."""
    container_width: float
    container_height: float
    token_width: float
    token_height: float
    total: int
    layout: str


@dataclass(frozen=True)
class Curve:
    """Radii and centre derived from a request; radii may be negative."""
    rx: float
    ry: float
    cx: float
    cy: float


@dataclass
class SweepResult:
    """
    Both integration passes over one curve: parameter grid, speed samples,
    running length before each step, and the step indices that emitted a point.
    """
    t: np.ndarray
    speed: np.ndarray
    run: np.ndarray
    circumference: float
    indices: list[int] = field(default_factory=list)


@dataclass
class PlacementResult:
    """Coordinates for one request plus sweep metadata and non-fatal warnings."""
    request: PlacementRequest
    layout: str  # canonical name after alias resolution
    coordinates: CoordinateList
    circumference: float | None = None  # None for linear layouts
    precision: float | None = None
    n_steps: int = 0
    warnings: list[str] = field(default_factory=list)
