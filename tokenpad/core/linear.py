# tokenpad/core/linear.py
"""
Straight-line layouts. Uniform speed, so coordinates come straight from the
token index with no integration.
"""

from __future__ import annotations

from typing import Callable

from tokenpad.core.config import LINEAR_MIN_OFFSET_PX, LINEAR_OFFSET_DIVISOR
from tokenpad.core.error_codes import ConfigurationError
from tokenpad.core.types import CoordinateList, PlacementRequest


def diagonal(request: PlacementRequest) -> CoordinateList:
    """Top-left to bottom-right; index i at ((W - tw) / total * i, (H - th) / total * i)."""
    total = request.total
    if total <= 0:
        return ()
    x_inc = (request.container_width - request.token_width) / total
    y_inc = (request.container_height - request.token_height) / total
    return tuple((x_inc * i, y_inc * i) for i in range(total))


def horizontal(request: PlacementRequest) -> CoordinateList:
    return tuple((x, 0.0) for x, _ in diagonal(request))


def vertical(request: PlacementRequest) -> CoordinateList:
    return tuple((0.0, y) for _, y in diagonal(request))


def linear(request: PlacementRequest) -> CoordinateList:
    """Row along the top edge, starting one offset in from the corner."""
    if request.total <= 0:
        return ()
    offset = max(LINEAR_MIN_OFFSET_PX, request.container_width / LINEAR_OFFSET_DIVISOR)
    return tuple((i * offset, offset) for i in range(1, request.total + 1))


LINEAR_LAYOUTS: dict[str, Callable[[PlacementRequest], CoordinateList]] = {
    "diagonal": diagonal,
    "horizontal": horizontal,
    "vertical": vertical,
    "linear": linear,
}


def get_linear_layout(name: str) -> Callable[[PlacementRequest], CoordinateList]:
    """Look up a straight-line layout by name. Raises ConfigurationError if unknown."""
    try:
        return LINEAR_LAYOUTS[name]
    except KeyError:
        raise ConfigurationError(f'Unrecognised linear layout "{name}"') from None
