# tokenpad/core/positioner.py
"""
Stateful board-side facade: collects container size, token size, total and
layout from loosely typed UI values, then asks its own PlacementCache for
coordinates.
"""

from __future__ import annotations

import math
from typing import Any

from tokenpad.core.cache import PlacementCache
from tokenpad.core.types import Coordinate, CoordinateList, PlacementRequest


def _to_number(value: Any) -> float:
    """Parse a UI value as a float; None, blanks, junk and NaN become 0."""
    if value is None:
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(number) else number


def _to_count(value: Any) -> int:
    number = _to_number(value)
    if not math.isfinite(number) or number <= 0:
        return 0
    return int(number)


class Positioner:
    """Works out token coordinates for one board."""

    def __init__(self, layout: str = "ellipse", cache: PlacementCache | None = None) -> None:
        self.cache = cache if cache is not None else PlacementCache()
        self.layout = layout
        self.set_defaults()

    def set_defaults(self) -> None:
        """Zero sizes and total; the layout is kept."""
        self.set_container_size(0, 0)
        self.set_token_size(0, 0)
        self.set_total(0)

    def set_container_size(self, width: Any, height: Any) -> None:
        self.width = _to_number(width)
        self.height = _to_number(height)

    def set_token_size(self, width: Any, height: Any) -> None:
        self.token_width = _to_number(width)
        self.token_height = _to_number(height)

    def set_total(self, total: Any) -> None:
        self.total = _to_count(total)

    def set_layout(self, layout: str) -> None:
        self.layout = layout

    def get_data(self) -> PlacementRequest:
        return PlacementRequest(
            container_width=self.width,
            container_height=self.height,
            token_width=self.token_width,
            token_height=self.token_height,
            total=self.total,
            layout=self.layout,
        )

    def generate_coords(self) -> CoordinateList:
        """
        Coordinates for the current data. Raises ConfigurationError when
        self.layout is not a known layout.
        """
        return self.cache.get(self.get_data()).coordinates

    def coords_for_index(self, index: int) -> Coordinate:
        """Slot for the index-th token, e.g. the newest token at total - 1."""
        coords = self.generate_coords()
        if not 0 <= index < len(coords):
            raise IndexError(f"No placement slot {index} for {len(coords)} tokens")
        return coords[index]
