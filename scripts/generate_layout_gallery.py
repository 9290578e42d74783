#!/usr/bin/env python3
"""
Render one preview PNG per layout and token count into docs/assets/gallery/.

Useful for eyeballing spacing after changing a curve or a precision.
"""

from __future__ import annotations

from pathlib import Path

from tokenpad.core.placement import compute_placements
from tokenpad.core.render import render_placement
from tokenpad.core.types import PlacementRequest

OUTPUT_DIR = Path(__file__).parent.parent / "docs" / "assets" / "gallery"

LAYOUTS = ("ellipse", "rect_ellipse", "rect", "diagonal", "horizontal", "vertical", "linear")
TOTALS = (5, 12)
CONTAINER = (640.0, 420.0)
TOKEN = 48.0


def main() -> None:
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    width, height = CONTAINER
    for layout in LAYOUTS:
        for total in TOTALS:
            result = compute_placements(PlacementRequest(width, height, TOKEN, TOKEN, total, layout))
            path = OUTPUT_DIR / f"{layout}_{total}.png"
            render_placement(result, path)
            print(path)


if __name__ == "__main__":
    main()
