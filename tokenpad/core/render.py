# tokenpad/core/render.py
"""
Matplotlib PNG preview of a placement: container outline, reference curve
through token centres, token squares with their index.
Coordinates are token top-left corners in screen space (y down).
"""

from __future__ import annotations

import warnings
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Rectangle

from tokenpad.core.config import RENDER_CURVE_SAMPLES, RENDER_HEIGHT_PX, RENDER_WIDTH_PX
from tokenpad.core.curves import CURVE_FAMILIES, get_curve_family
from tokenpad.core.geometry import coordinates_bounds, curve_polyline
from tokenpad.core.placement import derive_curve
from tokenpad.core.types import PlacementResult


def set_axes_to_container(
    ax: plt.Axes,
    result: PlacementResult,
    pad_frac: float = 0.05,
) -> None:
    """Limits cover the container and every token; equal aspect; y inverted; axes hidden."""
    req = result.request
    minx, miny, maxx, maxy = coordinates_bounds(result.coordinates)
    minx, miny = min(minx, 0.0), min(miny, 0.0)
    maxx = max(maxx + req.token_width, req.container_width)
    maxy = max(maxy + req.token_height, req.container_height)
    if not all(np.isfinite([minx, miny, maxx, maxy])):
        return
    dx = max(1.0, (maxx - minx) * pad_frac)
    dy = max(1.0, (maxy - miny) * pad_frac)
    ax.set_xlim(minx - dx, maxx + dx)
    ax.set_ylim(maxy + dy, miny - dy)
    ax.set_aspect("equal", adjustable="box")
    ax.axis("off")


def _new_fig(width_px: int, height_px: int) -> tuple[plt.Figure, plt.Axes]:
    fig = plt.figure(
        figsize=(width_px / 100.0, height_px / 100.0),
        dpi=100,
        constrained_layout=False,
    )
    ax = fig.add_axes([0, 0, 1, 1])
    ax.axis("off")
    return fig, ax


def _draw_curve(ax: plt.Axes, result: PlacementResult) -> None:
    if result.layout not in CURVE_FAMILIES:
        if len(result.coordinates) >= 2:
            xy = np.asarray(result.coordinates, dtype=float)
            xy = xy + [result.request.token_width / 2, result.request.token_height / 2]
            ax.plot(xy[:, 0], xy[:, 1], linestyle="--", linewidth=1, color="gray")
        return
    family = get_curve_family(result.layout)
    line = curve_polyline(family, derive_curve(result.request), RENDER_CURVE_SAMPLES)
    if line.is_empty:
        return
    xy = np.array(line.coords)
    # Token corners ride the curve; shift by half a token to draw through centres
    xy = xy + [result.request.token_width / 2, result.request.token_height / 2]
    ax.plot(xy[:, 0], xy[:, 1], linestyle="--", linewidth=1, color="gray")


def render_placement(
    result: PlacementResult,
    output_path: str | Path,
    width_px: int = RENDER_WIDTH_PX,
    height_px: int = RENDER_HEIGHT_PX,
    scale: int = 1,
) -> None:
    """Render container, curve and tokens. scale multiplies output resolution (1x, 2x, 4x)."""
    req = result.request
    w, h = width_px * scale, height_px * scale
    fig, ax = _new_fig(w, h)
    ax.add_patch(Rectangle(
        (0, 0), req.container_width, req.container_height,
        facecolor="whitesmoke", edgecolor="black", linewidth=1,
    ))
    _draw_curve(ax, result)
    for i, (x, y) in enumerate(result.coordinates):
        ax.add_patch(Rectangle(
            (x, y), req.token_width, req.token_height,
            facecolor="lightblue", edgecolor="navy", linewidth=1, alpha=0.8, zorder=3,
        ))
        ax.text(
            x + req.token_width / 2, y + req.token_height / 2, str(i),
            ha="center", va="center", fontsize=8, zorder=4,
        )
    set_axes_to_container(ax, result)
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message=".*constrained_layout.*", category=UserWarning)
        fig.savefig(output_path, dpi=100, facecolor="white")
    plt.close(fig)
