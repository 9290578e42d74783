# tokenpad/core/placement.py
"""
Placement engine: resolve the layout, then either index a straight line or
sample a closed curve at equal arc length.

Closed curves use two left-Riemann passes over the same parameter grid:
pass 1 sums speed(t) into the circumference, pass 2 walks the running sum and
emits a point the first time total * run / circumference reaches each of
0, 1, ..., total - 1. At most one point is emitted per step.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from tokenpad.core.config import MARGIN_X_PX, MARGIN_Y_PX, SWEEP_DEBUG
from tokenpad.core.curves import CURVE_FAMILIES, TWO_PI, CurveFamily, get_curve_family
from tokenpad.core.error_codes import TOO_MANY_TOKENS, ZERO_CIRCUMFERENCE, ConfigurationError
from tokenpad.core.linear import LINEAR_LAYOUTS, get_linear_layout
from tokenpad.core.types import (
    CoordinateList,
    Curve,
    PlacementRequest,
    PlacementResult,
    SweepResult,
)
from tokenpad.core.validate import degenerate_input_keys, warn_degenerate

logger = logging.getLogger(__name__)

LAYOUT_ALIASES: dict[str, str] = {
    "rectangular_ellipse": "rect_ellipse",
    "rectangle": "rect",
}


def resolve_layout(name: str) -> str:
    """Canonical layout name for name or one of its aliases. Raises ConfigurationError if unknown."""
    canonical = LAYOUT_ALIASES.get(name, name)
    if canonical in CURVE_FAMILIES or canonical in LINEAR_LAYOUTS:
        return canonical
    raise ConfigurationError(f'Unrecognised layout type "{name}"')


def derive_curve(
    request: PlacementRequest,
    margin_x: float = MARGIN_X_PX,
    margin_y: float = MARGIN_Y_PX,
) -> Curve:
    """Radii from container minus token and margin, halved; the centre sits at (rx, ry)."""
    rx = (request.container_width - (request.token_width + margin_x)) / 2
    ry = (request.container_height - (request.token_height + margin_y)) / 2
    return Curve(rx=rx, ry=ry, cx=rx, cy=ry)


def parameter_grid(family: CurveFamily) -> np.ndarray:
    """
    t_0 = phase, t_k+1 = t_k + precision, while t_k < phase + 2π.
    cumsum accumulates sequentially, so the grid matches a stepping loop exactly.
    """
    start, end = family.domain
    n_max = int(math.ceil(TWO_PI / family.precision)) + 2
    steps = np.full(n_max, family.precision)
    steps[0] = start
    t = np.cumsum(steps)
    return t[: int(np.searchsorted(t, end, side="left"))]


def _emission_indices(run: np.ndarray, circumference: float, total: int) -> list[int]:
    """
    Step index of each emitted point, greedy in sweep order.
    A single step can hold more than circumference / total near a singular
    speed; thresholds still unreached when the walk ends take the last
    free grid steps, so only a grid shorter than total yields fewer points.
    """
    with np.errstate(all="ignore"):
        fraction = total * run / circumference
    indices: list[int] = []
    start = 0
    for next_point in range(total):
        hits = np.flatnonzero(fraction[start:] >= next_point)
        if hits.size == 0:
            break
        idx = start + int(hits[0])
        indices.append(idx)
        start = idx + 1
    missing = total - len(indices)
    if missing > 0:
        n = run.size
        indices.extend(range(max(start, n - missing), n))
    return indices


def sweep_curve(family: CurveFamily, curve: Curve, total: int) -> SweepResult:
    """Run both integration passes; indices is empty when the circumference is zero or not finite."""
    t = parameter_grid(family)
    with np.errstate(all="ignore"):
        speed = np.asarray(family.speed(t, curve.rx, curve.ry), dtype=float)
        cumulative = np.cumsum(speed)
    circumference = float(cumulative[-1]) if cumulative.size else 0.0
    run = np.concatenate(([0.0], cumulative[:-1]))
    sweep = SweepResult(t=t, speed=speed, run=run, circumference=circumference)
    if circumference != 0 and math.isfinite(circumference):
        sweep.indices = _emission_indices(run, circumference, total)
    logger.debug(
        "Swept %s: %d steps, circumference %.6g, %d/%d points",
        family.name, t.size, circumference, len(sweep.indices), total,
    )
    return sweep


def _points(family: CurveFamily, curve: Curve, t: np.ndarray) -> CoordinateList:
    with np.errstate(all="ignore"):
        xs, ys = family.point(t, curve.cx, curve.cy, curve.rx, curve.ry)
    xs = np.broadcast_to(xs, t.shape)
    ys = np.broadcast_to(ys, t.shape)
    return tuple((float(x), float(y)) for x, y in zip(xs, ys))


def _place_on_curve(
    family: CurveFamily,
    request: PlacementRequest,
    margin_x: float,
    margin_y: float,
    warnings: list[str],
) -> PlacementResult:
    curve = derive_curve(request, margin_x, margin_y)
    sweep = sweep_curve(family, curve, request.total)
    if not sweep.indices:
        # Nothing to walk: every token collapses onto the start of the curve
        warnings.append(ZERO_CIRCUMFERENCE)
        start = np.full(request.total, family.phase)
        coordinates = _points(family, curve, start)
    else:
        coordinates = _points(family, curve, sweep.t[sweep.indices])
        if len(coordinates) < request.total:
            warnings.append(TOO_MANY_TOKENS)
    if SWEEP_DEBUG:
        for i, (idx, xy) in enumerate(zip(sweep.indices, coordinates)):
            logger.debug("%s point %d at step %d t=%.6f -> %s", family.name, i, idx, sweep.t[idx], xy)
    return PlacementResult(
        request=request,
        layout=family.name,
        coordinates=coordinates,
        circumference=sweep.circumference,
        precision=family.precision,
        n_steps=int(sweep.t.size),
        warnings=warnings,
    )


def compute_placements(
    request: PlacementRequest,
    margin_x: float = MARGIN_X_PX,
    margin_y: float = MARGIN_Y_PX,
) -> PlacementResult:
    """
    Coordinates for request.total tokens on request.layout.
    Unknown layout raises ConfigurationError; degenerate input only warns.
    """
    layout = resolve_layout(request.layout)
    warnings = degenerate_input_keys(request)

    if layout in LINEAR_LAYOUTS:
        result = PlacementResult(
            request=request,
            layout=layout,
            coordinates=get_linear_layout(layout)(request),
            warnings=warnings,
        )
    elif request.total <= 0:
        family = get_curve_family(layout)
        result = PlacementResult(
            request=request,
            layout=layout,
            coordinates=(),
            precision=family.precision,
            warnings=warnings,
        )
    else:
        result = _place_on_curve(get_curve_family(layout), request, margin_x, margin_y, warnings)

    if result.warnings:
        logger.warning("Degenerate placement for %s: %s", request, ", ".join(result.warnings))
        warn_degenerate(result.warnings)
    return result


def compute_coordinates(request: PlacementRequest) -> CoordinateList:
    """Coordinates only, with default margins."""
    return compute_placements(request).coordinates
