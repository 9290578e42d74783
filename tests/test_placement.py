# tests/test_placement.py
"""
Placement engine: point counts, empty totals, canonical start, equal
arc-length spacing, fixed diagonal scenario, degenerate input.
"""

from __future__ import annotations

import dataclasses
import math

import numpy as np
import pytest

from tokenpad.core.curves import CURVE_FAMILIES, ELLIPSE, RECT_ELLIPSE, get_curve_family
from tokenpad.core.error_codes import (
    EMPTY_TOTAL,
    TOKEN_EXCEEDS_CONTAINER,
    TOO_MANY_TOKENS,
    ZERO_CIRCUMFERENCE,
    ConfigurationError,
    DegenerateInputWarning,
)
from tokenpad.core.placement import (
    compute_coordinates,
    compute_placements,
    derive_curve,
    parameter_grid,
    resolve_layout,
    sweep_curve,
)
from tokenpad.core.types import PlacementRequest

ALL_LAYOUTS = ("ellipse", "rect_ellipse", "rect", "diagonal", "horizontal", "vertical", "linear")


def _request(layout: str, total: int, w: float = 400.0, h: float = 300.0, token: float = 40.0) -> PlacementRequest:
    return PlacementRequest(w, h, token, token, total, layout)


@pytest.mark.parametrize("layout", ALL_LAYOUTS)
@pytest.mark.parametrize("total", range(1, 51))
def test_returns_exactly_total_points(layout: str, total: int) -> None:
    coords = compute_coordinates(_request(layout, total))
    assert len(coords) == total
    assert all(len(xy) == 2 for xy in coords)


@pytest.mark.parametrize("layout", ALL_LAYOUTS)
def test_total_zero_is_empty(layout: str) -> None:
    with pytest.warns(DegenerateInputWarning):
        result = compute_placements(_request(layout, 0))
    assert result.coordinates == ()
    assert EMPTY_TOTAL in result.warnings


@pytest.mark.parametrize("name", sorted(CURVE_FAMILIES))
def test_total_zero_never_evaluates_speed(name: str, monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []
    family = CURVE_FAMILIES[name]

    def spy(t, rx, ry):
        calls.append(t)
        return family.speed(t, rx, ry)

    monkeypatch.setitem(CURVE_FAMILIES, name, dataclasses.replace(family, speed=spy))
    with pytest.warns(DegenerateInputWarning):
        assert compute_coordinates(_request(name, 0)) == ()
    assert calls == []

    compute_coordinates(_request(name, 3))
    assert len(calls) == 1  # one vectorized call covers both passes


def test_ellipse_four_points_at_quarter_turns() -> None:
    coords = compute_coordinates(_request("ellipse", 4))
    # rx = (400 - 60) / 2 = 170, ry = (300 - 79) / 2 = 110.5, centre (rx, ry)
    expected = [(170.0, 0.0), (340.0, 110.5), (170.0, 221.0), (0.0, 110.5)]
    assert len(coords) == 4
    for (x, y), (ex, ey) in zip(coords, expected):
        assert x == pytest.approx(ex, abs=0.5)
        assert y == pytest.approx(ey, abs=0.5)


def test_first_point_is_top_centre() -> None:
    for layout in ("ellipse", "rect"):
        x, y = compute_coordinates(_request(layout, 7))[0]
        assert x == pytest.approx(170.0, abs=1e-6)
        assert y == pytest.approx(0.0, abs=1e-6)


def test_identical_requests_give_identical_output() -> None:
    for layout in ("ellipse", "rect_ellipse", "rect"):
        a = compute_coordinates(_request(layout, 9))
        b = compute_coordinates(_request(layout, 9))
        assert a == b


def test_diagonal_scenario_exact() -> None:
    req = PlacementRequest(100, 100, 10, 10, 5, "diagonal")
    assert compute_coordinates(req) == ((0, 0), (18, 18), (36, 36), (54, 54), (72, 72))


@pytest.mark.parametrize("total", [3, 8, 13, 50])
def test_rect_gaps_within_one_step_of_even(total: int) -> None:
    req = _request("rect", total)
    sweep = sweep_curve(get_curve_family("rect"), derive_curve(req), total)
    assert len(sweep.indices) == total
    runs = sweep.run[sweep.indices]
    gaps = np.diff(np.append(runs, sweep.circumference))
    target = sweep.circumference / total
    step = float(sweep.speed.max())
    assert np.all(gaps <= target + step)
    assert np.all(gaps[:-1] >= target - step)


def test_emission_thresholds_are_crossed_in_order() -> None:
    total = 11
    req = _request("rect_ellipse", total)
    sweep = sweep_curve(RECT_ELLIPSE, derive_curve(req), total)
    fractions = total * sweep.run[sweep.indices] / sweep.circumference
    for k, frac in enumerate(fractions):
        assert frac >= k
    assert sweep.indices == sorted(sweep.indices)


def test_parameter_grid_sizes() -> None:
    t = parameter_grid(ELLIPSE)
    assert t[0] == ELLIPSE.phase
    assert t.size == 6284
    assert t[-1] < ELLIPSE.phase + 2 * math.pi
    assert parameter_grid(RECT_ELLIPSE).size == 628319


def test_derive_curve_margins() -> None:
    curve = derive_curve(_request("ellipse", 1))
    assert (curve.rx, curve.ry) == (170.0, 110.5)
    assert (curve.cx, curve.cy) == (curve.rx, curve.ry)
    custom = derive_curve(_request("ellipse", 1), margin_x=0, margin_y=0)
    assert (custom.rx, custom.ry) == (180.0, 130.0)


def test_layout_aliases_resolve() -> None:
    assert resolve_layout("rectangular_ellipse") == "rect_ellipse"
    assert resolve_layout("rectangle") == "rect"
    assert compute_coordinates(_request("rectangle", 6)) == compute_coordinates(_request("rect", 6))
    result = compute_placements(_request("rectangular_ellipse", 2))
    assert result.layout == "rect_ellipse"


def test_unknown_layout_raises_even_when_empty() -> None:
    with pytest.raises(ConfigurationError, match="hexagon"):
        compute_placements(_request("hexagon", 0))
    with pytest.raises(ConfigurationError):
        compute_placements(_request("", 4))


def test_token_larger_than_container_still_places() -> None:
    req = PlacementRequest(30, 30, 40, 40, 6, "rect")
    with pytest.warns(DegenerateInputWarning):
        result = compute_placements(req)
    assert TOKEN_EXCEEDS_CONTAINER in result.warnings
    assert len(result.coordinates) == 6
    assert all(math.isfinite(v) for xy in result.coordinates for v in xy)


def test_zero_radii_collapse_onto_one_point() -> None:
    # rx = (60 - (40 + 20)) / 2 = 0, ry = (79 - (40 + 39)) / 2 = 0
    req = PlacementRequest(60, 79, 40, 40, 5, "ellipse")
    with pytest.warns(DegenerateInputWarning):
        result = compute_placements(req)
    assert ZERO_CIRCUMFERENCE in result.warnings
    assert result.coordinates == ((0.0, 0.0),) * 5


def test_single_zero_radius_collapses_onto_a_line() -> None:
    req = PlacementRequest(60, 300, 40, 40, 4, "ellipse")
    coords = compute_coordinates(req)
    assert len(coords) == 4
    assert all(x == pytest.approx(0.0) for x, _ in coords)


def test_non_finite_sizes_do_not_crash() -> None:
    req = PlacementRequest(float("nan"), 300, 40, 40, 3, "ellipse")
    with pytest.warns(DegenerateInputWarning):
        result = compute_placements(req)
    assert len(result.coordinates) == 3


def test_more_tokens_than_steps_is_truncated() -> None:
    total = 7000
    with pytest.warns(DegenerateInputWarning):
        result = compute_placements(_request("ellipse", total))
    assert TOO_MANY_TOKENS in result.warnings
    assert len(result.coordinates) <= result.n_steps < total


@pytest.mark.parametrize("total", [480, 500])
def test_rect_ellipse_many_tokens_keeps_full_length(total: int) -> None:
    result = compute_placements(_request("rect_ellipse", total))
    assert len(result.coordinates) == total
    assert TOO_MANY_TOKENS not in result.warnings
    sweep = sweep_curve(RECT_ELLIPSE, derive_curve(result.request), total)
    assert len(sweep.indices) == total
    assert sweep.indices == sorted(set(sweep.indices))


def test_result_metadata() -> None:
    result = compute_placements(_request("rect_ellipse", 4))
    assert result.precision == 0.00001
    assert result.n_steps == 628319
    assert result.circumference > 0
    assert result.warnings == []
    linear = compute_placements(_request("diagonal", 4))
    assert linear.circumference is None
    assert linear.n_steps == 0
