# tests/test_evaluate.py
"""
Arc-length spacing measured on the true curve. Ellipse, rect and
rect_ellipse must be evenly spaced by arc length, not by angle.
"""

from __future__ import annotations

import csv
import json
import math

import pytest

from tokenpad.core.evaluate import evaluate_grid, run_evaluation, spacing_metrics, summarize
from tokenpad.core.placement import compute_placements, derive_curve
from tokenpad.core.types import PlacementRequest


def _metrics(layout: str, total: int):
    return spacing_metrics(compute_placements(PlacementRequest(400, 300, 40, 40, total, layout)))


@pytest.mark.parametrize(
    "layout,total,tolerance",
    [
        ("ellipse", 8, 0.01),
        ("ellipse", 20, 0.01),
        ("rect", 8, 0.01),
        ("rect", 13, 0.01),
        ("rect_ellipse", 6, 0.1),
    ],
)
def test_closed_curves_evenly_spaced_by_arc_length(layout: str, total: int, tolerance: float) -> None:
    m = _metrics(layout, total)
    assert m.n_points == total
    assert m.max_rel_deviation < tolerance
    assert m.mean_gap * total == pytest.approx(m.length, rel=1e-6)


def test_rect_ellipse_not_evenly_spaced_by_angle() -> None:
    req = PlacementRequest(400, 300, 40, 40, 8, "rect_ellipse")
    curve = derive_curve(req)
    coords = compute_placements(req).coordinates
    angles = [math.atan2(y - curve.cy, x - curve.cx) for x, y in coords]
    steps = [(b - a) % (2 * math.pi) for a, b in zip(angles, angles[1:])]
    # Equal arc length on a squarish curve bunches angles away from the axes
    assert max(steps) - min(steps) > 0.05


def test_diagonal_spacing_is_uniform() -> None:
    m = _metrics("diagonal", 5)
    assert m.cv == pytest.approx(0.0, abs=1e-12)
    assert m.max_rel_deviation == pytest.approx(0.0, abs=1e-12)


def test_single_point_metrics() -> None:
    m = _metrics("horizontal", 1)
    assert m.n_points == 1
    assert m.mean_gap == 0.0 and m.cv == 0.0


def test_summarize_by_layout() -> None:
    rows = evaluate_grid(layouts=("ellipse", "diagonal"), totals=(2, 4))
    assert len(rows) == 4
    summary = summarize(rows)
    assert set(summary) == {"ellipse", "diagonal"}
    assert summary["ellipse"]["n_runs"] == 2
    assert summary["ellipse"]["even_rate"] == 1.0


def test_run_evaluation_writes_reports(tmp_path) -> None:
    report_dir = run_evaluation("eval", tmp_path, layouts=("ellipse", "rect"), totals=(3, 5))
    assert report_dir == (tmp_path / "reports" / "eval").resolve()
    with open(report_dir / "evaluation_results.csv", newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 4
    assert {r["layout"] for r in rows} == {"ellipse", "rect"}
    summary = json.loads((report_dir / "evaluation_summary.json").read_text(encoding="utf-8"))
    assert summary["run_name"] == "eval"
    assert summary["by_layout"]["rect"]["n_runs"] == 2
