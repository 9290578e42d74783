# tokenpad/core/evaluate.py
"""
Spacing evaluation: how evenly tokens sit along their reference curve,
measured on a shapely polyline rather than the engine's own speed sums.
Writes evaluation_results.csv and evaluation_summary.json under
reports/<run_name>/.
"""

from __future__ import annotations

import csv
import json
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path

import numpy as np

from tokenpad.core.config import (
    EVAL_CONTAINER_PX,
    EVAL_TOKEN_PX,
    EVAL_TOTALS_DEFAULT,
    SPACING_TOLERANCE_REL,
)
from tokenpad.core.curves import CURVE_FAMILIES, get_curve_family
from tokenpad.core.geometry import arc_gaps, arc_positions, chord_polyline, curve_polyline
from tokenpad.core.placement import compute_placements, derive_curve
from tokenpad.core.reporting import ensure_report_dir
from tokenpad.core.types import PlacementRequest, PlacementResult

EVAL_LAYOUTS_DEFAULT: tuple[str, ...] = ("ellipse", "rect_ellipse", "rect", "diagonal")
POLYLINE_SAMPLES: int = 20000


@dataclass
class SpacingMetrics:
    layout: str
    total: int
    n_points: int
    length: float
    mean_gap: float
    max_rel_deviation: float
    cv: float

    @property
    def even(self) -> bool:
        return self.max_rel_deviation <= SPACING_TOLERANCE_REL


def spacing_metrics(result: PlacementResult, n_samples: int | None = POLYLINE_SAMPLES) -> SpacingMetrics:
    """
    Gap statistics for one placement. Closed curves include the gap from the
    last token back to the first; straight layouts measure along their chord.
    """
    coords = result.coordinates
    if result.layout in CURVE_FAMILIES:
        line = curve_polyline(get_curve_family(result.layout), derive_curve(result.request), n_samples)
        positions = arc_positions(line, coords)
        gaps = arc_gaps(positions, line.length, closed=True)
    else:
        line = chord_polyline(coords)
        positions = arc_positions(line, coords)
        gaps = arc_gaps(positions, line.length, closed=False)

    mean_gap = float(np.mean(gaps)) if gaps.size else 0.0
    if gaps.size and mean_gap > 0:
        max_rel = float(np.max(np.abs(gaps - mean_gap)) / mean_gap)
        cv = float(np.std(gaps) / mean_gap)
    else:
        max_rel, cv = 0.0, 0.0
    return SpacingMetrics(
        layout=result.layout,
        total=result.request.total,
        n_points=len(coords),
        length=float(line.length),
        mean_gap=mean_gap,
        max_rel_deviation=max_rel,
        cv=cv,
    )


def evaluate_grid(
    layouts: tuple[str, ...] = EVAL_LAYOUTS_DEFAULT,
    totals: tuple[int, ...] = EVAL_TOTALS_DEFAULT,
    container_px: tuple[float, float] = EVAL_CONTAINER_PX,
    token_px: float = EVAL_TOKEN_PX,
) -> list[SpacingMetrics]:
    """Spacing metrics for every (layout, total) pair on one container."""
    rows: list[SpacingMetrics] = []
    width, height = container_px
    for layout in layouts:
        for total in totals:
            request = PlacementRequest(width, height, token_px, token_px, total, layout)
            rows.append(spacing_metrics(compute_placements(request)))
    return rows


def summarize(rows: list[SpacingMetrics]) -> dict:
    """Per-layout worst deviation and share of evenly spaced runs."""
    by_layout: dict[str, list[SpacingMetrics]] = {}
    for r in rows:
        by_layout.setdefault(r.layout, []).append(r)
    return {
        layout: {
            "n_runs": len(items),
            "even_rate": sum(1 for r in items if r.even) / len(items),
            "worst_rel_deviation": max(r.max_rel_deviation for r in items),
            "mean_cv": float(np.mean([r.cv for r in items])),
        }
        for layout, items in by_layout.items()
    }


def run_evaluation(
    run_name: str,
    repo_root: Path,
    layouts: tuple[str, ...] = EVAL_LAYOUTS_DEFAULT,
    totals: tuple[int, ...] = EVAL_TOTALS_DEFAULT,
    output_dir: str | None = None,
) -> Path:
    """Evaluate the grid and write CSV + JSON summary. Returns the report directory."""
    rows = evaluate_grid(layouts, totals)
    report_dir = ensure_report_dir(repo_root, run_name, output_dir=output_dir)

    csv_path = report_dir / "evaluation_results.csv"
    fieldnames = list(asdict(rows[0]).keys()) + ["even"] if rows else ["layout"]
    with open(csv_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for r in rows:
            writer.writerow({**asdict(r), "even": r.even})

    summary = {
        "run_name": run_name,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "tolerance_rel": SPACING_TOLERANCE_REL,
        "by_layout": summarize(rows),
    }
    (report_dir / "evaluation_summary.json").write_text(json.dumps(summary, indent=2), encoding="utf-8")
    return report_dir
