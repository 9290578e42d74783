# tokenpad/core/reporting.py
"""
Create reports/<run_name>/ and write placement.json, run_metadata.json.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path

from tokenpad.core.config import (
    CACHE_QUANTUM_PX,
    MARGIN_X_PX,
    MARGIN_Y_PX,
    PHASE_ELLIPSE,
    PHASE_RECT,
    PHASE_RECT_ELLIPSE,
    PRECISION_DEFAULT,
    PRECISION_RECT_ELLIPSE,
    REPORTS_DIR,
)
from tokenpad.core.types import PlacementRequest, PlacementResult

SCHEMA_VERSION = "1.0"


def placement_to_dict(result: PlacementResult) -> dict:
    """Structure for placement.json."""
    return {
        "schema_version": SCHEMA_VERSION,
        "request": asdict(result.request),
        "result": {
            "layout": result.layout,
            "coordinates": [{"x": float(x), "y": float(y)} for x, y in result.coordinates],
            "circumference": result.circumference,
            "precision": result.precision,
            "n_steps": result.n_steps,
        },
        "warnings": list(result.warnings),
    }


def run_metadata_dict(run_name: str, request: PlacementRequest) -> dict:
    """Timestamp and config snapshot for run_metadata.json."""
    return {
        "run_name": run_name,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "request": asdict(request),
        "config": {
            "MARGIN_X_PX": MARGIN_X_PX,
            "MARGIN_Y_PX": MARGIN_Y_PX,
            "PRECISION_DEFAULT": PRECISION_DEFAULT,
            "PRECISION_RECT_ELLIPSE": PRECISION_RECT_ELLIPSE,
            "PHASE_ELLIPSE": PHASE_ELLIPSE,
            "PHASE_RECT_ELLIPSE": PHASE_RECT_ELLIPSE,
            "PHASE_RECT": PHASE_RECT,
            "CACHE_QUANTUM_PX": CACHE_QUANTUM_PX,
        },
    }


def ensure_report_dir(
    repo_root: Path,
    run_name: str,
    output_dir: str | None = None,
) -> Path:
    """Create output_dir/<run_name>/ under repo_root; return path. Default output_dir from config."""
    base = output_dir if output_dir is not None else REPORTS_DIR
    out = (repo_root / base).resolve() / run_name
    out.mkdir(parents=True, exist_ok=True)
    return out


def write_placement_json(report_dir: Path, result: PlacementResult) -> Path:
    """Write placement.json to report_dir. Returns path to file."""
    path = report_dir / "placement.json"
    path.write_text(json.dumps(placement_to_dict(result), indent=2), encoding="utf-8")
    return path


def write_run_metadata_json(report_dir: Path, run_name: str, request: PlacementRequest) -> Path:
    """Write run_metadata.json to report_dir."""
    path = report_dir / "run_metadata.json"
    path.write_text(json.dumps(run_metadata_dict(run_name, request), indent=2), encoding="utf-8")
    return path
