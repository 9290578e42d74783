# tokenpad/core/runner.py
"""
CLI entrypoint: compute placements for one board, export placement.json,
run_metadata.json and a PNG preview. --evaluate runs the spacing grid instead.
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from tokenpad.core.config import EVAL_TOTALS_DEFAULT
from tokenpad.core.placement import compute_placements
from tokenpad.core.reporting import (
    ensure_report_dir,
    write_placement_json,
    write_run_metadata_json,
)
from tokenpad.core.types import PlacementRequest


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Place tokens evenly around a container.")
    p.add_argument("--layout", type=str, default="ellipse", help="ellipse, rect_ellipse, rect, diagonal, horizontal, vertical, linear")
    p.add_argument("--width", type=float, default=400.0, help="Container width (px)")
    p.add_argument("--height", type=float, default=300.0, help="Container height (px)")
    p.add_argument("--token-width", type=float, default=40.0, dest="token_width", help="Token width (px)")
    p.add_argument("--token-height", type=float, default=None, dest="token_height", help="Token height (px); defaults to token width")
    p.add_argument("--total", type=int, default=8, help="Number of tokens")
    p.add_argument("--run-name", type=str, default="run", dest="run_name", help="Reports subdir name")
    p.add_argument("--output-dir", type=str, default="reports", dest="output_dir", help="Output directory (repo-relative)")
    p.add_argument("--repo-root", type=str, default=None, dest="repo_root", help="Repo root (default: cwd)")
    p.add_argument("--no-render", action="store_true", dest="no_render", help="Skip the PNG preview")
    p.add_argument("--evaluate", action="store_true", help="Run the spacing evaluation grid")
    p.add_argument("--totals", type=str, default="", help="Evaluation totals e.g. '4,8,12'")
    return p.parse_args(argv)


def _parse_totals(s: str) -> tuple[int, ...]:
    """Parse comma-separated totals; blanks and junk are skipped, empty falls back to defaults."""
    out: list[int] = []
    for part in (s or "").split(","):
        part = part.strip()
        if part:
            try:
                out.append(int(part))
            except ValueError:
                continue
    return tuple(out) if out else EVAL_TOTALS_DEFAULT


def main(argv: list[str] | None = None) -> None:
    log_level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=getattr(logging, log_level_name, logging.INFO))

    args = _parse_args(argv)
    repo_root = Path(args.repo_root).resolve() if args.repo_root else Path.cwd().resolve()

    if args.evaluate:
        from tokenpad.core.evaluate import run_evaluation
        out = run_evaluation(
            run_name=args.run_name,
            repo_root=repo_root,
            totals=_parse_totals(args.totals),
            output_dir=args.output_dir,
        )
        print(out / "evaluation_results.csv")
        print(out / "evaluation_summary.json")
        return

    token_height = args.token_height if args.token_height is not None else args.token_width
    request = PlacementRequest(
        container_width=args.width,
        container_height=args.height,
        token_width=args.token_width,
        token_height=token_height,
        total=args.total,
        layout=args.layout,
    )
    result = compute_placements(request)

    report_dir = ensure_report_dir(repo_root, args.run_name, output_dir=args.output_dir)
    paths = [
        write_placement_json(report_dir, result),
        write_run_metadata_json(report_dir, args.run_name, request),
    ]
    if not args.no_render:
        from tokenpad.core.render import render_placement
        png_path = report_dir / "placement.png"
        render_placement(result, png_path)
        paths.append(png_path)

    for p in paths:
        print(p)
    print("Layout used:", result.layout)


if __name__ == "__main__":
    main()
