# tokenpad/core/config.py
"""
Central configuration for token placement.
All tunable values live here; no magic numbers in other modules.
"""

from __future__ import annotations

import math
import os

# ----- Paths (repo-relative) -----
REPORTS_DIR: str = "reports"

# ----- Curve radii -----
MARGIN_X_PX: float = 20.0
"""Horizontal slack (px) subtracted from the container before halving into rX."""

MARGIN_Y_PX: float = 39.0
"""Vertical slack (px) subtracted from the container before halving into rY."""

# ----- Integration step (radians) -----
PRECISION_DEFAULT: float = 0.001
"""Sweep step for ellipse and rect."""

PRECISION_RECT_ELLIPSE: float = 0.00001
"""Sweep step for rect_ellipse; its speed is singular at the axis crossings."""

# ----- Phase offsets (radians) -----
PHASE_ELLIPSE: float = -0.5 * math.pi
"""Index 0 at top-centre."""

PHASE_EPSILON: float = 0.000001
"""Shift keeping rect_ellipse samples off cos t = 0 and sin t = 0."""

PHASE_RECT_ELLIPSE: float = -0.5 * math.pi + PHASE_EPSILON

PHASE_RECT: float = -0.75 * math.pi
"""Index 0 at top-centre of the rectangle parametrization."""

# ----- Linear row layout -----
LINEAR_MIN_OFFSET_PX: float = 15.0
LINEAR_OFFSET_DIVISOR: float = 18.0
"""Row spacing: max(LINEAR_MIN_OFFSET_PX, container_width / LINEAR_OFFSET_DIVISOR)."""

# ----- Cache -----
CACHE_QUANTUM_PX: float = 1.0
"""Sizes are rounded to this quantum when comparing cache keys; 0 disables."""

# ----- Evaluation -----
EVAL_TOTALS_DEFAULT: tuple[int, ...] = (1, 2, 3, 4, 5, 8, 12, 20)
EVAL_CONTAINER_PX: tuple[float, float] = (400.0, 300.0)
EVAL_TOKEN_PX: float = 40.0
SPACING_TOLERANCE_REL: float = 0.1
"""Max relative deviation of an arc gap from the mean for a layout to count as even."""

# ----- Rendering -----
RENDER_WIDTH_PX: int = 800
RENDER_HEIGHT_PX: int = 600
RENDER_CURVE_SAMPLES: int = 720

# ----- Debug flags -----
SWEEP_DEBUG: bool = os.environ.get("SWEEP_DEBUG", "").lower() in ("1", "true", "yes")
"""Log every emitted sweep point. Set env SWEEP_DEBUG=1 to enable."""
