# tokenpad/core/validate.py
"""
Detect degenerate placement input. Nothing here raises: callers get warning
keys and still receive a structurally valid coordinate list.
"""

from __future__ import annotations

import math
import warnings

from tokenpad.core.error_codes import (
    EMPTY_TOTAL,
    TOKEN_EXCEEDS_CONTAINER,
    DegenerateInputWarning,
    user_message,
)
from tokenpad.core.types import PlacementRequest


def _not_smaller(token: float, container: float) -> bool:
    # NaN compares False on both sides; treat it as fitting
    return math.isfinite(token) and math.isfinite(container) and token >= container


def degenerate_input_keys(request: PlacementRequest) -> list[str]:
    """Warning keys for a request that is reachable from the UI but places poorly."""
    keys: list[str] = []
    if request.total <= 0:
        keys.append(EMPTY_TOTAL)
    if _not_smaller(request.token_width, request.container_width) or _not_smaller(
        request.token_height, request.container_height
    ):
        keys.append(TOKEN_EXCEEDS_CONTAINER)
    return keys


def warn_degenerate(keys: list[str], stacklevel: int = 3) -> None:
    """Emit one DegenerateInputWarning per key."""
    for key in keys:
        warnings.warn(f"{key}: {user_message(key)}", DegenerateInputWarning, stacklevel=stacklevel)
