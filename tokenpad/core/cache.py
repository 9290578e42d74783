# tokenpad/core/cache.py
"""
Last-result memo for one board. Each board owns its own PlacementCache, so
independent containers never share or invalidate each other's placements.
"""

from __future__ import annotations

import dataclasses
import logging
import math
import threading
from typing import Callable

from tokenpad.core.config import CACHE_QUANTUM_PX
from tokenpad.core.placement import compute_placements
from tokenpad.core.types import PlacementRequest, PlacementResult

logger = logging.getLogger(__name__)

CacheKey = tuple[int, float, float, float, float, str]


def _quantize(value: float, quantum: float) -> float:
    """Round to the nearest quantum; non-finite values and quantum <= 0 pass through."""
    if quantum <= 0 or not math.isfinite(value):
        return value
    return round(value / quantum) * quantum


class PlacementCache:
    """
    Holds the last request key and its PlacementResult. A lookup with an equal
    key returns the cached object itself; any changed field recomputes.
    Sizes are compared after rounding to quantum_px so sub-pixel reflow jitter
    does not trigger a new sweep. Such a hit shares the cached coordinates
    but carries the caller's request.
    """

    def __init__(
        self,
        quantum_px: float = CACHE_QUANTUM_PX,
        compute: Callable[[PlacementRequest], PlacementResult] = compute_placements,
    ) -> None:
        self.quantum_px = quantum_px
        self._compute = compute
        self._lock = threading.Lock()
        self._key: CacheKey | None = None
        self._result: PlacementResult | None = None
        self.hits = 0
        self.misses = 0

    def key_for(self, request: PlacementRequest) -> CacheKey:
        q = self.quantum_px
        return (
            request.total,
            _quantize(request.token_width, q),
            _quantize(request.token_height, q),
            _quantize(request.container_width, q),
            _quantize(request.container_height, q),
            request.layout,
        )

    def get(self, request: PlacementRequest) -> PlacementResult:
        """Cached result for an equal key, else compute, store and return a fresh one."""
        key = self.key_for(request)
        with self._lock:
            if self._result is not None and key == self._key:
                self.hits += 1
                logger.debug("Placement cache hit: %s", key)
                if self._result.request == request:
                    return self._result
                # Same pixel bucket, different raw sizes: report the caller's request
                return dataclasses.replace(self._result, request=request)
            self.misses += 1
            logger.debug("Placement cache miss: %s", key)
            result = self._compute(request)
            self._key = key
            self._result = result
            return result

    @property
    def last(self) -> PlacementResult | None:
        return self._result

    def clear(self) -> None:
        with self._lock:
            self._key = None
            self._result = None
