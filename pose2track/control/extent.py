"""Running bounding box of observed head positions.

The room center is never configured. It is the midpoint of the widest
positions seen so far in this process, so it settles as the user walks the
edges of the tracked volume. Early readings lean toward the seed values.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

# Z starts inverted (min above max) so the first Z center sits well forward.
DEFAULT_SEED_MIN = (0.0, 0.0, 1000.0)
DEFAULT_SEED_MAX = (0.0, 0.0, 0.0)


class ExtentTracker:
    """Per-axis min/max over every observed position.

    The extent only ever widens. There is no reset; create a new tracker
    for a new session.
    """

    def __init__(
        self,
        seed_min: Sequence[float] = DEFAULT_SEED_MIN,
        seed_max: Sequence[float] = DEFAULT_SEED_MAX,
    ):
        self._min = np.asarray(seed_min, dtype=np.float64).reshape(3).copy()
        self._max = np.asarray(seed_max, dtype=np.float64).reshape(3).copy()
        self.samples = 0

    @property
    def minimum(self) -> np.ndarray:
        return self._min.copy()

    @property
    def maximum(self) -> np.ndarray:
        return self._max.copy()

    def observe(self, x: float, y: float, z: float) -> None:
        p = (float(x), float(y), float(z))
        if not all(math.isfinite(v) for v in p):
            raise ValueError(f"extent requires finite coordinates, got {p!r}")
        v = np.array(p, dtype=np.float64)
        np.minimum(self._min, v, out=self._min)
        np.maximum(self._max, v, out=self._max)
        self.samples += 1

    def center(self) -> np.ndarray:
        return (self._min + self._max) / 2.0

    def __repr__(self) -> str:
        return (
            f"ExtentTracker(min={self._min.tolist()}, max={self._max.tolist()}, "
            f"samples={self.samples})"
        )
