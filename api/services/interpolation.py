# services/interpolation.py
# 1-D linear interpolation of scalars and of whole curves

from typing import Sequence, List

import numpy as np

from errors import DataIntegrityError, DegenerateInterpolationError


def interpolate(x0: float, y0: float, x1: float, y1: float, x: float) -> float:
    """Value at `x` on the line through (x0, y0) and (x1, y1)."""
    if x0 == x1:
        raise DegenerateInterpolationError(f"Cannot interpolate between two samples at x={x0}")
    return y0 + (x - x0) * (y1 - y0) / (x1 - x0)


def interpolate_curve(x0: float, curve0: Sequence[float],
                      x1: float, curve1: Sequence[float], x: float) -> List[float]:
    """
    Interpolate two curves index by index.

    Both curves sample the same IML axis, so they must have the same
    length. A mismatch means the dataset is corrupt and is not truncated.
    """
    if len(curve0) != len(curve1):
        raise DataIntegrityError(
            f"Curve lengths differ ({len(curve0)} vs {len(curve1)})")
    if x0 == x1:
        raise DegenerateInterpolationError(f"Cannot interpolate between two curves at x={x0}")

    y0 = np.asarray(curve0, dtype=float)
    y1 = np.asarray(curve1, dtype=float)
    return (y0 + (x - x0) * (y1 - y0) / (x1 - x0)).tolist()
