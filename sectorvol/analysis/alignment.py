"""
Trailing alignment of unequal-length series.

Every component that combines series of different lengths goes through
these helpers so that "aligned" always means: keep the most recent
observations, drop the oldest.
"""
from typing import List, Sequence, Tuple

import numpy as np


def right_align(series: Sequence[float], length: int) -> np.ndarray:
    """Last `length` elements of `series`; the whole series if it is shorter."""
    arr = np.asarray(series, dtype=float)
    if length <= 0:
        return arr[:0]
    if len(arr) <= length:
        return arr.copy()
    return arr[len(arr) - length:].copy()


def right_align_padded(series: Sequence[float], length: int, fill: float = 0.0) -> np.ndarray:
    """Exactly `length` elements: trailing values, left-padded with `fill` when short."""
    arr = right_align(series, length)
    if len(arr) == length:
        return arr
    pad = np.full(max(length, 0) - len(arr), fill, dtype=float)
    return np.concatenate([pad, arr])


def right_align_all(series: Sequence[Sequence[float]]) -> Tuple[List[np.ndarray], int]:
    """Trim every series to the shortest length. Returns (aligned, min_len)."""
    if len(series) == 0:
        return [], 0
    min_len = min(len(s) for s in series)
    return [right_align(s, min_len) for s in series], min_len
