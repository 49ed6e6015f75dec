"""Global thresholding — Otsu's method over an 8-bit intensity histogram."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

_LEVELS = 256


def intensity_histogram(gray: NDArray[np.uint8]) -> NDArray[np.int64]:
    """256-bin histogram of an intensity buffer."""
    return np.bincount(gray.reshape(-1), minlength=_LEVELS).astype(np.int64)


def otsu_threshold_from_histogram(hist: NDArray[np.int64]) -> int:
    """Otsu split of a 256-bin histogram.

    The dark class holds intensities <= t* where t* maximizes the
    between-class variance wB·wF·(mB−mF)². Only strict improvements replace
    the best split, so ties keep the lowest t*. The returned threshold is the
    first intensity of the bright class (t* + 1), so ``gray < threshold``
    selects exactly the dark class. Returns 0 when no split has positive
    variance (single-intensity or empty image).
    """
    counts = [int(c) for c in hist]
    total = sum(counts)
    total_sum = sum(t * c for t, c in enumerate(counts))

    sum_b = 0
    w_b = 0
    max_variance = 0.0
    best_t: int | None = None

    for t in range(_LEVELS):
        w_b += counts[t]
        if w_b == 0:
            continue
        w_f = total - w_b
        if w_f == 0:
            break
        sum_b += t * counts[t]
        m_b = sum_b / w_b
        m_f = (total_sum - sum_b) / w_f
        variance = w_b * w_f * (m_b - m_f) ** 2
        if variance > max_variance:
            max_variance = variance
            best_t = t

    return 0 if best_t is None else best_t + 1


def otsu_threshold(gray: NDArray[np.uint8]) -> int:
    return otsu_threshold_from_histogram(intensity_histogram(gray))


def binarize(gray: NDArray[np.uint8], threshold: int) -> NDArray[np.uint8]:
    """Dark-on-light mask: 1 where intensity < threshold."""
    return (gray < threshold).astype(np.uint8)
