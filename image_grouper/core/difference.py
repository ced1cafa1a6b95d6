# image_grouper/core/difference.py

import numpy as np

from image_grouper.core.thumbnail import Thumbnail


def _scale(channel_sums) -> np.ndarray:
    # Mean absolute channel difference, rescaled from 0-255 to 0-100.
    # Sums stay below 2**24, so float32 holds them exactly.
    sums = np.asarray(channel_sums).astype(np.float32)
    return sums / np.float32(Thumbnail.TOTAL_CHANNELS) / np.float32(255.0) * np.float32(100.0)


def difference(a: Thumbnail, b: Thumbnail) -> float:
    """
    Distance between two thumbnails on a 0-100 scale.

    Purely positional: each channel value of `a` is compared with the same
    channel of the same pixel in `b`. Symmetric and zero for identical
    thumbnails. Computed in single precision.
    """
    if a.pixels.shape != b.pixels.shape:
        raise ValueError(f"Shape mismatch: {a.pixels.shape} vs {b.pixels.shape}")

    total = np.abs(a.pixels.astype(np.int32) - b.pixels.astype(np.int32)).sum()
    return float(_scale(total))


def difference_many(thumbnail: Thumbnail, stack: np.ndarray) -> np.ndarray:
    """
    Distance from `thumbnail` to every grid in `stack` at once

    Args:
        thumbnail: Thumbnail to compare
        stack: (n, 32, 32, 3) uint8 array of representative pixels

    Returns:
        (n,) float32 array, element-wise equal to difference()
    """
    if stack.shape[1:] != thumbnail.pixels.shape:
        raise ValueError(f"Shape mismatch: {thumbnail.pixels.shape} vs {stack.shape[1:]}")

    totals = np.abs(stack.astype(np.int32) - thumbnail.pixels.astype(np.int32)).sum(axis=(1, 2, 3))
    return _scale(totals)


def within_threshold(distances, threshold: float) -> np.ndarray:
    """Inclusive threshold test, with the threshold rounded to float32 like the distances"""
    return np.asarray(distances, dtype=np.float32) <= np.float32(threshold)
