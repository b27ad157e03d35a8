# -*- coding: utf-8 -*-
"""Per-column visual dissimilarity between two rendered strings."""

from typing import Optional, Tuple

import numpy as np

from visdist.pixel_buffer import ColumnSlice, PixelBuffer

# Three 8-bit channels per pixel.
_CHANNEL_SCALE = 3 * 256


def dissimilarity(
    slice_a: Optional[ColumnSlice],
    slice_b: Optional[ColumnSlice],
) -> float:
    """Compute the normalized visual difference between two columns.

    Args:
        slice_a: Column of the first buffer, or None for "no column".
        slice_b: Column of the second buffer, or None for "no column".

    Returns:
        Value in [0, 1]: 0.0 for pixel-identical columns, 1.0 when either
        column is absent or every channel differs maximally.

    Note:
        Columns of different heights score 0.0, not 1.0. Both buffers come
        from the same font metrics so this should not happen in practice,
        but existing scores depend on it and it is kept as is.
    """
    if slice_a is None or slice_b is None:
        return 1.0
    if slice_a.height != slice_b.height:
        return 0.0
    if slice_a.height == 0 or slice_a.same_as(slice_b):
        return 0.0

    diff = np.abs(
        slice_a.pixels.astype(np.int32) - slice_b.pixels.astype(np.int32)
    ).sum()
    return float(diff) / (slice_a.height * _CHANNEL_SCALE)


def pairwise_dissimilarity(
    buffer_a: PixelBuffer,
    buffer_b: PixelBuffer,
) -> Tuple[np.ndarray, np.ndarray]:
    """Compute dissimilarity for every column pair of two buffers at once.

    Produces exactly the values ``dissimilarity(a.column(i), b.column(j))``
    would, without a Python-level loop over pixels.

    Args:
        buffer_a: First buffer (Wa columns).
        buffer_b: Second buffer (Wb columns).

    Returns:
        Tuple of (costs, identical):
            - costs: float64 dissimilarities. Shape: [Wa, Wb]
            - identical: True where the two columns are pixel-identical.
              Shape: [Wa, Wb]
    """
    wa, wb = buffer_a.width, buffer_b.width

    if buffer_a.height != buffer_b.height:
        # Mismatched heights never match exactly and always score 0.0.
        return np.zeros((wa, wb), dtype=np.float64), np.zeros((wa, wb), dtype=bool)

    height = buffer_a.height
    if height == 0:
        return np.zeros((wa, wb), dtype=np.float64), np.ones((wa, wb), dtype=bool)

    # [H, W, 3] -> [W, H*3]
    cols_a = buffer_a.to_array().transpose(1, 0, 2).reshape(wa, height * 3).astype(np.int32)
    cols_b = buffer_b.to_array().transpose(1, 0, 2).reshape(wb, height * 3).astype(np.int32)

    # One row of A at a time keeps memory at O(Wb * H).
    totals = np.zeros((wa, wb), dtype=np.int64)
    for i in range(wa):
        totals[i] = np.abs(cols_b - cols_a[i]).sum(axis=1)
    costs = totals.astype(np.float64) / (height * _CHANNEL_SCALE)

    return costs, totals == 0
