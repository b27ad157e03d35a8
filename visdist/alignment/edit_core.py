# -*- coding: utf-8 -*-
"""Column-level edit distance between two rendered strings.

This module implements the alignment core:
1. Build the (Wa+1) x (Wb+1) distance matrix over the pixel columns of two
   buffers, with free matches for identical columns, a fixed cost for
   inserting or deleting a column and a dissimilarity-weighted cost for
   substituting one column for another.
2. Walk the filled matrix to recover the alignment path, one
   ``AlignedColumn`` per step, for the debug visualizer.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

import numpy as np

from visdist.alignment.column_similarity import pairwise_dissimilarity
from visdist.config import DEFAULT_BOUNDARY_COST, DEFAULT_THRESHOLD
from visdist.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


class AlignmentStep(Enum):
    """Kinds of step on an alignment path."""

    MATCH = "MATCH"  # Diagonal step, cost unchanged
    SUBSTITUTE = "SUBSTITUTE"  # Diagonal step, cost increased by dissimilarity
    INSERT = "INSERT"  # Column of B only
    DELETE = "DELETE"  # Column of A only


@dataclass
class AlignedColumn:
    """A single step of the alignment path.

    Attributes:
        step: Type of the step.
        index_a: Column of buffer A consumed by the step (None for INSERT).
        index_b: Column of buffer B consumed by the step (None for DELETE).
        cost_delta: Change of the accumulated cost along this step.
    """

    step: AlignmentStep
    index_a: Optional[int]
    index_b: Optional[int]
    cost_delta: float


class ColumnAligner:
    """Edit-distance aligner over the pixel columns of two buffers.

    Attributes:
        threshold: Cost of inserting or deleting one column in the matrix
            interior.
        boundary_cost: Cost per column along row 0 and column 0.

    Example:
        >>> aligner = ColumnAligner()
        >>> distance, matrix = aligner.align(reference, candidate)
        >>> path = aligner.backtrace(matrix)
    """

    def __init__(
        self,
        threshold: float = DEFAULT_THRESHOLD,
        boundary_cost: float = DEFAULT_BOUNDARY_COST,
    ) -> None:
        """Initialize ColumnAligner.

        Args:
            threshold: Insert/delete cost, weighed against the [0, 1]
                substitution cost. Must be positive.
            boundary_cost: Cost per leading column when one prefix is empty.
                Must be non-negative.

        Raises:
            ValueError: If either cost is out of range.
        """
        if not threshold > 0:
            raise ValueError(f"threshold must be positive, got: {threshold}")
        if not boundary_cost >= 0:
            raise ValueError(
                f"boundary_cost must be non-negative, got: {boundary_cost}"
            )

        self.threshold = float(threshold)
        self.boundary_cost = float(boundary_cost)

    def align(
        self,
        buffer_a: PixelBuffer,
        buffer_b: PixelBuffer,
    ) -> Tuple[float, np.ndarray]:
        """Compute the visual distance between two buffers.

        Args:
            buffer_a: First rendered string (Wa columns).
            buffer_b: Second rendered string (Wb columns).

        Returns:
            Tuple of (distance, matrix):
                - distance: d[Wa][Wb], always >= 0.
                - matrix: Read-only float64 cost matrix. Shape: [Wa+1, Wb+1]
        """
        wa, wb = buffer_a.width, buffer_b.width
        logger.debug(
            f"Aligning {wa}x{buffer_a.height} against {wb}x{buffer_b.height} buffer"
        )

        costs, identical = pairwise_dissimilarity(buffer_a, buffer_b)
        costs = costs.tolist()
        identical = identical.tolist()
        threshold = self.threshold

        # Boundary: pure insertion / deletion of leading columns
        d: List[List[float]] = [[0.0] * (wb + 1) for _ in range(wa + 1)]
        for i in range(1, wa + 1):
            d[i][0] = i * self.boundary_cost
        for j in range(1, wb + 1):
            d[0][j] = j * self.boundary_cost

        for i in range(wa):
            row, next_row = d[i], d[i + 1]
            for j in range(wb):
                if identical[i][j]:
                    next_row[j + 1] = row[j]
                else:
                    next_row[j + 1] = min(
                        row[j + 1] + threshold,  # delete column i of A
                        next_row[j] + threshold,  # insert column j of B
                        row[j] + costs[i][j],  # substitute
                    )

        matrix = np.array(d, dtype=np.float64)
        matrix.setflags(write=False)

        distance = float(matrix[wa, wb])
        logger.debug(f"Column distance: {distance:.4f}")

        return distance, matrix

    def backtrace(self, matrix: np.ndarray) -> List[AlignedColumn]:
        """Recover the alignment path from a filled distance matrix.

        The walk starts at (0, 0) and at every cell picks the cheapest of the
        three successors. Ties go to the diagonal, then to deletion, then to
        insertion; the debug images depend on this order.

        Args:
            matrix: Matrix returned by ``align``. Shape: [Wa+1, Wb+1]

        Returns:
            Steps from (0, 0) to (Wa, Wb), one per output column.
        """
        wa, wb = matrix.shape[0] - 1, matrix.shape[1] - 1
        d = matrix.tolist()

        path: List[AlignedColumn] = []
        xa, xb = 0, 0
        while not (xa == wa and xb == wb):
            if xa >= wa:
                path.append(
                    AlignedColumn(AlignmentStep.INSERT, None, xb, d[xa][xb + 1] - d[xa][xb])
                )
                xb += 1
            elif xb >= wb:
                path.append(
                    AlignedColumn(AlignmentStep.DELETE, xa, None, d[xa + 1][xb] - d[xa][xb])
                )
                xa += 1
            else:
                diagonal = d[xa + 1][xb + 1]
                deletion = d[xa + 1][xb]
                insertion = d[xa][xb + 1]
                best = min(insertion, deletion, diagonal)

                if diagonal == best:
                    delta = diagonal - d[xa][xb]
                    step = AlignmentStep.MATCH if delta == 0 else AlignmentStep.SUBSTITUTE
                    path.append(AlignedColumn(step, xa, xb, delta))
                    xa += 1
                    xb += 1
                elif deletion == best:
                    path.append(
                        AlignedColumn(AlignmentStep.DELETE, xa, None, deletion - d[xa][xb])
                    )
                    xa += 1
                else:
                    path.append(
                        AlignedColumn(AlignmentStep.INSERT, None, xb, insertion - d[xa][xb])
                    )
                    xb += 1

        return path

    def to_dict_list(self, path: List[AlignedColumn]) -> List[Dict]:
        """Convert AlignedColumn objects to plain dictionaries.

        Args:
            path: Output of ``backtrace``.

        Returns:
            List of dictionaries with keys: type, index_a, index_b, cost_delta.
        """
        return [
            {
                "type": c.step.value,
                "index_a": c.index_a,
                "index_b": c.index_b,
                "cost_delta": c.cost_delta,
            }
            for c in path
        ]


def count_steps(path: List[AlignedColumn]) -> Dict[str, int]:
    """Count how often each step type occurs on a path."""
    counts: Dict[str, int] = {}
    for column in path:
        key = column.step.value
        counts[key] = counts.get(key, 0) + 1
    return counts
