# -*- coding: utf-8 -*-
"""Column alignment between rendered strings.

This package implements:
- Per-column visual dissimilarity (column_similarity.py)
- Edit-distance alignment and backtrace over pixel columns (edit_core.py)
"""

from visdist.alignment.column_similarity import dissimilarity, pairwise_dissimilarity
from visdist.alignment.edit_core import (
    AlignedColumn,
    AlignmentStep,
    ColumnAligner,
    count_steps,
)

__all__ = [
    "ColumnAligner",
    "AlignedColumn",
    "AlignmentStep",
    "count_steps",
    "dissimilarity",
    "pairwise_dissimilarity",
]
