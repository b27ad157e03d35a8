# -*- coding: utf-8 -*-
"""Visual distance between rendered strings.

This package contains:
- pixel_buffer.py: immutable RGB buffers and column slices
- rasterizer.py: Pillow rendering with a fixed RenderConfig
- alignment/: column dissimilarity and edit-distance alignment
- visualizer.py: debug strip images of an alignment
- comparer.py: StringComparer facade
"""

from visdist.alignment.edit_core import AlignedColumn, AlignmentStep, ColumnAligner
from visdist.comparer import ComparisonResult, StringComparer
from visdist.pixel_buffer import ColumnSlice, PixelBuffer
from visdist.rasterizer import RenderConfig, render, resolve_font_path
from visdist.visualizer import VisualizationUnavailableError

__all__ = [
    "StringComparer",
    "ComparisonResult",
    "RenderConfig",
    "render",
    "resolve_font_path",
    "PixelBuffer",
    "ColumnSlice",
    "ColumnAligner",
    "AlignedColumn",
    "AlignmentStep",
    "VisualizationUnavailableError",
]
