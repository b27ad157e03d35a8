# -*- coding: utf-8 -*-
"""StringComparer: visual distance between rendered strings.

Pipeline per comparison:
1. Render both operands with the comparer's fixed RenderConfig (or take a
   pre-rendered PixelBuffer for the first operand)
2. Align the two buffers column by column -> (distance, matrix)
3. If debug is on: backtrace the matrix, draw the strip image and write it
   to ``<debug_dir>/<label>.png``. Failures here are logged and recorded
   on the result; they never change or suppress the distance.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

import numpy as np

from visdist.alignment.edit_core import AlignedColumn, ColumnAligner, count_steps
from visdist.config import DEFAULT_BOUNDARY_COST, DEFAULT_DEBUG_DIR, DEFAULT_THRESHOLD
from visdist.pixel_buffer import PixelBuffer
from visdist.rasterizer import RenderConfig, render
from visdist.visualizer import (
    VisualizationUnavailableError,
    save_debug_image,
    visualize,
)

logger = logging.getLogger(__name__)


@dataclass
class ComparisonResult:
    """Outcome of one comparison.

    Attributes:
        distance: Visual distance, >= 0.
        matrix: Filled cost matrix. Shape: [Wa+1, Wb+1]
        path: Alignment path (only computed in debug mode).
        debug_path: Where the debug image was written, if it was.
        debug_error: Why the debug image is unavailable, if it is.
    """

    distance: float
    matrix: np.ndarray
    path: List[AlignedColumn] = field(default_factory=list)
    debug_path: Optional[Path] = None
    debug_error: Optional[VisualizationUnavailableError] = None


class StringComparer:
    """Compare strings by how alike they look when rendered.

    Attributes:
        config: Rendering settings applied to every string.
        aligner: Column aligner holding the threshold and boundary cost.
        debug: Whether each comparison writes a debug image.
        debug_dir: Directory for debug images.

    Example:
        >>> comparer = StringComparer(RenderConfig(font_size=14))
        >>> comparer.compare("test", "test")
        0.0
        >>> reference = comparer.render("example")
        >>> distance = comparer.compare(reference, "exarnple")
    """

    def __init__(
        self,
        config: Optional[RenderConfig] = None,
        threshold: float = DEFAULT_THRESHOLD,
        boundary_cost: float = DEFAULT_BOUNDARY_COST,
        debug: bool = False,
        debug_dir: Union[str, Path] = DEFAULT_DEBUG_DIR,
    ) -> None:
        """Initialize StringComparer.

        Args:
            config: Rendering settings; defaults to ``RenderConfig()``.
            threshold: Insert/delete cost per column.
            boundary_cost: Cost per column along the matrix boundary.
            debug: Write an alignment image for every comparison.
            debug_dir: Directory for the alignment images.

        Raises:
            ValueError: If a setting is out of range.
            OSError: If the configured font cannot be loaded.
        """
        self.config = config if config is not None else RenderConfig()
        self.aligner = ColumnAligner(threshold=threshold, boundary_cost=boundary_cost)
        self.debug = debug
        self.debug_dir = Path(debug_dir)

        self._font = self.config.load_font()

    @property
    def threshold(self) -> float:
        return self.aligner.threshold

    def render(self, text: str) -> PixelBuffer:
        """Render a string with this comparer's settings."""
        return render(text, self.config, font=self._font)

    def compare(self, a: Union[str, PixelBuffer], b: str) -> float:
        """Return the visual distance between two strings.

        Args:
            a: A string, or a buffer previously returned by ``render``.
            b: A string to compare with.

        Returns:
            The visual distance, 0.0 for identical renderings.
        """
        return self.compare_detailed(a, b).distance

    def compare_detailed(
        self,
        a: Union[str, PixelBuffer],
        b: str,
        label: Optional[str] = None,
    ) -> ComparisonResult:
        """Compare two strings and keep the intermediate results.

        Args:
            a: A string, or a pre-rendered buffer.
            b: A string to compare with.
            label: Name of the debug image; defaults to ``b``.

        Returns:
            ComparisonResult with the distance, the matrix and, in debug
            mode, the alignment path and the debug image outcome.
        """
        buffer_a = a if isinstance(a, PixelBuffer) else self.render(a)
        buffer_b = self.render(b)

        distance, matrix = self.aligner.align(buffer_a, buffer_b)
        result = ComparisonResult(distance=distance, matrix=matrix)

        if self.debug:
            self._write_debug(buffer_a, buffer_b, result, b if label is None else label)

        return result

    def _write_debug(
        self,
        buffer_a: PixelBuffer,
        buffer_b: PixelBuffer,
        result: ComparisonResult,
        label: str,
    ) -> None:
        result.path, image = visualize(buffer_a, buffer_b, result.matrix, self.aligner)
        logger.debug(f"Alignment steps for '{label}': {count_steps(result.path)}")

        try:
            result.debug_path = save_debug_image(image, self.debug_dir, label)
        except VisualizationUnavailableError as e:
            logger.warning(f"Debug image unavailable for '{label}': {e}")
            result.debug_error = e
