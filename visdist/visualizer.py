# -*- coding: utf-8 -*-
"""Debug visualization of a column alignment.

Renders the alignment path as a strip image: buffer A's columns along the
top, buffer B's columns beneath them, and an annotation band at the bottom
coloured by step type. The image is written to ``<debug_dir>/<label>.png``.
"""

import logging
import math
import re
from pathlib import Path
from typing import List, Tuple

import cv2
import numpy as np

from visdist.alignment.edit_core import AlignedColumn, AlignmentStep, ColumnAligner
from visdist.config import (
    ANNOTATION_BAND_HEIGHT,
    BACKGROUND_GRAY,
    DELETION_COLOR,
    INSERTION_COLOR,
)
from visdist.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)

_UNSAFE_LABEL_CHARS = re.compile(r"[^\w.\-]", re.UNICODE)


class VisualizationUnavailableError(RuntimeError):
    """The debug image could not be produced or written."""


def substitution_color(cost_delta: float) -> tuple:
    """Blue annotation for a substitution, darker for larger cost changes."""
    magnitude = min(abs(cost_delta), 1.0)
    return (0, 0, int(255 * math.cos(magnitude * math.pi / 2)))


def render_alignment(
    buffer_a: PixelBuffer,
    buffer_b: PixelBuffer,
    path: List[AlignedColumn],
    distance: float,
    threshold: float,
) -> PixelBuffer:
    """Draw an alignment path as an annotated strip.

    Args:
        buffer_a: First buffer, drawn in rows [0, Ha).
        buffer_b: Second buffer, drawn in rows [Ha, Ha+Hb).
        path: Steps from ``ColumnAligner.backtrace``.
        distance: Final distance of the alignment.
        threshold: Insert/delete cost the alignment was computed with.

    Returns:
        Strip image of width ``max(Wa, Wb) + ceil(distance / threshold)`` and
        height ``Ha + Hb + 8``. Steps past the right edge are clipped.
    """
    ha, hb = buffer_a.height, buffer_b.height
    # Rounded so accumulated float noise does not add a spare column
    headroom = math.ceil(round(distance / threshold, 9))
    width = max(buffer_a.width, buffer_b.width) + headroom
    height = ha + hb + ANNOTATION_BAND_HEIGHT

    canvas = np.empty((height, width, 3), dtype=np.uint8)
    canvas[:, :] = BACKGROUND_GRAY

    pixels_a = buffer_a.to_array()
    pixels_b = buffer_b.to_array()
    band = slice(ha + hb, height)

    for strip, column in enumerate(path):
        if strip >= width:
            logger.debug(f"Clipping {len(path) - width} steps past the strip edge")
            break

        if column.index_a is not None:
            canvas[:ha, strip] = pixels_a[:, column.index_a]
        if column.index_b is not None:
            canvas[ha : ha + hb, strip] = pixels_b[:, column.index_b]

        if column.step == AlignmentStep.DELETE:
            canvas[band, strip] = DELETION_COLOR
        elif column.step == AlignmentStep.INSERT:
            canvas[band, strip] = INSERTION_COLOR
        elif column.step == AlignmentStep.SUBSTITUTE:
            canvas[band, strip] = substitution_color(column.cost_delta)

    return PixelBuffer(canvas)


def visualize(
    buffer_a: PixelBuffer,
    buffer_b: PixelBuffer,
    matrix: np.ndarray,
    aligner: ColumnAligner,
) -> Tuple[List[AlignedColumn], PixelBuffer]:
    """Backtrace a filled matrix and draw the resulting path.

    Returns:
        Tuple of (path, image).
    """
    path = aligner.backtrace(matrix)
    distance = float(matrix[-1, -1])
    image = render_alignment(buffer_a, buffer_b, path, distance, aligner.threshold)
    return path, image


def debug_image_path(debug_dir: Path, label: str) -> Path:
    """Build the file path for a label, replacing unsafe characters."""
    safe = _UNSAFE_LABEL_CHARS.sub("_", label) or "empty"
    return Path(debug_dir) / f"{safe}.png"


def save_debug_image(image: PixelBuffer, debug_dir: Path, label: str) -> Path:
    """Write a debug image as PNG.

    Args:
        image: Strip produced by ``render_alignment``.
        debug_dir: Output directory, created if missing.
        label: Name of the image, usually the compared string.

    Returns:
        Path of the written file.

    Raises:
        VisualizationUnavailableError: If the image is empty or cannot be
            written.
    """
    output_path = debug_image_path(debug_dir, label)

    if image.width == 0 or image.height == 0:
        raise VisualizationUnavailableError(
            f"Nothing to draw for '{label}': {image.width}x{image.height} image"
        )

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        bgr = cv2.cvtColor(image.to_array(), cv2.COLOR_RGB2BGR)
        written = cv2.imwrite(str(output_path), bgr)
    except (OSError, cv2.error) as e:
        raise VisualizationUnavailableError(
            f"Cannot write debug image {output_path}: {e}"
        ) from e

    if not written:
        raise VisualizationUnavailableError(f"Cannot write debug image {output_path}")

    logger.info(f"Debug image saved: {output_path}")
    return output_path
