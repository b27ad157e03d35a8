# -*- coding: utf-8 -*-
"""Default settings for visual string comparison.

All values here are defaults only; every one of them can be overridden
through the keyword arguments of ``StringComparer`` / ``RenderConfig`` or
the command-line flags of ``scripts/compare_strings.py``.
"""

from pathlib import Path

# =============================================================================
# Alignment
# =============================================================================

# Cost of inserting or deleting one pixel column inside the matrix, as
# opposed to substituting it for a visually similar column.
DEFAULT_THRESHOLD = 0.085

# Cost per column along row 0 / column 0 of the distance matrix.
DEFAULT_BOUNDARY_COST = 1.0

# =============================================================================
# Rendering
# =============================================================================

DEFAULT_FONT_SIZE = 14
DEFAULT_BACKGROUND = (255, 255, 255)
DEFAULT_FOREGROUND = (0, 0, 0)

# =============================================================================
# Debug Visualization
# =============================================================================

DEFAULT_DEBUG_DIR = Path("debug")

ANNOTATION_BAND_HEIGHT = 8

BACKGROUND_GRAY = (127, 127, 127)
DELETION_COLOR = (255, 0, 0)
INSERTION_COLOR = (0, 255, 0)
