# -*- coding: utf-8 -*-
"""Rasterize strings into PixelBuffers with Pillow.

This module provides:
1. ``RenderConfig``: immutable font / antialiasing / colour settings
2. ``render``: draw a string left-aligned on its baseline into a buffer
   whose size is the font's logical bounds for that string
3. ``resolve_font_path``: find a font file for a family name via fontconfig
"""

import logging
import math
import subprocess
from dataclasses import dataclass
from typing import Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from visdist.config import DEFAULT_BACKGROUND, DEFAULT_FONT_SIZE, DEFAULT_FOREGROUND
from visdist.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]


def _check_color(name: str, color: RGB) -> None:
    if len(color) != 3 or any(not 0 <= int(c) <= 255 for c in color):
        raise ValueError(f"{name} must be an (r, g, b) tuple of 0-255 ints, got: {color}")


@dataclass(frozen=True)
class RenderConfig:
    """Rendering settings shared by every string a comparer renders.

    Attributes:
        font_path: TrueType/OpenType file. None uses Pillow's bundled font.
        font_size: Font size in pixels.
        antialias: Draw with 8-bit coverage (True) or 1-bit glyphs (False).
        background: Fill colour of the canvas.
        foreground: Text colour.
    """

    font_path: Optional[str] = None
    font_size: int = DEFAULT_FONT_SIZE
    antialias: bool = True
    background: RGB = DEFAULT_BACKGROUND
    foreground: RGB = DEFAULT_FOREGROUND

    def __post_init__(self) -> None:
        if self.font_size <= 0:
            raise ValueError(f"font_size must be positive, got: {self.font_size}")
        _check_color("background", self.background)
        _check_color("foreground", self.foreground)

    def load_font(self) -> ImageFont.FreeTypeFont:
        """Load the configured font.

        Raises:
            OSError: If ``font_path`` cannot be read as a font.
        """
        if self.font_path is None:
            logger.debug(f"Using Pillow default font at size {self.font_size}")
            return ImageFont.load_default(size=self.font_size)

        try:
            font = ImageFont.truetype(self.font_path, self.font_size)
        except OSError as e:
            logger.error(f"Cannot load font {self.font_path}: {e}")
            raise
        logger.info(f"Loaded font: {self.font_path} ({self.font_size}px)")
        return font


def render(
    text: str,
    config: RenderConfig,
    font: Optional[ImageFont.FreeTypeFont] = None,
) -> PixelBuffer:
    """Render a string into a PixelBuffer.

    The buffer is ``ceil(advance width)`` pixels wide and ``ascent + descent``
    pixels tall, so every string rendered with one config has the same height.
    An empty string yields a zero-width buffer.

    Control characters such as line breaks are drawn as the font's own
    glyphs on the one baseline.

    Args:
        text: Text to draw.
        config: Rendering settings.
        font: Pre-loaded font for ``config``; loaded on demand when None.

    Returns:
        The rendered string.
    """
    if font is None:
        font = config.load_font()

    ascent, descent = font.getmetrics()
    width = math.ceil(font.getlength(text))
    height = ascent + descent

    if width == 0 or height == 0:
        return PixelBuffer.empty(height, width)

    image = Image.new("RGB", (width, height), color=config.background)
    draw = ImageDraw.Draw(image)

    # Single glyph run even for line breaks, which ImageDraw.text would split
    mask, (dx, dy) = font.getmask2(
        text, mode="L" if config.antialias else "1", anchor="ls"
    )
    ink = draw.draw.draw_ink(config.foreground)
    draw.draw.draw_bitmap((dx, ascent + dy), mask, ink)

    return PixelBuffer.from_image(image)


def resolve_font_path(family: str) -> Optional[str]:
    """Find the font file fontconfig would use for a family name.

    Args:
        family: Family name such as "DejaVu Sans Mono".

    Returns:
        Absolute path of the matched font file, or None if fontconfig is not
        installed or matched nothing.
    """
    try:
        result = subprocess.run(
            ["fc-match", "-f", "%{file}", family],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        logger.warning(f"fontconfig unavailable, cannot resolve '{family}': {e}")
        return None

    path = result.stdout.strip()
    if result.returncode != 0 or not path:
        logger.warning(f"fc-match found no font for '{family}'")
        return None

    logger.debug(f"Resolved font family '{family}' -> {path}")
    return path
