"""SVG -> PNG rasterization."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def rasterize_png(svg: str, width: int | None = None, height: int | None = None) -> bytes:
    """Render SVG string to PNG bytes using cairosvg."""
    import cairosvg

    try:
        png_bytes = cairosvg.svg2png(
            bytestring=svg.encode("utf-8"),
            output_width=width,
            output_height=height,
        )
        return png_bytes
    except Exception as e:
        logger.warning("Failed to render SVG to PNG: %s", e)
        raise
