# renderer/image_io.py
import logging

import numpy as np

from renderer.errors import RenderOutputError

logger = logging.getLogger(__name__)


def format_ppm(pixels: np.ndarray) -> str:
    """P3 text for an (h, w, 3) uint8 image, rows top to bottom."""
    height, width = pixels.shape[0], pixels.shape[1]
    lines = ["P3", f"{width} {height}", "255"]
    for row in pixels:
        lines.extend(f"{r} {g} {b}" for r, g, b in row.tolist())
    return "\n".join(lines) + "\n"


def write_ppm(pixels: np.ndarray, stream) -> None:
    """
    Write an image to a text stream in plain PPM (P3) format.

    Raises:
        RenderOutputError: If the stream cannot be written, including a
            closed pipe on stdout.
    """
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"expected an (h, w, 3) image, got shape {pixels.shape}")

    text = format_ppm(pixels)
    try:
        stream.write(text)
        stream.flush()
    except OSError as e:
        raise RenderOutputError(f"failed to write image: {e}") from e
    logger.debug("Wrote %dx%d PPM image", pixels.shape[1], pixels.shape[0])
