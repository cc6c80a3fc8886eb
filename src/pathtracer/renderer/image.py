# renderer/image.py
import logging
from pathlib import Path
from typing import Union

import numpy as np
from numba import njit
from PIL import Image

logger = logging.getLogger(__name__)

@njit(cache=True)
def gamma_encode_kernel(linear_image, output_image):
    height, width = output_image.shape[0], output_image.shape[1]
    for y in range(height):
        for x in range(width):
            for c in range(3):
                value = linear_image[y, x, c]
                # NaN fails every comparison and lands on 0 with the negatives
                if not value > 0.0:
                    value = 0.0
                # gamma 2 encoding
                value = value ** 0.5
                if value > 1.0:
                    value = 1.0
                output_image[y, x, c] = int(255.999 * value)

def encode_rgb8(pixels: np.ndarray) -> np.ndarray:
    """
    Converts a linear (H, W, 3) radiance image to gamma-encoded 8-bit RGB.
    """
    linear = np.ascontiguousarray(pixels, dtype=np.float64)
    if linear.ndim != 3 or linear.shape[2] != 3:
        raise ValueError(f"expected an (H, W, 3) image, got shape {linear.shape}")
    output = np.zeros(linear.shape, dtype=np.uint8)
    gamma_encode_kernel(linear, output)
    return output

def write_ppm(path: Union[str, Path], pixels: np.ndarray) -> Path:
    """
    Writes a plain-text (P3) PPM: header, then one "R G B" line per pixel,
    top row first, each row left to right.
    """
    path = Path(path)
    rgb = encode_rgb8(pixels)
    height, width = rgb.shape[0], rgb.shape[1]
    with path.open("w", encoding="ascii") as fh:
        fh.write(f"P3\n{width} {height}\n255\n")
        for row in rgb:
            fh.writelines(f"{r} {g} {b}\n" for r, g, b in row)
    return path

def write_png(path: Union[str, Path], pixels: np.ndarray) -> Path:
    path = Path(path)
    Image.fromarray(encode_rgb8(pixels)).save(path)
    return path

def write_image(path: Union[str, Path], pixels: np.ndarray) -> Path:
    """Saves the image; ``.ppm`` gets the text format, anything else goes through Pillow."""
    path = Path(path)
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() == ".ppm":
        written = write_ppm(path, pixels)
    else:
        written = write_png(path, pixels)
    logger.info("Wrote %dx%d image to %s", pixels.shape[1], pixels.shape[0], written)
    return written
