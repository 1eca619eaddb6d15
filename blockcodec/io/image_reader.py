"""Raster image reader (any format Pillow can open)."""

import io

import numpy as np
from pathlib import Path
from PIL import Image as PILImage


def read_image(path) -> np.ndarray:
    """
    Read an image file as an RGB raster.

    Alpha and palette images are converted to plain RGB.

    Args:
        path: Path to the image file, or a binary file object

    Returns:
        (H, W, 3) uint8 array

    Raises:
        ValueError: If the file cannot be decoded as an image
    """
    if isinstance(path, (str, Path)) and not Path(path).exists():
        raise ValueError(f"Image file not found: {path}")

    try:
        with PILImage.open(path) as img:
            return _to_rgb_array(img)
    except PILImage.UnidentifiedImageError as e:
        raise ValueError(f"Unsupported or corrupt image: {e}") from e


def read_image_bytes(data: bytes) -> np.ndarray:
    """Read an in-memory image (e.g. from stdin) as an RGB raster."""
    return read_image(io.BytesIO(data))


def _to_rgb_array(img: PILImage.Image) -> np.ndarray:
    if img.mode != 'RGB':
        img = img.convert('RGB')
    return np.asarray(img, dtype=np.uint8).copy()
