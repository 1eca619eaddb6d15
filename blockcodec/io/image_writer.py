"""Raster image writer backed by Pillow."""

import io

import numpy as np
from pathlib import Path
from PIL import Image as PILImage


def write_image(image: np.ndarray, path, format: str = None) -> None:
    """
    Write an RGB raster to file.

    Args:
        image: (H, W, 3) uint8 array
        path: Output file path
        format: Pillow format name ('PNG', 'BMP', ...). Auto-detected from
            extension if None; files without an extension get '.png'.

    Raises:
        ValueError: If the raster shape is invalid
    """
    path = Path(path)

    if format is None and not path.suffix:
        format = 'PNG'
        path = path.with_suffix('.png')

    _to_pil(image).save(str(path), format=format)


def write_image_bytes(image: np.ndarray, format: str = 'PNG') -> bytes:
    """Encode an RGB raster to bytes (e.g. for stdout)."""
    buffer = io.BytesIO()
    _to_pil(image).save(buffer, format=format)
    return buffer.getvalue()


def _to_pil(image: np.ndarray) -> PILImage.Image:
    image = np.asarray(image)
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected (H, W, 3) RGB array, got shape {image.shape}")
    return PILImage.fromarray(np.ascontiguousarray(image, dtype=np.uint8))
