"""Block tiling utilities for the image codec."""

import numpy as np
from typing import List, Tuple
from ..constants import BLOCK_SIZE
from ..errors import DimensionError


def _check_raster(rgb: np.ndarray) -> None:
    if rgb.ndim != 3 or rgb.shape[2] != 3:
        raise DimensionError(f"Expected (H, W, 3) RGB raster, got shape {rgb.shape}")


def pad_to_block_multiple(rgb: np.ndarray, block_size: int = BLOCK_SIZE) -> Tuple[np.ndarray, dict]:
    """
    Pad an RGB raster with black on the right and bottom to a block multiple.

    Args:
        rgb: (H, W, 3) uint8 raster
        block_size: Size of each block (default: 8)

    Returns:
        Tuple of (padded raster, padding info dict)
    """
    rgb = np.asarray(rgb)
    _check_raster(rgb)
    h, w = rgb.shape[:2]

    pad_h = (block_size - h % block_size) % block_size
    pad_w = (block_size - w % block_size) % block_size

    if pad_h > 0 or pad_w > 0:
        padded = np.pad(rgb, ((0, pad_h), (0, pad_w), (0, 0)), mode='constant')
    else:
        padded = rgb

    pad_info = {
        'original_h': h,
        'original_w': w,
        'pad_h': pad_h,
        'pad_w': pad_w,
        'n_blocks_h': (h + pad_h) // block_size,
        'n_blocks_w': (w + pad_w) // block_size
    }

    return padded, pad_info


def split_into_blocks(rgb: np.ndarray, block_size: int = BLOCK_SIZE) -> List[np.ndarray]:
    """
    Split a padded raster into non-overlapping blocks.

    Args:
        rgb: (H, W, 3) raster, H and W multiples of block_size
        block_size: Size of each block (default: 8)

    Returns:
        List of (block_size, block_size, 3) blocks in row-major order

    Raises:
        DimensionError: If the raster is not already padded
    """
    rgb = np.asarray(rgb)
    _check_raster(rgb)
    h, w = rgb.shape[:2]

    if h % block_size or w % block_size:
        raise DimensionError(
            f"Raster {w}x{h} is not a multiple of {block_size}; pad it first")

    blocks = []
    for y_start in range(0, h, block_size):
        for x_start in range(0, w, block_size):
            blocks.append(rgb[y_start:y_start + block_size,
                              x_start:x_start + block_size])

    return blocks


def block_origin(index: int, width: int, block_size: int = BLOCK_SIZE) -> Tuple[int, int]:
    """
    Raster position (x, y) of a block from its index.

    Blocks run left to right; the next row starts once x reaches the width,
    so each row holds ceil(width / block_size) blocks.
    """
    per_row = max(1, -(-width // block_size))
    return (index % per_row) * block_size, (index // per_row) * block_size


def merge_blocks(blocks: List[np.ndarray], width: int, height: int,
                 block_size: int = BLOCK_SIZE) -> np.ndarray:
    """
    Merge decoded RGB blocks into a raster of the declared size.

    Pixels falling outside width x height are dropped.

    Args:
        blocks: List of (block_size, block_size, 3) blocks in row-major order
        width: Declared raster width
        height: Declared raster height

    Returns:
        (height, width, 3) uint8 raster
    """
    raster = np.zeros((height, width, 3), dtype=np.uint8)

    for idx, block in enumerate(blocks):
        x, y = block_origin(idx, width, block_size)
        if x >= width or y >= height:
            continue
        h = min(block_size, height - y)
        w = min(block_size, width - x)
        raster[y:y + h, x:x + w] = block[:h, :w]

    return raster
