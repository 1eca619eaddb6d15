"""Corner decoding and per-channel block reconstruction."""

import numpy as np

from ..constants import BLOCK_SIZE, Y_DIVISOR, UV_DIVISOR
from ..model import Block
from ..prediction import decode_block_deltas
from ..quantization.packing import unpack_grid


def dequantize(q: np.ndarray, divisor: int, minimum: int, maximum: int) -> np.ndarray:
    """
    Map quantized values back to the block range.

        value = q / divisor * (max - min) + min
    """
    return np.asarray(q, dtype=np.float64) / divisor * (maximum - minimum) + minimum


def decode_corners(block: Block) -> np.ndarray:
    """
    Decode the four packed corners of a block.

    Returns:
        (4, 3) float YUV array in TL, TR, BL, BR order
    """
    cy, cu, cv = unpack_grid(np.array(block.corners))
    return np.stack([
        dequantize(cy, Y_DIVISOR, block.min_y, block.max_y),
        dequantize(cu, UV_DIVISOR, block.min_u, block.max_u),
        dequantize(cv, UV_DIVISOR, block.min_v, block.max_v),
    ], axis=-1)


def bilinear_grid(tl: float, tr: float, bl: float, br: float,
                  size: int = BLOCK_SIZE) -> np.ndarray:
    """
    Bilinear blend of four corner values over a size x size tile.

    With u = x / (size-1) and v = y / (size-1):
        top    = tl * (1-u) + tr * u
        bottom = bl * (1-u) + br * u
        value  = top * (1-v) + bottom * v

    Returns:
        (size, size) float array indexed [y, x]
    """
    u = np.arange(size, dtype=np.float64) / (size - 1)
    v = u[:, np.newaxis]
    top = tl * (1 - u) + tr * u
    bottom = bl * (1 - u) + br * u
    return top * (1 - v) + bottom * v


def reconstruct_block(block: Block) -> np.ndarray:
    """
    Rebuild the YUV samples of a block.

    Interpolated channels come from the corners; the others come from the
    delta-decoded grid mapped back onto the block range.

    Returns:
        (8, 8, 3) float YUV block
    """
    qy, qu, qv = decode_block_deltas(block.samples)
    corners = decode_corners(block)

    channels = (
        (block.interpolate_y, qy, Y_DIVISOR, block.min_y, block.max_y),
        (block.interpolate_u, qu, UV_DIVISOR, block.min_u, block.max_u),
        (block.interpolate_v, qv, UV_DIVISOR, block.min_v, block.max_v),
    )

    planes = []
    for c, (interpolate, q, divisor, minimum, maximum) in enumerate(channels):
        if interpolate:
            planes.append(bilinear_grid(*corners[:, c]))
        else:
            planes.append(dequantize(q, divisor, minimum, maximum))

    return np.stack(planes, axis=-1)
