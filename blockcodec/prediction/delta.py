"""Intra-block delta coding with modular (wraparound) differences."""

import numpy as np
from typing import Tuple

from ..constants import BLOCK_SIZE, Y_MODULUS, UV_MODULUS
from ..quantization.packing import pack_grid, unpack_grid


def delta_encode(values: np.ndarray, modulus: int) -> np.ndarray:
    """
    Encode a sample sequence as modular forward differences.

    The predictor starts at 0 and follows the previous sample:
        delta[0] = values[0]
        delta[i] = (values[i] - values[i-1]) mod M

    Args:
        values: 1D sequence of quantized samples in [0, M)
        modulus: 16 for Y, 4 for U/V

    Returns:
        Array of deltas in [0, M), same length
    """
    values = np.asarray(values, dtype=np.int64).ravel()
    if values.size and (values.min() < 0 or values.max() >= modulus):
        raise ValueError(f"Samples must be in [0, {modulus}), got "
                         f"[{values.min()}, {values.max()}]")

    predictors = np.concatenate(([0], values[:-1]))
    return np.mod(values - predictors, modulus)


def delta_decode(deltas: np.ndarray, modulus: int) -> np.ndarray:
    """
    Decode modular differences back to samples.

    Args:
        deltas: 1D sequence of deltas
        modulus: 16 for Y, 4 for U/V

    Returns:
        Reconstructed samples in [0, M)
    """
    deltas = np.asarray(deltas, dtype=np.int64).ravel()
    return np.mod(np.cumsum(deltas), modulus)


def encode_block_deltas(qy: np.ndarray, qu: np.ndarray, qv: np.ndarray) -> np.ndarray:
    """
    Delta-code quantized grids in row-major order and pack them.

    Args:
        qy, qu, qv: (8, 8) quantized grids

    Returns:
        (8, 8) uint8 grid of packed deltas
    """
    dy = delta_encode(qy, Y_MODULUS)
    du = delta_encode(qu, UV_MODULUS)
    dv = delta_encode(qv, UV_MODULUS)
    return pack_grid(dy, du, dv).reshape(BLOCK_SIZE, BLOCK_SIZE)


def decode_block_deltas(samples: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Unpack a grid of delta bytes and undo the delta coding.

    Args:
        samples: (8, 8) packed delta bytes

    Returns:
        Tuple of (qy, qu, qv) (8, 8) grids
    """
    samples = np.asarray(samples)
    dy, du, dv = unpack_grid(samples.ravel())
    shape = samples.shape
    return (delta_decode(dy, Y_MODULUS).reshape(shape),
            delta_decode(du, UV_MODULUS).reshape(shape),
            delta_decode(dv, UV_MODULUS).reshape(shape))
