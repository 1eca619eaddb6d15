"""Sub-byte packing of Y (4 bits), U (2 bits) and V (2 bits) into one byte."""

import numpy as np
from typing import Tuple


def pack_sample(y: int, u: int, v: int) -> int:
    """Pack one (y, u, v) triple as (y*4 + u)*4 + v."""
    return (int(y) * 4 + int(u)) * 4 + int(v)


def unpack_sample(byte: int) -> Tuple[int, int, int]:
    """Unpack one byte into (y, u, v)."""
    byte = int(byte)
    return byte // 16, (byte % 16) // 4, byte % 4


def pack_grid(y: np.ndarray, u: np.ndarray, v: np.ndarray) -> np.ndarray:
    """Vectorized pack_sample over equally shaped arrays."""
    y = np.asarray(y, dtype=np.int64)
    u = np.asarray(u, dtype=np.int64)
    v = np.asarray(v, dtype=np.int64)
    return ((y * 4 + u) * 4 + v).astype(np.uint8)


def unpack_grid(packed: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Vectorized unpack_sample."""
    packed = np.asarray(packed, dtype=np.int64)
    return packed // 16, (packed % 16) // 4, packed % 4
