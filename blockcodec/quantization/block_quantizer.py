"""Per-block statistics and level-based quantization."""

import numpy as np
from typing import NamedTuple, Tuple

from ..constants import (
    DEFAULT_LEVEL, Y_SCALE, UV_SCALE, Y_MODULUS, UV_MODULUS, CORNER_POSITIONS
)
from .packing import pack_sample


class ChannelStats(NamedTuple):
    """Value range of one channel inside one block."""
    minimum: float
    maximum: float
    value_range: float
    interpolate: bool
    stored_min: int
    stored_max: int


class QuantizedBlock(NamedTuple):
    """Statistics plus quantized (not yet delta-coded) grids."""
    stats: Tuple[ChannelStats, ChannelStats, ChannelStats]
    qy: np.ndarray
    qu: np.ndarray
    qv: np.ndarray


def _to_byte(value: float) -> int:
    """Truncate toward zero and saturate to [0, 255]."""
    return int(min(255, max(0, int(value))))


def validate_level(level) -> int:
    """Return level as int, raising ValueError unless it is a positive integer."""
    if isinstance(level, bool) or int(level) != level or level < 1:
        raise ValueError(f"Level must be a positive integer, got {level}")
    return int(level)


def channel_thresholds(level: int = DEFAULT_LEVEL) -> Tuple[float, float, float]:
    """
    Interpolation thresholds for (Y, U, V).

    Luma uses level/2, chroma uses level.
    """
    level = validate_level(level)
    return level / 2, float(level), float(level)


def compute_channel_stats(channel: np.ndarray, threshold: float) -> ChannelStats:
    """
    Compute min/max/range of one channel and decide its interpolation flag.

    Args:
        channel: 8x8 samples of one channel, evaluated in float32
        threshold: Range below which the channel is interpolated

    Returns:
        ChannelStats
    """
    channel = np.asarray(channel, dtype=np.float32)
    minimum = channel.min()
    maximum = min(channel.max(), np.float32(255.0))
    value_range = np.float32(maximum - minimum)

    return ChannelStats(
        minimum=minimum,
        maximum=maximum,
        value_range=value_range,
        interpolate=bool(value_range < threshold),
        stored_min=_to_byte(minimum),
        stored_max=_to_byte(maximum),
    )


def normalize(channel: np.ndarray, stats: ChannelStats) -> np.ndarray:
    """
    Map samples to [0, 1] relative to the block range.

    Interpolated channels carry no per-pixel data and normalize to 0.
    """
    channel = np.asarray(channel, dtype=np.float32)
    if stats.interpolate:
        return np.zeros_like(channel)
    normalized = (channel - np.float32(stats.minimum)) / np.float32(stats.value_range)
    # max is clamped to 255 while samples may reach 255.5
    return np.clip(normalized, np.float32(0.0), np.float32(1.0))


def quantize(normalized: np.ndarray, scale: float, levels: int) -> np.ndarray:
    """
    Quantize normalized samples: floor(n * scale), bounded to [0, levels-1].

    Args:
        normalized: Values in [0, 1]
        scale: 15.9 for Y, 3.9 for U/V
        levels: 16 for Y, 4 for U/V

    Returns:
        Quantized values as int64
    """
    scaled = np.asarray(normalized, dtype=np.float32) * np.float32(scale)
    q = np.floor(scaled).astype(np.int64)
    return np.clip(q, 0, levels - 1)


def _quantize_channels(yuv: np.ndarray, stats) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    stats_y, stats_u, stats_v = stats
    qy = quantize(normalize(yuv[..., 0], stats_y), Y_SCALE, Y_MODULUS)
    qu = quantize(normalize(yuv[..., 1], stats_u), UV_SCALE, UV_MODULUS)
    qv = quantize(normalize(yuv[..., 2], stats_v), UV_SCALE, UV_MODULUS)
    return qy, qu, qv


def quantize_block(yuv_block: np.ndarray, level: int = DEFAULT_LEVEL) -> QuantizedBlock:
    """
    Compute per-channel statistics and quantize a YUV block.

    Args:
        yuv_block: (8, 8, 3) float YUV block
        level: Quantization level (interpolation threshold)

    Returns:
        QuantizedBlock with stats and qy/qu/qv grids
    """
    yuv_block = np.asarray(yuv_block, dtype=np.float32)
    thresholds = channel_thresholds(level)

    stats = tuple(compute_channel_stats(yuv_block[..., c], thresholds[c])
                  for c in range(3))
    qy, qu, qv = _quantize_channels(yuv_block, stats)

    return QuantizedBlock(stats, qy, qu, qv)


def quantize_corners(yuv_block: np.ndarray, stats) -> Tuple[int, int, int, int]:
    """
    Quantize and pack the four corner samples (TL, TR, BL, BR).

    Corners share the block-wide range and interpolation policy with the grid.
    """
    yuv_block = np.asarray(yuv_block, dtype=np.float32)
    rows = [r for r, _ in CORNER_POSITIONS]
    cols = [c for _, c in CORNER_POSITIONS]
    corners = yuv_block[rows, cols]

    qy, qu, qv = _quantize_channels(corners, stats)
    return tuple(pack_sample(y, u, v) for y, u, v in zip(qy, qu, qv))
