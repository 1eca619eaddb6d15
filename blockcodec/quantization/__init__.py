"""Quantization modules for the block image codec."""

from .block_quantizer import (
    ChannelStats,
    QuantizedBlock,
    validate_level,
    channel_thresholds,
    compute_channel_stats,
    normalize,
    quantize,
    quantize_block,
    quantize_corners,
)
from .packing import pack_sample, unpack_sample, pack_grid, unpack_grid

__all__ = [
    'ChannelStats',
    'QuantizedBlock',
    'validate_level',
    'channel_thresholds',
    'compute_channel_stats',
    'normalize',
    'quantize',
    'quantize_block',
    'quantize_corners',
    'pack_sample',
    'unpack_sample',
    'pack_grid',
    'unpack_grid',
]
