"""Predictive (delta) coding modules for the block image codec."""

from .delta import delta_encode, delta_decode, encode_block_deltas, decode_block_deltas

__all__ = [
    'delta_encode',
    'delta_decode',
    'encode_block_deltas',
    'decode_block_deltas',
]
