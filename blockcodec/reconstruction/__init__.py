"""Reconstruction modules for the block image codec."""

from .bilinear import dequantize, decode_corners, bilinear_grid, reconstruct_block

__all__ = [
    'dequantize',
    'decode_corners',
    'bilinear_grid',
    'reconstruct_block',
]
