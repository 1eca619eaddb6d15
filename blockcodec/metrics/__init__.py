"""Quality metrics for the block image codec."""

from .quality import (
    calculate_rmse,
    calculate_psnr,
    calculate_bpp,
    calculate_compression_ratio,
    generate_error_map,
)

__all__ = [
    'calculate_rmse',
    'calculate_psnr',
    'calculate_bpp',
    'calculate_compression_ratio',
    'generate_error_map',
]
