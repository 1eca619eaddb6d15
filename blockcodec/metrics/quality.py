"""Quality metrics for image codec evaluation."""

import numpy as np


def calculate_rmse(original: np.ndarray, reconstructed: np.ndarray) -> float:
    """
    Calculate Root Mean Squared Error (RMSE).

    Args:
        original: Original image
        reconstructed: Reconstructed image

    Returns:
        RMSE value
    """
    diff = original.astype(np.float64) - reconstructed.astype(np.float64)
    mse = np.mean(diff ** 2)
    return float(np.sqrt(mse))


def calculate_psnr(original: np.ndarray, reconstructed: np.ndarray,
                   bit_depth: int = 8) -> float:
    """
    Calculate Peak Signal-to-Noise Ratio (PSNR) over all channels.

    PSNR = 10 * log10(MAX^2 / MSE), MAX = 2^bit_depth - 1

    Returns:
        PSNR in dB (inf for identical images)
    """
    max_val = (1 << bit_depth) - 1

    diff = original.astype(np.float64) - reconstructed.astype(np.float64)
    mse = np.mean(diff ** 2)

    if mse == 0:
        return float('inf')

    return float(10 * np.log10((max_val ** 2) / mse))


def calculate_bpp(compressed_size: int, image_shape: tuple) -> float:
    """Bits per pixel; image_shape is (height, width[, channels])."""
    num_pixels = image_shape[0] * image_shape[1]
    if num_pixels == 0:
        return 0.0
    return (compressed_size * 8) / num_pixels


def calculate_compression_ratio(original_size: int, compressed_size: int) -> float:
    """Compression ratio (original / compressed)."""
    if compressed_size == 0:
        return float('inf')
    return original_size / compressed_size


def generate_error_map(original: np.ndarray, reconstructed: np.ndarray) -> np.ndarray:
    """
    Per-pixel absolute error, maximum over the color channels.

    Returns:
        (H, W) uint8 error map
    """
    diff = np.abs(original.astype(np.int16) - reconstructed.astype(np.int16))
    if diff.ndim == 3:
        diff = diff.max(axis=-1)
    return diff.astype(np.uint8)
