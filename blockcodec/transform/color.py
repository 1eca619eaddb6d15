"""RGB <-> YUV conversion with fixed coefficients."""

import numpy as np

_f32 = np.float32


def rgb_to_yuv(rgb: np.ndarray) -> np.ndarray:
    """
    Convert RGB to YUV (U/V offset by 128).

        Y =  0.299 R + 0.587 G + 0.114 B
        U = -0.169 R - 0.331 G + 0.5   B + 128
        V =  0.5   R - 0.419 G - 0.081 B + 128

    Args:
        rgb: Array with RGB in the last axis (any leading shape)

    Returns:
        YUV array as float32, same shape
    """
    # Single precision; stored block bytes are truncated from these values
    rgb = np.asarray(rgb, dtype=np.float32)
    R, G, B = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    Y = _f32(0.299) * R + _f32(0.587) * G + _f32(0.114) * B
    U = _f32(-0.169) * R - _f32(0.331) * G + _f32(0.5) * B + _f32(128)
    V = _f32(0.5) * R - _f32(0.419) * G - _f32(0.081) * B + _f32(128)
    return np.stack([Y, U, V], axis=-1)


def yuv_to_rgb(yuv: np.ndarray) -> np.ndarray:
    """
    Convert YUV back to 8-bit RGB.

    Each channel is clipped to [0, 255] and then truncated, not rounded.

    Args:
        yuv: Array with YUV in the last axis (any leading shape)

    Returns:
        RGB array as uint8, same shape
    """
    yuv = np.asarray(yuv, dtype=np.float64)
    Y, U, V = yuv[..., 0], yuv[..., 1], yuv[..., 2]
    R = Y + 1.402 * (V - 128)
    G = Y - 0.344 * (U - 128) - 0.714 * (V - 128)
    B = Y + 1.772 * (U - 128)
    rgb = np.stack([R, G, B], axis=-1)
    return np.clip(rgb, 0, 255).astype(np.uint8)
