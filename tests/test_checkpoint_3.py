"""Checkpoint 3: Block Statistics and Quantization Verification."""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
import pytest

from blockcodec.constants import CORNER_POSITIONS, Y_SCALE, UV_SCALE
from blockcodec.transform import rgb_to_yuv
from blockcodec.codec import encode_block
from blockcodec.quantization import (
    channel_thresholds, compute_channel_stats, normalize, quantize,
    quantize_block, quantize_corners, validate_level,
    pack_sample, unpack_sample, pack_grid, unpack_grid,
)


def test_thresholds_are_asymmetric():
    assert channel_thresholds(16) == (8.0, 16.0, 16.0)
    assert channel_thresholds(5) == (2.5, 5.0, 5.0)


def test_invalid_level():
    for bad in (0, -4, 2.5):
        with pytest.raises(ValueError):
            validate_level(bad)
    assert validate_level(16) == 16


def test_channel_stats():
    channel = np.linspace(10.2, 18.2, 64).reshape(8, 8)
    stats = compute_channel_stats(channel, threshold=8.0)

    assert stats.minimum == pytest.approx(10.2)
    assert stats.maximum == pytest.approx(18.2)
    assert stats.stored_min == 10
    assert stats.stored_max == 18


def test_interpolation_threshold_boundary():
    """Flag is set iff range < threshold."""
    at_threshold = np.linspace(10.0, 18.0, 64).reshape(8, 8)
    below = np.linspace(10.0, 17.5, 64).reshape(8, 8)

    assert not compute_channel_stats(at_threshold, 8.0).interpolate
    assert compute_channel_stats(below, 8.0).interpolate


def test_max_clamped_to_255():
    channel = np.full((8, 8), 255.5)
    stats = compute_channel_stats(channel, threshold=16.0)

    assert stats.maximum == 255.0
    assert stats.stored_max == 255
    assert stats.stored_min == 255
    assert stats.interpolate


def test_quantize_scale_and_bounds():
    assert quantize(np.array([0.0, 1.0]), Y_SCALE, 16).tolist() == [0, 15]
    assert quantize(np.array([0.0, 1.0]), UV_SCALE, 4).tolist() == [0, 3]
    # 15.9 bias: 0.97 * 15.9 = 15.42 -> 15, while 0.97 * 15 would give 14
    assert quantize(np.array([0.97]), Y_SCALE, 16).tolist() == [15]
    assert quantize(np.array([1.2]), UV_SCALE, 4).tolist() == [3]


def test_normalize_interpolated_channel_is_zero():
    channel = np.full((8, 8), 42.0)
    stats = compute_channel_stats(channel, threshold=8.0)
    assert stats.value_range == 0
    assert np.all(normalize(channel, stats) == 0)


def test_normalize_clips_above_clamped_max():
    channel = np.linspace(200.0, 255.5, 64).reshape(8, 8)
    stats = compute_channel_stats(channel, threshold=16.0)
    n = normalize(channel, stats)
    assert n.min() == 0.0
    assert n.max() == 1.0


def test_quantized_values_bounded():
    """Quantized Y stays in [0, 15] and U/V in [0, 3] for any block."""
    rng = np.random.default_rng(3)
    blocks = [
        rng.integers(0, 256, (8, 8, 3)),
        np.zeros((8, 8, 3)),
        np.full((8, 8, 3), 255),
        np.tile([0, 0, 255], (8, 8, 1)),
        np.tile([255, 0, 0], (8, 8, 1)),
    ]
    for rgb in blocks:
        for level in (1, 2, 16, 64, 300):
            qb = quantize_block(rgb_to_yuv(rgb), level)
            assert 0 <= qb.qy.min() and qb.qy.max() <= 15
            assert 0 <= qb.qu.min() and qb.qu.max() <= 3
            assert 0 <= qb.qv.min() and qb.qv.max() <= 3


def test_interpolation_flags_follow_level():
    rng = np.random.default_rng(4)
    for _ in range(20):
        rgb = rng.integers(0, 256, (8, 8, 3))
        rgb = rgb // rng.integers(1, 40)
        yuv = rgb_to_yuv(rgb)
        level = int(rng.integers(1, 64))
        qb = quantize_block(yuv, level)

        for c, threshold in enumerate((level / 2, level, level)):
            channel = yuv[..., c]
            value_range = min(channel.max(), np.float32(255.0)) - channel.min()
            assert qb.stats[c].interpolate == (value_range < threshold)


def test_gradient_block_spans_full_scale():
    gray = np.repeat(np.arange(0, 256, 4)[:, np.newaxis], 3, axis=1)
    rgb = gray.reshape(8, 8, 3)
    qb = quantize_block(rgb_to_yuv(rgb), 16)

    assert not qb.stats[0].interpolate
    assert qb.qy[0, 0] == 0
    assert qb.qy[7, 7] == 15
    # Monotonic along raster order
    assert np.all(np.diff(qb.qy.ravel()) >= 0)


def test_corners_match_grid_policy():
    rng = np.random.default_rng(5)
    yuv = rgb_to_yuv(rng.integers(0, 256, (8, 8, 3)))
    qb = quantize_block(yuv, 16)
    corners = quantize_corners(yuv, qb.stats)

    assert len(corners) == 4
    expected = tuple(pack_sample(qb.qy[r, c], qb.qu[r, c], qb.qv[r, c])
                     for r, c in CORNER_POSITIONS)
    assert corners == expected


def test_corners_of_flat_block_are_zero():
    yuv = rgb_to_yuv(np.full((8, 8, 3), 90))
    qb = quantize_block(yuv, 16)
    assert all(s.interpolate for s in qb.stats)
    assert quantize_corners(yuv, qb.stats) == (0, 0, 0, 0)


def single_precision_yuv(r, g, b):
    """Scalar float32 evaluation of the forward transform, term by term."""
    f = np.float32
    r, g, b = f(r), f(g), f(b)
    y = f(0.299) * r + f(0.587) * g + f(0.114) * b
    u = f(-0.169) * r - f(0.331) * g + f(0.5) * b + f(128)
    v = f(0.5) * r - f(0.419) * g - f(0.081) * b + f(128)
    return y, u, v


@pytest.mark.parametrize("k", [1, 2, 4, 8])
def test_flat_gray_stores_exact_luma(k):
    """The luma weights sum back to exactly k in float32 for these levels."""
    block = encode_block(np.full((8, 8, 3), k, dtype=np.uint8))

    assert block.min_y == k
    assert block.max_y == k
    assert block.interpolate_y


def test_rgb_to_yuv_matches_scalar_float32():
    rng = np.random.default_rng(6)
    rgb = rng.integers(0, 256, (64, 3), dtype=np.uint8)
    yuv = rgb_to_yuv(rgb)

    for px, out in zip(rgb, yuv):
        expected = single_precision_yuv(*px)
        assert tuple(out) == expected


def test_flat_block_stored_bytes_all_gray_levels():
    """Stored min/max are the float32 values truncated toward zero."""
    for k in range(256):
        block = encode_block(np.full((8, 8, 3), k, dtype=np.uint8))
        y, u, v = (min(int(c), 255) for c in single_precision_yuv(k, k, k))

        assert (block.min_y, block.max_y) == (y, y), k
        assert (block.min_u, block.max_u) == (u, u), k
        assert (block.min_v, block.max_v) == (v, v), k


def test_packing():
    assert pack_sample(15, 3, 3) == 255
    assert pack_sample(0, 0, 0) == 0
    assert pack_sample(1, 2, 3) == 27
    assert unpack_sample(27) == (1, 2, 3)
    assert unpack_sample(255) == (15, 3, 3)

    y = np.arange(16).repeat(16)
    u = np.tile(np.arange(4).repeat(4), 16)
    v = np.tile(np.arange(4), 64)
    packed = pack_grid(y, u, v)
    assert packed.dtype == np.uint8
    assert packed.tolist() == list(range(256))
    uy, uu, uv = unpack_grid(packed)
    assert np.array_equal(uy, y) and np.array_equal(uu, u) and np.array_equal(uv, v)


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
