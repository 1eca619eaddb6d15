#!/usr/bin/env python3
"""
Run experiments for block image codec evaluation.

Sweeps the quantization level and generates metrics.json plus reconstructed
and error map images for the report.
"""

import sys
import os
import json
import argparse
from datetime import datetime

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np

from blockcodec.codec import BlockImageEncoder, BlockImageDecoder
from blockcodec.io import read_image, write_image, pack_image
from blockcodec.transform import pad_to_block_multiple
from blockcodec.metrics import (
    calculate_rmse,
    calculate_psnr,
    calculate_bpp,
    calculate_compression_ratio,
    generate_error_map,
)


def make_synthetic_image(h: int = 256, w: int = 256, seed: int = 42) -> np.ndarray:
    """Smooth gradients with a noisy patch and hard edges."""
    rng = np.random.default_rng(seed)
    yy, xx = np.mgrid[0:h, 0:w]
    image = np.zeros((h, w, 3), dtype=np.float64)
    image[..., 0] = 255 * xx / max(1, w - 1)
    image[..., 1] = 255 * yy / max(1, h - 1)
    image[..., 2] = 128 + 100 * np.sin(xx / 17.0) * np.cos(yy / 23.0)

    # Noisy quadrant
    image[h // 2:, w // 2:] += rng.normal(0, 25, (h - h // 2, w - w // 2, 3))

    # Hard-edged square
    image[h // 8:h // 3, w // 8:w // 3] = (250, 20, 30)

    return np.clip(image, 0, 255).astype(np.uint8)


def run_experiment(image: np.ndarray, level: int):
    """Run encode/decode experiment at a specific level."""
    padded, pad_info = pad_to_block_multiple(image)
    encoder = BlockImageEncoder(level=level)
    decoder = BlockImageDecoder()

    encoded = encoder.encode_image(
        padded, original_shape=(pad_info['original_h'], pad_info['original_w']))
    compressed = pack_image(encoded)
    recovered = decoder.decode(compressed)

    error_map = generate_error_map(image, recovered)
    n_blocks = max(1, encoded.block_count)

    return {
        'level': level,
        'rmse': round(calculate_rmse(image, recovered), 4),
        'psnr': round(calculate_psnr(image, recovered), 2),
        'bpp': round(calculate_bpp(len(compressed), image.shape), 4),
        'compression_ratio': round(calculate_compression_ratio(image.nbytes, len(compressed)), 2),
        'compressed_bytes': len(compressed),
        'original_bytes': int(image.nbytes),
        'max_error': int(error_map.max()),
        'mean_error': round(float(error_map.mean()), 2),
        'interpolated_fraction': {
            'y': round(sum(b.interpolate_y for b in encoded.blocks) / n_blocks, 4),
            'u': round(sum(b.interpolate_u for b in encoded.blocks) / n_blocks, 4),
            'v': round(sum(b.interpolate_v for b in encoded.blocks) / n_blocks, 4),
        },
    }, recovered, error_map


def main(argv=None):
    """Run all experiments."""
    parser = argparse.ArgumentParser(description='Level sweep for the block image codec')
    parser.add_argument('--input', '-i', default=None,
                        help='Input image (default: synthetic test image)')
    parser.add_argument('--levels', '-l', type=int, nargs='+',
                        default=[4, 8, 16, 32, 64],
                        help='Levels to evaluate')
    parser.add_argument('--results-dir', '-o', default='results',
                        help='Output directory (default: results)')
    args = parser.parse_args(argv)

    print("=" * 60)
    print("BLOCK IMAGE CODEC - EXPERIMENT RUNNER")
    print("=" * 60)

    images_dir = os.path.join(args.results_dir, "images")
    os.makedirs(images_dir, exist_ok=True)

    if args.input:
        if not os.path.exists(args.input):
            print(f"Error: Input file not found: {args.input}")
            return 1
        print(f"\nLoading image: {args.input}")
        image = read_image(args.input)
        source = args.input
    else:
        print("\nUsing synthetic test image")
        image = make_synthetic_image()
        source = "synthetic"

    print(f"  Size: {image.shape[1]}x{image.shape[0]}")
    print(f"  Bytes: {image.nbytes:,}")

    write_image(image, os.path.join(images_dir, "original.png"))

    print("\n" + "=" * 60)
    print("RATE-DISTORTION EXPERIMENTS")
    print("=" * 60)

    all_results = []
    for level in args.levels:
        print(f"\n--- Level = {level} ---")

        result, recovered, error_map = run_experiment(image, level)
        all_results.append(result)

        print(f"  RMSE:  {result['rmse']:.4f}")
        print(f"  PSNR:  {result['psnr']:.2f} dB")
        print(f"  BPP:   {result['bpp']:.4f}")
        print(f"  Interpolated Y/U/V: {result['interpolated_fraction']['y']:.2%} / "
              f"{result['interpolated_fraction']['u']:.2%} / "
              f"{result['interpolated_fraction']['v']:.2%}")

        write_image(recovered, os.path.join(images_dir, f"reconstructed_l{level}.png"))
        error_rgb = np.repeat(error_map[..., np.newaxis], 3, axis=-1)
        write_image(error_rgb, os.path.join(images_dir, f"error_map_l{level}.png"))

    output = {
        "experiment_date": datetime.now().isoformat(),
        "source": source,
        "image_info": {
            "width": int(image.shape[1]),
            "height": int(image.shape[0]),
            "original_bytes": int(image.nbytes),
        },
        "codec_info": {
            "block_size": 8,
            "color_space": "YUV (fixed coefficients)",
            "quantization": "Per-block min/max, Y 4 bits, U/V 2 bits",
            "prediction": "Intra-block modular delta, row-major",
        },
        "rate_distortion_results": all_results,
    }

    output_path = os.path.join(args.results_dir, "metrics.json")
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(output, f, indent=2, ensure_ascii=False)

    print("\n" + "-" * 60)
    print("SUMMARY TABLE")
    print("-" * 60)
    print(f"{'Level':>8} {'RMSE':>10} {'PSNR (dB)':>12} {'BPP':>10}")
    print("-" * 60)
    for r in all_results:
        print(f"{r['level']:>8} {r['rmse']:>10.4f} {r['psnr']:>12.2f} {r['bpp']:>10.4f}")
    print("-" * 60)
    print(f"\nResults saved to: {output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
