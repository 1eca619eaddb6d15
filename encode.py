#!/usr/bin/env python3
"""
Block Image Encoder CLI

Usage:
    python encode.py [--level <n>] <input> <output>

Example:
    python encode.py --level 16 photo.png photo.bic
"""

import argparse
import sys
import os
import time

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from blockcodec.constants import DEFAULT_LEVEL
from blockcodec.io import read_image, read_image_bytes
from blockcodec.codec import compress
from blockcodec.metrics import calculate_bpp, calculate_compression_ratio


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Block Image Encoder - Lossy 8x8 block compression for RGB images',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Encode PNG file
  python encode.py photo.png photo.bic

  # Stronger smoothing of flat areas
  python encode.py --level 32 photo.png photo.bic --verbose

  # Pipe through stdin/stdout
  cat photo.png | python encode.py - - > photo.bic
        """
    )

    # Required arguments
    parser.add_argument('input',
                        help='Input image path (any format Pillow reads), "-" for stdin')
    parser.add_argument('output',
                        help='Output compressed file path, "-" for stdout')

    # Optional arguments
    parser.add_argument('--level', '-l', type=int, default=DEFAULT_LEVEL,
                        help=f'Quantization level (default: {DEFAULT_LEVEL}). '
                             'Higher = more blocks interpolated from corners')
    parser.add_argument('--workers', '-w', type=int, default=None,
                        help='Threads used for block encoding (default: serial)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Verbose output')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='No summary output')

    args = parser.parse_args(argv)

    # Status goes to stderr when stdout carries data
    log = sys.stderr if args.output == '-' else sys.stdout

    if args.level < 1:
        print(f"Error: Level must be a positive integer, got {args.level}",
              file=sys.stderr)
        return 1

    if args.output == '-' and sys.stdout.isatty():
        print("Error: stdout is a terminal, refusing to write binary data",
              file=sys.stderr)
        return 1

    if args.input != '-' and not os.path.exists(args.input):
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        return 1

    try:
        if args.verbose:
            print(f"Reading input: {args.input}", file=log)

        start_time = time.time()

        if args.input == '-':
            image = read_image_bytes(sys.stdin.buffer.read())
        else:
            image = read_image(args.input)

        h, w = image.shape[:2]
        if args.verbose:
            print(f"  Size: {w}x{h}", file=log)
            if w % 8 or h % 8:
                print(f"  Padded to: {-(-w // 8) * 8}x{-(-h // 8) * 8}", file=log)
            print(f"Encoding with level={args.level}...", file=log)

        compressed = compress(image, level=args.level, workers=args.workers)

        # Write output
        if args.output == '-':
            sys.stdout.buffer.write(compressed)
            sys.stdout.buffer.flush()
        else:
            with open(args.output, 'wb') as f:
                f.write(compressed)

        elapsed = time.time() - start_time

        original_size = image.nbytes
        compressed_size = len(compressed)
        bpp = calculate_bpp(compressed_size, image.shape)
        cr = calculate_compression_ratio(original_size, compressed_size)

        if args.verbose:
            print(f"\nResults:", file=log)
            print(f"  Original size:   {original_size:,} bytes", file=log)
            print(f"  Compressed size: {compressed_size:,} bytes", file=log)
            print(f"  Compression ratio: {cr:.2f}x", file=log)
            print(f"  Bits per pixel: {bpp:.3f}", file=log)
            print(f"  Encoding time: {elapsed:.2f}s", file=log)
            print(f"\nOutput written to: {args.output}", file=log)
        elif not args.quiet:
            print(f"Encoded: {args.input} -> {args.output} "
                  f"({cr:.1f}x compression, {bpp:.3f} bpp)", file=log)

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
