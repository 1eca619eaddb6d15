#!/usr/bin/env python3
"""
Block Image Decoder CLI

Usage:
    python decode.py <input> <output>

Example:
    python decode.py photo.bic recovered.png
"""

import argparse
import sys
import os
import time

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from blockcodec.io import write_image, write_image_bytes
from blockcodec.codec import BlockImageDecoder
from blockcodec.errors import CodecError


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Block Image Decoder - Decompress block-coded images',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Decode to PNG
  python decode.py photo.bic recovered.png

  # Decode with verbose output
  python decode.py photo.bic recovered.png --verbose

  # Decode from stdin to stdout
  cat photo.bic | python decode.py - - > recovered.png
        """
    )

    # Required arguments
    parser.add_argument('input',
                        help='Input compressed file path, "-" for stdin')
    parser.add_argument('output',
                        help='Output image path, "-" for stdout')

    # Optional arguments
    parser.add_argument('--format', '-f', default=None,
                        help='Output format (PNG, BMP, ...). Default: from '
                             'extension, PNG for stdout')
    parser.add_argument('--workers', '-w', type=int, default=None,
                        help='Threads used for block decoding (default: serial)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Verbose output')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='No summary output')

    args = parser.parse_args(argv)

    log = sys.stderr if args.output == '-' else sys.stdout

    if args.input != '-' and not os.path.exists(args.input):
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        return 1

    try:
        if args.verbose:
            print(f"Reading compressed file: {args.input}", file=log)

        start_time = time.time()

        if args.input == '-':
            compressed = sys.stdin.buffer.read()
        else:
            with open(args.input, 'rb') as f:
                compressed = f.read()

        if args.verbose:
            print(f"  Compressed size: {len(compressed):,} bytes", file=log)
            print("Decoding...", file=log)

        decoder = BlockImageDecoder(workers=args.workers)
        image = decoder.decode(compressed)

        elapsed = time.time() - start_time

        if args.output == '-':
            sys.stdout.buffer.write(write_image_bytes(image, format=args.format or 'PNG'))
            sys.stdout.buffer.flush()
        else:
            write_image(image, args.output, format=args.format)

        if args.verbose:
            print(f"\nReconstructed image:", file=log)
            print(f"  Size: {image.shape[1]}x{image.shape[0]}", file=log)
            print(f"  Decoding time: {elapsed:.2f}s", file=log)
            print(f"\nOutput written to: {args.output}", file=log)
        elif not args.quiet:
            print(f"Decoded: {args.input} -> {args.output} "
                  f"({image.shape[1]}x{image.shape[0]})", file=log)

    except CodecError as e:
        print(f"Error: Invalid compressed file - {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
