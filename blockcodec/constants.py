"""Constants for the block image codec."""

import struct

# Block size for tiling
BLOCK_SIZE = 8

# Default quantization level (interpolation threshold)
DEFAULT_LEVEL = 16

# Quantization scale factors. 15.9 / 3.9 (not 15 / 3) keep floor() inside
# the packed field width for normalized value 1.0.
Y_SCALE = 15.9
UV_SCALE = 3.9

# Dequantization divisors
Y_DIVISOR = 15
UV_DIVISOR = 3

# Delta moduli (4-bit Y, 2-bit U/V)
Y_MODULUS = 16
UV_MODULUS = 4

# Magic header and footer, byte-compatible with existing encoded files
HEADER_MAGIC = (
    b"this is binary image of https://github.com/bsahd/image-compress format.\n"
    b"version:230606ee9a6d0b45b71167f8faa01ed169cd96bb\n\n\n\n\n\n\n\n\n"
)
FOOTER_MAGIC = (
    b"\n\n\nthis is binary format. read head using head command for more information.\n"
)

# Dimensions format (Big-endian, 8 bytes total)
# h: Width (2B), h: Height (2B), i: Block count (4B)
DIMS_FORMAT = '>hhi'
DIMS_SIZE = struct.calcsize(DIMS_FORMAT)  # 8 bytes

# Per-block sections
BLOCK_FIELDS_SIZE = 7  # 6 min/max bytes + 1 interpolation byte
CORNER_COUNT = 4
SAMPLES_SIZE = BLOCK_SIZE * BLOCK_SIZE

# Corner order: top-left, top-right, bottom-left, bottom-right as (row, col)
CORNER_POSITIONS = ((0, 0), (0, BLOCK_SIZE - 1),
                    (BLOCK_SIZE - 1, 0), (BLOCK_SIZE - 1, BLOCK_SIZE - 1))

# Signed 16-bit limits for declared dimensions
MAX_DIMENSION = 32767
