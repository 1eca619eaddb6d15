"""Block Image Encoder - Integrates all encoding stages."""

from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Tuple

import numpy as np

from ..constants import BLOCK_SIZE, DEFAULT_LEVEL, MAX_DIMENSION
from ..errors import DimensionError
from ..model import Block, Image
from ..io.bitstream import pack_image
from ..transform import rgb_to_yuv, split_into_blocks, pad_to_block_multiple
from ..quantization import validate_level, quantize_block, quantize_corners
from ..prediction import encode_block_deltas


def encode_block(rgb_block: np.ndarray, level: int = DEFAULT_LEVEL) -> Block:
    """
    Encode one 8x8 RGB tile.

    Args:
        rgb_block: (8, 8, 3) RGB tile
        level: Quantization level

    Returns:
        Block
    """
    yuv = rgb_to_yuv(rgb_block)
    quantized = quantize_block(yuv, level)
    stats_y, stats_u, stats_v = quantized.stats

    return Block(
        max_y=stats_y.stored_max, min_y=stats_y.stored_min,
        max_u=stats_u.stored_max, min_u=stats_u.stored_min,
        max_v=stats_v.stored_max, min_v=stats_v.stored_min,
        interpolate_y=stats_y.interpolate,
        interpolate_u=stats_u.interpolate,
        interpolate_v=stats_v.interpolate,
        corners=quantize_corners(yuv, quantized.stats),
        samples=encode_block_deltas(quantized.qy, quantized.qu, quantized.qv),
    )


class BlockImageEncoder:
    """
    Encoder for RGB images.

    Pipeline:
    1. Split the (pre-padded) raster into 8x8 blocks
    2. RGB -> YUV
    3. Per-channel block statistics and interpolation flags
    4. Normalize and quantize (Y: 4 bits, U/V: 2 bits)
    5. Quantize corners
    6. Delta-code the grid in row-major order
    7. Pack the image into the columnar byte layout
    """

    def __init__(self, level: int = DEFAULT_LEVEL, workers: Optional[int] = None):
        """
        Args:
            level: Quantization level (luma threshold level/2, chroma level)
            workers: Thread count for block encoding (None or 1: serial)
        """
        self.level = validate_level(level)
        self.workers = workers

    def encode_image(self, image: np.ndarray,
                     original_shape: Optional[Tuple[int, int]] = None) -> Image:
        """
        Encode an RGB raster into an Image.

        Args:
            image: (H, W, 3) uint8 raster, H and W multiples of 8
            original_shape: (height, width) to declare in the header when the
                raster was padded. Defaults to the raster size.

        Returns:
            Image

        Raises:
            DimensionError: If the raster is not padded or the declared size
                does not fit it
        """
        image = np.asarray(image)
        blocks = split_into_blocks(image, BLOCK_SIZE)
        padded_h, padded_w = image.shape[:2]

        if original_shape is None:
            h, w = padded_h, padded_w
        else:
            h, w = (int(x) for x in original_shape)
            if (-(-h // BLOCK_SIZE) * BLOCK_SIZE != padded_h
                    or -(-w // BLOCK_SIZE) * BLOCK_SIZE != padded_w):
                raise DimensionError(
                    f"Declared size {w}x{h} does not pad to raster size {padded_w}x{padded_h}")

        if not (0 <= w <= MAX_DIMENSION and 0 <= h <= MAX_DIMENSION):
            raise DimensionError(f"Image size {w}x{h} exceeds {MAX_DIMENSION}")

        if self.workers and self.workers > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                encoded = list(pool.map(self._encode_block, blocks))
        else:
            encoded = [self._encode_block(block) for block in blocks]

        return Image(width=w, height=h, blocks=encoded)

    def encode(self, image: np.ndarray,
               original_shape: Optional[Tuple[int, int]] = None) -> bytes:
        """
        Encode an RGB raster to bytes.

        Args:
            image: (H, W, 3) uint8 raster, H and W multiples of 8
            original_shape: Declared (height, width), see encode_image

        Returns:
            Compressed data as bytes
        """
        return pack_image(self.encode_image(image, original_shape))

    def _encode_block(self, block: np.ndarray) -> Block:
        return encode_block(block, self.level)


def compress(image: np.ndarray, level: int = DEFAULT_LEVEL,
             workers: Optional[int] = None) -> bytes:
    """
    Pad an RGB raster of any size and encode it.

    The header declares the original size so padding never reaches the output
    of the decoder.
    """
    padded, pad_info = pad_to_block_multiple(np.asarray(image), BLOCK_SIZE)
    encoder = BlockImageEncoder(level=level, workers=workers)
    return encoder.encode(padded, original_shape=(pad_info['original_h'],
                                                  pad_info['original_w']))
