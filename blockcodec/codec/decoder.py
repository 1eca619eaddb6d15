"""Block Image Decoder - Integrates all decoding stages."""

from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import numpy as np

from ..constants import BLOCK_SIZE
from ..errors import FormatError
from ..model import Block, Image
from ..io.bitstream import unpack_image
from ..transform import yuv_to_rgb, merge_blocks
from ..reconstruction import reconstruct_block


def decode_block(block: Block) -> np.ndarray:
    """Reconstruct one block as an (8, 8, 3) uint8 RGB tile."""
    return yuv_to_rgb(reconstruct_block(block))


class BlockImageDecoder:
    """
    Decoder for RGB images.

    Pipeline (reverse of encoder):
    1. Unpack the byte layout
    2. Undo delta coding per block
    3. Range-map the grid, or interpolate from the corners when flagged
    4. YUV -> RGB
    5. Place blocks, dropping pixels beyond the declared size
    """

    def __init__(self, workers: Optional[int] = None):
        """
        Args:
            workers: Thread count for block decoding (None or 1: serial)
        """
        self.workers = workers

    def decode_image(self, image: Image) -> np.ndarray:
        """
        Reconstruct the raster of a decoded Image.

        Args:
            image: Image

        Returns:
            (height, width, 3) uint8 RGB raster

        Raises:
            FormatError: If the block count does not tile the declared size
        """
        expected = image.blocks_per_row * image.blocks_per_column
        if image.block_count != expected:
            raise FormatError(
                f"Block count mismatch: {image.width}x{image.height} needs "
                f"{expected} blocks, stream has {image.block_count}")

        if self.workers and self.workers > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                tiles = list(pool.map(decode_block, image.blocks))
        else:
            tiles = [decode_block(block) for block in image.blocks]

        return merge_blocks(tiles, image.width, image.height, BLOCK_SIZE)

    def decode(self, data: bytes) -> np.ndarray:
        """
        Decode compressed image bytes.

        Args:
            data: Compressed data bytes

        Returns:
            (height, width, 3) uint8 RGB raster

        Raises:
            FormatError: If data is invalid or truncated
        """
        return self.decode_image(unpack_image(data))


def decompress(data: bytes, workers: Optional[int] = None) -> np.ndarray:
    """Decode compressed image bytes to an RGB raster."""
    return BlockImageDecoder(workers=workers).decode(data)
