"""Transform modules for the block image codec."""

from .color import rgb_to_yuv, yuv_to_rgb
from .block_utils import pad_to_block_multiple, split_into_blocks, block_origin, merge_blocks

__all__ = [
    'rgb_to_yuv',
    'yuv_to_rgb',
    'pad_to_block_multiple',
    'split_into_blocks',
    'block_origin',
    'merge_blocks',
]
