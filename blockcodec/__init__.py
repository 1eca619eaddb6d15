"""Block image codec: lossy 8x8 block YUV compression."""

from .constants import DEFAULT_LEVEL
from .errors import CodecError, FormatError, DimensionError
from .model import Block, Image
from .codec import (
    BlockImageEncoder, BlockImageDecoder, compress, decompress
)
from .io import pack_image, unpack_image

__version__ = '0.1.0'

__all__ = [
    'DEFAULT_LEVEL',
    'CodecError',
    'FormatError',
    'DimensionError',
    'Block',
    'Image',
    'BlockImageEncoder',
    'BlockImageDecoder',
    'compress',
    'decompress',
    'pack_image',
    'unpack_image',
]
