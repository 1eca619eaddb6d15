"""Codec modules for the block image codec."""

from .encoder import BlockImageEncoder, encode_block, compress
from .decoder import BlockImageDecoder, decode_block, decompress

__all__ = [
    'BlockImageEncoder',
    'BlockImageDecoder',
    'encode_block',
    'decode_block',
    'compress',
    'decompress',
]
