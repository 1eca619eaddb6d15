"""I/O modules for the block image codec."""

from .image_reader import read_image, read_image_bytes
from .image_writer import write_image, write_image_bytes
from .bitstream import ByteWriter, ByteReader, pack_image, unpack_image, serialized_size

__all__ = [
    'read_image',
    'read_image_bytes',
    'write_image',
    'write_image_bytes',
    'ByteWriter',
    'ByteReader',
    'pack_image',
    'unpack_image',
    'serialized_size',
]
