"""Byte stream reader/writer and the encoded image layout."""

import io
import struct

import numpy as np

from ..constants import (
    HEADER_MAGIC, FOOTER_MAGIC, DIMS_SIZE,
    BLOCK_FIELDS_SIZE, CORNER_COUNT, SAMPLES_SIZE, BLOCK_SIZE
)
from ..errors import FormatError
from ..model import Block, Image


class ByteWriter:
    """Forward-only big-endian writer."""

    def __init__(self, f=None):
        """
        Initialize byte writer.

        Args:
            f: File object opened in binary write mode (default: new BytesIO)
        """
        self.f = f if f is not None else io.BytesIO()

    def write_bytes(self, data: bytes) -> None:
        """Write raw bytes."""
        self.f.write(bytes(data))

    def write_uint8(self, value: int) -> None:
        self.f.write(struct.pack('>B', value))

    def write_int16(self, value: int) -> None:
        self.f.write(struct.pack('>h', value))

    def write_int32(self, value: int) -> None:
        self.f.write(struct.pack('>i', value))

    def getvalue(self) -> bytes:
        """Return everything written so far (BytesIO targets only)."""
        return self.f.getvalue()


class ByteReader:
    """Forward-only big-endian reader with explicit position tracking."""

    def __init__(self, data_bytes: bytes):
        """
        Initialize byte reader.

        Args:
            data_bytes: Binary data to read from
        """
        self.data = memoryview(bytes(data_bytes))
        self.position = 0

    def remaining(self) -> int:
        """Number of unread bytes."""
        return len(self.data) - self.position

    def read_bytes(self, n: int) -> bytes:
        """Read exactly n bytes, raising FormatError on a short read."""
        if n < 0:
            raise FormatError(f"Negative read length: {n}")
        if self.remaining() < n:
            raise FormatError(
                f"Unexpected end of data at offset {self.position}: "
                f"need {n} bytes, have {self.remaining()}")
        chunk = self.data[self.position:self.position + n].tobytes()
        self.position += n
        return chunk

    def read_uint8(self) -> int:
        return self.read_bytes(1)[0]

    def read_int16(self) -> int:
        return struct.unpack('>h', self.read_bytes(2))[0]

    def read_int32(self) -> int:
        return struct.unpack('>i', self.read_bytes(4))[0]

    def expect(self, literal: bytes, what: str) -> None:
        """Consume a literal, raising FormatError if it does not match."""
        if self.remaining() < len(literal):
            raise FormatError(f"Invalid {what}: data truncated at offset {self.position}")
        found = self.read_bytes(len(literal))
        if found != literal:
            raise FormatError(f"Invalid {what}: {found[:32]!r}...")


def serialized_size(block_count: int) -> int:
    """Exact length in bytes of an encoded image with block_count blocks."""
    per_block = BLOCK_FIELDS_SIZE + CORNER_COUNT + SAMPLES_SIZE
    return len(HEADER_MAGIC) + DIMS_SIZE + block_count * per_block + len(FOOTER_MAGIC)


def pack_image(image: Image) -> bytes:
    """
    Serialize an Image.

    Layout (big-endian):
        header magic
        width (int16), height (int16), block count (int32)
        for every block: maxY minY maxU minU maxV minV, interpolation byte
        for every block: 4 corner bytes (TL, TR, BL, BR)
        for every block: 64 packed delta bytes, row-major
        footer magic

    Args:
        image: Image to serialize

    Returns:
        Encoded bytes
    """
    writer = ByteWriter()
    writer.write_bytes(HEADER_MAGIC)

    try:
        writer.write_int16(image.width)
        writer.write_int16(image.height)
        writer.write_int32(image.block_count)
    except struct.error as e:
        raise FormatError(f"Dimensions out of range: {image.width}x{image.height}, "
                          f"{image.block_count} blocks ({e})") from e

    for block in image.blocks:
        writer.write_bytes(block.fixed_fields())

    for block in image.blocks:
        writer.write_bytes(bytes(block.corners))

    for block in image.blocks:
        writer.write_bytes(block.samples.tobytes())

    writer.write_bytes(FOOTER_MAGIC)
    return writer.getvalue()


def unpack_image(data: bytes) -> Image:
    """
    Deserialize an Image.

    Args:
        data: Encoded bytes

    Returns:
        Image

    Raises:
        FormatError: If magic strings mismatch or data is truncated/inconsistent
    """
    reader = ByteReader(data)
    reader.expect(HEADER_MAGIC, "header")

    width = reader.read_int16()
    height = reader.read_int16()
    block_count = reader.read_int32()

    if width < 0 or height < 0:
        raise FormatError(f"Invalid dimensions: {width}x{height}")
    if block_count < 0:
        raise FormatError(f"Invalid block count: {block_count}")

    expected = serialized_size(block_count)
    if len(data) < expected:
        raise FormatError(f"Data truncated: expected {expected} bytes for "
                          f"{block_count} blocks, got {len(data)}")

    fields = reader.read_bytes(block_count * BLOCK_FIELDS_SIZE)
    corners = reader.read_bytes(block_count * CORNER_COUNT)
    samples = np.frombuffer(reader.read_bytes(block_count * SAMPLES_SIZE), dtype=np.uint8)
    samples = samples.reshape(block_count, BLOCK_SIZE, BLOCK_SIZE)

    reader.expect(FOOTER_MAGIC, "footer")
    if reader.remaining():
        raise FormatError(f"{reader.remaining()} unexpected bytes after footer")

    blocks = []
    for i in range(block_count):
        f = fields[i * BLOCK_FIELDS_SIZE:(i + 1) * BLOCK_FIELDS_SIZE]
        flags = f[6]
        blocks.append(Block(
            max_y=f[0], min_y=f[1],
            max_u=f[2], min_u=f[3],
            max_v=f[4], min_v=f[5],
            interpolate_y=bool(flags & 4),
            interpolate_u=bool(flags & 2),
            interpolate_v=bool(flags & 1),
            corners=corners[i * CORNER_COUNT:(i + 1) * CORNER_COUNT],
            samples=samples[i],
        ))

    return Image(width=width, height=height, blocks=blocks)
