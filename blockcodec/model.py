"""Data model shared by the encoder, decoder and binary format."""

from dataclasses import dataclass, field
from typing import Tuple

import numpy as np

from .constants import BLOCK_SIZE, CORNER_COUNT


@dataclass(frozen=True, eq=False)
class Block:
    """
    One encoded 8x8 tile.

    Attributes:
        max_y, min_y, max_u, min_u, max_v, min_v: Per-channel value range (0-255)
        interpolate_y, interpolate_u, interpolate_v: True if the channel is
            rebuilt from the corners by bilinear interpolation
        corners: 4 packed corner samples (TL, TR, BL, BR)
        samples: 8x8 grid of packed delta bytes, row-major
    """

    max_y: int
    min_y: int
    max_u: int
    min_u: int
    max_v: int
    min_v: int
    interpolate_y: bool
    interpolate_u: bool
    interpolate_v: bool
    corners: Tuple[int, int, int, int]
    samples: np.ndarray = field(repr=False)

    def __post_init__(self):
        for name in ('max_y', 'min_y', 'max_u', 'min_u', 'max_v', 'min_v'):
            value = int(getattr(self, name))
            if not 0 <= value <= 255:
                raise ValueError(f"{name} must be in [0, 255], got {value}")
            object.__setattr__(self, name, value)

        for name in ('interpolate_y', 'interpolate_u', 'interpolate_v'):
            object.__setattr__(self, name, bool(getattr(self, name)))

        corners = tuple(int(c) for c in self.corners)
        if len(corners) != CORNER_COUNT:
            raise ValueError(f"Expected {CORNER_COUNT} corners, got {len(corners)}")
        if any(not 0 <= c <= 255 for c in corners):
            raise ValueError(f"Corner values must be bytes, got {corners}")
        object.__setattr__(self, 'corners', corners)

        samples = np.array(self.samples, dtype=np.int64)
        if samples.shape != (BLOCK_SIZE, BLOCK_SIZE):
            raise ValueError(f"Samples must be {BLOCK_SIZE}x{BLOCK_SIZE}, got {samples.shape}")
        if samples.min() < 0 or samples.max() > 255:
            raise ValueError("Sample values must be bytes")
        samples = samples.astype(np.uint8)
        samples.flags.writeable = False
        object.__setattr__(self, 'samples', samples)

    @property
    def interpolation_bits(self) -> int:
        """Packed interpolation flags: Y=4, U=2, V=1."""
        return ((4 if self.interpolate_y else 0)
                + (2 if self.interpolate_u else 0)
                + (1 if self.interpolate_v else 0))

    def fixed_fields(self) -> bytes:
        """The 7 fixed bytes as laid out in the stream."""
        return bytes([self.max_y, self.min_y, self.max_u, self.min_u,
                      self.max_v, self.min_v, self.interpolation_bits])

    def __eq__(self, other):
        if not isinstance(other, Block):
            return NotImplemented
        return (self.fixed_fields() == other.fixed_fields()
                and self.corners == other.corners
                and np.array_equal(self.samples, other.samples))

    def __hash__(self):
        return hash((self.fixed_fields(), self.corners, self.samples.tobytes()))


@dataclass(frozen=True)
class Image:
    """Encoded image: declared size plus blocks in row-major tiling order."""

    width: int
    height: int
    blocks: Tuple[Block, ...]

    def __post_init__(self):
        object.__setattr__(self, 'width', int(self.width))
        object.__setattr__(self, 'height', int(self.height))
        object.__setattr__(self, 'blocks', tuple(self.blocks))

    @property
    def block_count(self) -> int:
        return len(self.blocks)

    @property
    def blocks_per_row(self) -> int:
        """Blocks before the decoder wraps to the next block row."""
        return -(-self.width // BLOCK_SIZE)

    @property
    def blocks_per_column(self) -> int:
        return -(-self.height // BLOCK_SIZE)
