"""Exceptions raised by the block image codec."""


class CodecError(ValueError):
    """Base class for codec errors."""


class FormatError(CodecError):
    """Encoded stream is malformed: bad magic, truncated, or inconsistent."""


class DimensionError(CodecError):
    """Raster shape does not meet the encoder's tiling contract."""
