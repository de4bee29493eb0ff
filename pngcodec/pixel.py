"""Pixel formats, animation control data, transformations and parameter errors."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import Enum, IntEnum, IntFlag
from typing import BinaryIO

from .chunk import acTL, fcTL, write_chunk

__all__ = [
    "ColorType",
    "BitDepth",
    "BytesPerPixel",
    "Unit",
    "PixelDimensions",
    "DisposeOp",
    "BlendOp",
    "FrameControl",
    "AnimationControl",
    "Compression",
    "Transformations",
    "ParameterError",
    "ImageBufferSizeError",
    "PolledAfterEndOfImage",
    "PolledAfterFatalError",
]

_U32_MAX = 0xFFFF_FFFF
_USIZE_MAX = 0xFFFF_FFFF_FFFF_FFFF


class BitDepth(IntEnum):
    """Number of bits per sample."""

    ONE = 1
    TWO = 2
    FOUR = 4
    EIGHT = 8
    SIXTEEN = 16


class ColorType(IntEnum):
    """How a pixel is encoded."""

    GRAYSCALE = 0
    RGB = 2
    INDEXED = 3
    GRAYSCALE_ALPHA = 4
    RGBA = 6

    def samples(self) -> int:
        """Number of samples per pixel."""
        return _SAMPLES[self]

    def checked_raw_row_length(self, depth: BitDepth, width: int) -> int | None:
        """Bytes of one raw row including the filter byte, or ``None`` if it is too large."""
        if not 0 <= width <= _U32_MAX:
            return None
        bits = width * self.samples() * int(depth)
        length = 1 + (bits + 7) // 8
        return length if length <= _USIZE_MAX else None

    def raw_row_length_from_width(self, depth: BitDepth, width: int) -> int:
        """Bytes of one raw row of ``width`` pixels including the filter byte."""
        samples = width * self.samples()
        depth = BitDepth(depth)
        if depth is BitDepth.SIXTEEN:
            return 1 + samples * 2
        if depth is BitDepth.EIGHT:
            return 1 + samples
        samples_per_byte = 8 // int(depth)
        whole, rest = divmod(samples, samples_per_byte)
        return 1 + whole + (1 if rest else 0)

    def is_combination_invalid(self, bit_depth: BitDepth) -> bool:
        """True if the PNG standard forbids this color type with ``bit_depth``."""
        sub_byte = bit_depth in (BitDepth.ONE, BitDepth.TWO, BitDepth.FOUR)
        multi_sample = self in (ColorType.RGB, ColorType.GRAYSCALE_ALPHA, ColorType.RGBA)
        return (sub_byte and multi_sample) or (
            bit_depth == BitDepth.SIXTEEN and self is ColorType.INDEXED
        )

    def bits_per_pixel(self, bit_depth: BitDepth) -> int:
        """Bits used by one pixel."""
        return self.samples() * int(bit_depth)

    def bytes_per_pixel(self, bit_depth: BitDepth) -> int:
        """Bytes used by one pixel, rounding sub-byte samples up to a whole byte."""
        return self.samples() * ((int(bit_depth) + 7) >> 3)


_SAMPLES = {
    ColorType.GRAYSCALE: 1,
    ColorType.INDEXED: 1,
    ColorType.RGB: 3,
    ColorType.GRAYSCALE_ALPHA: 2,
    ColorType.RGBA: 4,
}


class BytesPerPixel(IntEnum):
    """Whole bytes per pixel, as used by the filtering prediction."""

    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    SIX = 6
    EIGHT = 8


class Unit(IntEnum):
    """Physical unit of the pixel dimensions."""

    UNSPECIFIED = 0
    METER = 1


@dataclass(frozen=True)
class PixelDimensions:
    """Pixels per unit along each axis."""

    xppu: int
    yppu: int
    unit: Unit


class DisposeOp(IntEnum):
    """How an animation frame's area is reset at the end of the frame."""

    NONE = 0
    BACKGROUND = 1
    PREVIOUS = 2

    def __str__(self) -> str:
        return f"DISPOSE_OP_{self.name}"


class BlendOp(IntEnum):
    """How frame pixels are written into the output buffer."""

    SOURCE = 0
    OVER = 1

    def __str__(self) -> str:
        return f"BLEND_OP_{self.name}"


@dataclass
class FrameControl:
    """Contents of an ``fcTL`` chunk."""

    sequence_number: int = 0
    width: int = 0
    height: int = 0
    x_offset: int = 0
    y_offset: int = 0
    delay_num: int = 1
    delay_den: int = 30
    dispose_op: DisposeOp = DisposeOp.NONE
    blend_op: BlendOp = BlendOp.SOURCE

    def inc_seq_num(self, i: int) -> None:
        """Advance the sequence number by ``i``."""
        self.sequence_number += i

    def to_bytes(self) -> bytes:
        """The 26-byte chunk payload."""
        try:
            return struct.pack(
                ">IIIIIHHBB",
                self.sequence_number,
                self.width,
                self.height,
                self.x_offset,
                self.y_offset,
                self.delay_num,
                self.delay_den,
                int(self.dispose_op),
                int(self.blend_op),
            )
        except struct.error as err:
            raise ValueError(f"frame control field out of range: {err}") from None

    def encode(self, stream: BinaryIO) -> None:
        """Write this as an ``fcTL`` chunk."""
        write_chunk(stream, fcTL, self.to_bytes())


@dataclass
class AnimationControl:
    """Contents of an ``acTL`` chunk; ``num_plays`` of 0 loops forever."""

    num_frames: int
    num_plays: int

    def to_bytes(self) -> bytes:
        """The 8-byte chunk payload."""
        try:
            return struct.pack(">II", self.num_frames, self.num_plays)
        except struct.error as err:
            raise ValueError(f"animation control field out of range: {err}") from None

    def encode(self, stream: BinaryIO) -> None:
        """Write this as an ``acTL`` chunk."""
        write_chunk(stream, acTL, self.to_bytes())


class Compression(Enum):
    """Compression strength; ``HUFFMAN`` and ``RLE`` are kept only for compatibility."""

    DEFAULT = "default"
    FAST = "fast"
    BEST = "best"
    HUFFMAN = "huffman"
    RLE = "rle"


class Transformations(IntFlag):
    """Output transformations applied while decoding."""

    IDENTITY = 0x00000
    STRIP_16 = 0x00001
    EXPAND = 0x00010
    ALPHA = 0x10000

    @classmethod
    def normalize_to_color8(cls) -> "Transformations":
        """Expand every input to 8-bit grayscale or color."""
        return cls.EXPAND | cls.STRIP_16


class ParameterError(Exception):
    """The caller passed or did something the decoder cannot accept."""


class ImageBufferSizeError(ParameterError):
    """The provided buffer does not have the required size."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"wrong data size, expected {expected} got {actual}")
        self.expected = expected
        self.actual = actual


class PolledAfterEndOfImage(ParameterError):
    """Decoding was requested after the last image had been read."""

    def __init__(self) -> None:
        super().__init__("End of image has been reached")


class PolledAfterFatalError(ParameterError):
    """Decoding was requested after a fatal, non-resumable error."""

    def __init__(self) -> None:
        super().__init__("A fatal decoding error has been encountered earlier")