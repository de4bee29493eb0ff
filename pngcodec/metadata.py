"""Color-space metadata and the image information record."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, BinaryIO, List, Optional, Tuple

from .chunk import cHRM, gAMA, sRGB, write_chunk
from .pixel import (
    AnimationControl,
    BitDepth,
    BytesPerPixel,
    ColorType,
    FrameControl,
    PixelDimensions,
)

__all__ = [
    "ScaledFloat",
    "SourceChromaticities",
    "SrgbRenderingIntent",
    "CodingIndependentCodePoints",
    "MasteringDisplayColorVolume",
    "ContentLightLevelInfo",
    "Info",
]

_U32_MAX = 0xFFFF_FFFF
_F32 = struct.Struct("<f")


def _f32(value: float) -> float:
    """Round ``value`` to the nearest single-precision float."""
    try:
        return _F32.unpack(_F32.pack(value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


_SCALING = _f32(100_000.0)
_U32_MAX_AS_F32 = _f32(float(_U32_MAX))


@dataclass(frozen=True)
class ScaledFloat:
    """A non-negative value stored as an integer multiple of 1/100000."""

    scaled: int

    def __post_init__(self) -> None:
        if not 0 <= self.scaled <= _U32_MAX:
            raise ValueError(f"scaled value out of range: {self.scaled}")

    @staticmethod
    def _forward(value: float) -> int:
        value = _f32(value)
        if math.isnan(value) or value < 0.0:
            value = 0.0
        product = _f32(value * _SCALING)
        if math.isinf(product):
            return _U32_MAX
        return min(math.floor(product), _U32_MAX)

    @staticmethod
    def _reverse(encoded: int) -> float:
        return _f32(_f32(float(encoded)) / _SCALING)

    @staticmethod
    def in_range(value: float) -> bool:
        """Whether ``value`` lies within the representable range."""
        value = _f32(value)
        if math.isnan(value) or value < 0.0:
            return False
        product = _f32(value * _SCALING)
        return not math.isinf(product) and math.floor(product) <= _U32_MAX_AS_F32

    @staticmethod
    def exact(value: float) -> bool:
        """Whether ``value`` survives a round trip through the scaled form unchanged."""
        value = _f32(value)
        return value == ScaledFloat._reverse(ScaledFloat._forward(value))

    @classmethod
    def from_value(cls, value: float) -> "ScaledFloat":
        """Scale and quantise ``value``, clamping it into the representable range."""
        return cls(cls._forward(value))

    @classmethod
    def from_scaled(cls, val: int) -> "ScaledFloat":
        """Build from a value already scaled as the specification defines."""
        return cls(val)

    def value(self) -> float:
        """The unscaled value as a single-precision float."""
        return self._reverse(self.scaled)

    def encode_gama(self, stream: BinaryIO) -> None:
        """Write this as a ``gAMA`` chunk."""
        write_chunk(stream, gAMA, struct.pack(">I", self.scaled))


_Point = Tuple[ScaledFloat, ScaledFloat]


@dataclass(frozen=True)
class SourceChromaticities:
    """Chromaticities of the white point and the three primaries."""

    white: _Point
    red: _Point
    green: _Point
    blue: _Point

    @classmethod
    def from_values(
        cls,
        white: Tuple[float, float],
        red: Tuple[float, float],
        green: Tuple[float, float],
        blue: Tuple[float, float],
    ) -> "SourceChromaticities":
        """Build from unscaled (x, y) pairs."""

        def point(pair: Tuple[float, float]) -> _Point:
            x, y = pair
            return ScaledFloat.from_value(x), ScaledFloat.from_value(y)

        return cls(point(white), point(red), point(green), point(blue))

    def to_bytes(self) -> bytes:
        """The 32-byte big-endian chunk payload."""
        values = [
            coord.scaled
            for pair in (self.white, self.red, self.green, self.blue)
            for coord in pair
        ]
        return struct.pack(">8I", *values)

    def encode(self, stream: BinaryIO) -> None:
        """Write this as a ``cHRM`` chunk."""
        write_chunk(stream, cHRM, self.to_bytes())


class SrgbRenderingIntent(IntEnum):
    """Rendering intent of an sRGB image."""

    PERCEPTUAL = 0
    RELATIVE_COLORIMETRIC = 1
    SATURATION = 2
    ABSOLUTE_COLORIMETRIC = 3

    def encode(self, stream: BinaryIO) -> None:
        """Write this as an ``sRGB`` chunk."""
        write_chunk(stream, sRGB, bytes([int(self)]))


@dataclass(frozen=True)
class CodingIndependentCodePoints:
    """Contents of a ``cICP`` chunk."""

    color_primaries: int
    transfer_function: int
    matrix_coefficients: int
    is_video_full_range_image: bool


@dataclass(frozen=True)
class MasteringDisplayColorVolume:
    """Contents of an ``mDCV`` chunk; luminances are in units of 0.0001 cd/m^2."""

    chromaticities: SourceChromaticities
    max_luminance: int
    min_luminance: int


@dataclass(frozen=True)
class ContentLightLevelInfo:
    """Contents of a ``cLLI`` chunk; values are in units of 0.0001 cd/m^2, 0 meaning unknown."""

    max_content_light_level: int
    max_frame_average_light_level: int


@dataclass
class Info:
    """Everything known about an image apart from its pixel data."""

    width: int = 0
    height: int = 0
    bit_depth: BitDepth = BitDepth.EIGHT
    color_type: ColorType = ColorType.GRAYSCALE
    interlaced: bool = False
    sbit: Optional[bytes] = None
    trns: Optional[bytes] = None
    pixel_dims: Optional[PixelDimensions] = None
    palette: Optional[bytes] = None
    gama_chunk: Optional[ScaledFloat] = None
    chrm_chunk: Optional[SourceChromaticities] = None
    bkgd: Optional[bytes] = None
    frame_control: Optional[FrameControl] = None
    animation_control: Optional[AnimationControl] = None
    source_gamma: Optional[ScaledFloat] = None
    source_chromaticities: Optional[SourceChromaticities] = None
    srgb: Optional[SrgbRenderingIntent] = None
    icc_profile: Optional[bytes] = None
    coding_independent_code_points: Optional[CodingIndependentCodePoints] = None
    mastering_display_color_volume: Optional[MasteringDisplayColorVolume] = None
    content_light_level: Optional[ContentLightLevelInfo] = None
    exif_metadata: Optional[bytes] = None
    uncompressed_latin1_text: List[Any] = field(default_factory=list)
    compressed_latin1_text: List[Any] = field(default_factory=list)
    utf8_text: List[Any] = field(default_factory=list)

    @classmethod
    def with_size(cls, width: int, height: int) -> "Info":
        """Default information for an image of the given size."""
        return cls(width=width, height=height)

    def size(self) -> Tuple[int, int]:
        """Width and height of the image."""
        return self.width, self.height

    def is_animated(self) -> bool:
        """True if the image carries both animation and frame control data."""
        return self.frame_control is not None and self.animation_control is not None

    def bits_per_pixel(self) -> int:
        """Bits used by one pixel."""
        return self.color_type.bits_per_pixel(self.bit_depth)

    def bytes_per_pixel(self) -> int:
        """Bytes used by one pixel, sub-byte pixels rounded up."""
        return self.color_type.bytes_per_pixel(self.bit_depth)

    def bpp_in_prediction(self) -> BytesPerPixel:
        """Bytes per pixel as used by the filter prediction."""
        return BytesPerPixel(self.bytes_per_pixel())

    def raw_bytes(self) -> int:
        """Bytes needed for one deinterlaced image, filter bytes included."""
        return self.height * self.raw_row_length()

    def raw_row_length(self) -> int:
        """Bytes needed for one deinterlaced row, filter byte included."""
        return self.raw_row_length_from_width(self.width)

    def checked_raw_row_length(self) -> Optional[int]:
        """Like ``raw_row_length`` but ``None`` when the width is out of range."""
        return self.color_type.checked_raw_row_length(self.bit_depth, self.width)

    def raw_row_length_from_width(self, width: int) -> int:
        """Bytes needed for one deinterlaced row of ``width`` pixels."""
        return self.color_type.raw_row_length_from_width(self.bit_depth, width)

    def set_source_srgb(self, rendering_intent: SrgbRenderingIntent) -> None:
        """Mark the image as sRGB with ``rendering_intent``; any ICC profile is dropped."""
        self.srgb = SrgbRenderingIntent(rendering_intent)
        self.icc_profile = None