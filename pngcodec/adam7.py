"""Helpers for the Adam7 interlacing scheme."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, MutableSequence, Sequence

__all__ = [
    "Adam7Info",
    "adam7_passes",
    "subbyte_pixels",
    "expand_adam7_bits",
    "expand_pass",
]


@dataclass(frozen=True)
class Adam7Info:
    """Which Adam7 pass and line a decoded row belongs to, and its pixel width."""

    pass_: int
    line: int
    width: int

    def __post_init__(self) -> None:
        if not 1 <= self.pass_ <= 7:
            raise ValueError(f"Adam7 pass must be within 1..7, got {self.pass_}")
        if self.width <= 0:
            raise ValueError(f"Adam7 row width must be positive, got {self.width}")


# (width offset, width divisor, height offset, height divisor) for each pass.
_PASS_BOUNDS = {
    1: (0, 8, 0, 8),
    2: (4, 8, 0, 8),
    3: (0, 4, 4, 8),
    4: (2, 4, 0, 4),
    5: (0, 2, 2, 4),
    6: (1, 2, 0, 2),
    7: (0, 1, 1, 2),
}

# (line multiplier, line offset, sample multiplier, sample offset) for each pass.
_PASS_GEOMETRY = {
    1: (8, 0, 8, 0),
    2: (8, 0, 8, 4),
    3: (8, 4, 4, 0),
    4: (4, 0, 4, 2),
    5: (4, 2, 2, 0),
    6: (2, 0, 2, 1),
    7: (2, 1, 1, 0),
}


def _ceil_div_clamped(numerator: int, divisor: int) -> int:
    return max(0, -(-numerator // divisor))


def adam7_passes(width: int, height: int) -> Iterator[Adam7Info]:
    """Yield an ``Adam7Info`` for every interlaced row of a ``width`` x ``height`` image."""
    for pass_, (w_off, w_div, h_off, h_div) in _PASS_BOUNDS.items():
        line_width = _ceil_div_clamped(width - w_off, w_div)
        lines = _ceil_div_clamped(height - h_off, h_div)
        if line_width == 0:
            continue
        for line in range(lines):
            yield Adam7Info(pass_, line, line_width)


def subbyte_pixels(scanline: Sequence[int], bits_pp: int) -> Iterator[int]:
    """Yield sub-byte samples of ``bits_pp`` bits each, high-order bits first."""
    if bits_pp not in (1, 2, 4):
        raise ValueError(f"sub-byte pixel size must be 1, 2 or 4 bits, got {bits_pp}")
    mask = (1 << bits_pp) - 1
    for bit_idx in range(0, len(scanline) * 8, bits_pp):
        shift = 8 - bit_idx % 8 - bits_pp
        yield (scanline[bit_idx // 8] >> shift) & mask


def expand_adam7_bits(
    row_stride_in_bytes: int, info: Adam7Info, bits_pp: int
) -> Iterator[int]:
    """Yield the bit offsets in the full frame of each pixel of an interlaced row."""
    try:
        line_mul, line_off, samp_mul, samp_off = _PASS_GEOMETRY[info.pass_]
    except KeyError:
        raise ValueError(f"invalid Adam7 pass {info.pass_}") from None
    prog_line = line_mul * info.line + line_off
    line_start = prog_line * row_stride_in_bytes * 8
    for i in range(info.width):
        yield (i * samp_mul + samp_off) * bits_pp + line_start


def expand_pass(
    img: MutableSequence[int],
    img_row_stride: int,
    interlaced_row: Sequence[int],
    interlace_info: Adam7Info,
    bits_per_pixel: int,
) -> None:
    """Copy the pixels of ``interlaced_row`` into their places in ``img``, in place."""
    bit_indices = expand_adam7_bits(img_row_stride, interlace_info, bits_per_pixel)

    if bits_per_pixel < 8:
        pixels = subbyte_pixels(interlaced_row, bits_per_pixel)
        for pos, px in zip(bit_indices, pixels):
            shift = 8 - pos % 8 - bits_per_pixel
            img[pos // 8] |= px << shift
        return

    bytes_pp = bits_per_pixel // 8
    row = bytes(interlaced_row)
    pixels = (row[i : i + bytes_pp] for i in range(0, len(row), bytes_pp))
    for bitpos, px in zip(bit_indices, pixels):
        start = bitpos // 8
        end = start + len(px)
        if end > len(img):
            raise IndexError(f"pixel at byte {start} lies outside the image buffer")
        img[start:end] = px