"""Per-row interlace information for decoded images."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Union

from .adam7 import Adam7Info, adam7_passes

__all__ = ["NullInfo", "InterlaceInfo", "interlace_infos", "line_number", "adam7_info"]


@dataclass(frozen=True)
class NullInfo:
    """Row information for a non-interlaced image."""

    line: int


InterlaceInfo = Union[NullInfo, Adam7Info]


def interlace_infos(width: int, height: int, interlaced: bool) -> Iterator[InterlaceInfo]:
    """Yield interlace information for each row in decoding order."""
    if interlaced:
        yield from adam7_passes(width, height)
    else:
        yield from (NullInfo(line) for line in range(height))


def line_number(info: InterlaceInfo) -> int:
    """Line number of a row within its pass (or within the image if not interlaced)."""
    return info.line


def adam7_info(info: InterlaceInfo) -> Optional[Adam7Info]:
    """The Adam7 details of a row, or ``None`` for a non-interlaced row."""
    return info if isinstance(info, Adam7Info) else None