"""PNG chunk types, their property bits, and chunk serialisation."""

from __future__ import annotations

import struct
import zlib
from dataclasses import dataclass
from typing import BinaryIO, Union

__all__ = [
    "ChunkType",
    "is_critical",
    "is_private",
    "reserved_set",
    "safe_to_copy",
    "write_chunk",
]

_MAX_CHUNK_LENGTH = 0x7FFF_FFFF
_PROPERTY_BIT = 32


@dataclass(frozen=True)
class ChunkType:
    """A four-byte PNG chunk type code such as ``b"IHDR"``."""

    code: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.code, (bytes, bytearray)):
            raise TypeError("chunk type code must be bytes")
        if len(self.code) != 4:
            raise ValueError(f"chunk type code must be 4 bytes, got {len(self.code)}")
        object.__setattr__(self, "code", bytes(self.code))

    def is_critical(self) -> bool:
        """True if the chunk is critical (ancillary bit clear)."""
        return self.code[0] & _PROPERTY_BIT == 0

    def is_private(self) -> bool:
        """True if the chunk is private."""
        return self.code[1] & _PROPERTY_BIT != 0

    def reserved_set(self) -> bool:
        """True if the reserved bit is set, which makes the name invalid."""
        return self.code[2] & _PROPERTY_BIT != 0

    def safe_to_copy(self) -> bool:
        """True if the chunk is safe to copy when unknown."""
        return self.code[3] & _PROPERTY_BIT != 0

    def __bytes__(self) -> bytes:
        return self.code

    def __str__(self) -> str:
        return self.code.decode("latin-1")

    def __repr__(self) -> str:
        name = self.code.decode("latin-1").encode("unicode_escape").decode("ascii")
        return (
            f"ChunkType(type={name!r}, critical={self.is_critical()}, "
            f"private={self.is_private()}, reserved={self.reserved_set()}, "
            f"safecopy={self.safe_to_copy()})"
        )


ChunkTypeLike = Union[ChunkType, bytes, bytearray]


def _as_chunk_type(value: ChunkTypeLike) -> ChunkType:
    return value if isinstance(value, ChunkType) else ChunkType(bytes(value))


# Critical chunks
IHDR = ChunkType(b"IHDR")
PLTE = ChunkType(b"PLTE")
IDAT = ChunkType(b"IDAT")
IEND = ChunkType(b"IEND")

# Ancillary chunks
tRNS = ChunkType(b"tRNS")
bKGD = ChunkType(b"bKGD")
tIME = ChunkType(b"tIME")
pHYs = ChunkType(b"pHYs")
cHRM = ChunkType(b"cHRM")
gAMA = ChunkType(b"gAMA")
sRGB = ChunkType(b"sRGB")
iCCP = ChunkType(b"iCCP")
cICP = ChunkType(b"cICP")
mDCV = ChunkType(b"mDCV")
cLLI = ChunkType(b"cLLI")
eXIf = ChunkType(b"eXIf")
tEXt = ChunkType(b"tEXt")
zTXt = ChunkType(b"zTXt")
iTXt = ChunkType(b"iTXt")
sBIT = ChunkType(b"sBIT")

# Animation extension chunks
acTL = ChunkType(b"acTL")
fcTL = ChunkType(b"fcTL")
fdAT = ChunkType(b"fdAT")


def is_critical(chunk_type: ChunkTypeLike) -> bool:
    """True if the chunk is critical."""
    return _as_chunk_type(chunk_type).is_critical()


def is_private(chunk_type: ChunkTypeLike) -> bool:
    """True if the chunk is private."""
    return _as_chunk_type(chunk_type).is_private()


def reserved_set(chunk_type: ChunkTypeLike) -> bool:
    """True if the reserved bit of the chunk name is set."""
    return _as_chunk_type(chunk_type).reserved_set()


def safe_to_copy(chunk_type: ChunkTypeLike) -> bool:
    """True if the chunk is safe to copy when unknown."""
    return _as_chunk_type(chunk_type).safe_to_copy()


def write_chunk(stream: BinaryIO, chunk_type: ChunkTypeLike, data: bytes) -> None:
    """Write one chunk (length, type, data, CRC-32) to ``stream``."""
    code = _as_chunk_type(chunk_type).code
    data = bytes(data)
    if len(data) > _MAX_CHUNK_LENGTH:
        raise ValueError(f"chunk data too long: {len(data)} bytes")
    crc = zlib.crc32(data, zlib.crc32(code))
    stream.write(struct.pack(">I", len(data)))
    stream.write(code)
    stream.write(data)
    stream.write(struct.pack(">I", crc))