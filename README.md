# pngcodec

Pure-Python building blocks for working with PNG and APNG images. It has no dependencies outside the standard library.

## Installation

```
pip install pngcodec
```

To run the test suite, install the test extra and run pytest:

```
pip install "pngcodec[test]"
pytest
```

## Modules

### `pngcodec.chunk`

- `ChunkType` is a frozen dataclass that wraps a four-byte code such as `b"IHDR"`. Any other length raises `ValueError`. It reports the property bits of the code through `is_critical()`, `is_private()`, `reserved_set()` and `safe_to_copy()`.
- Module-level functions of the same names accept either a `ChunkType` or raw bytes.
- Constants are provided for the standard chunk types:
  - Critical: `IHDR`, `PLTE`, `IDAT`, `IEND`.
  - Ancillary: `tRNS`, `bKGD`, `tIME`, `pHYs`, `cHRM`, `gAMA`, `sRGB`, `iCCP`, `cICP`, `mDCV`, `cLLI`, `eXIf`, `tEXt`, `zTXt`, `iTXt`, `sBIT`.
  - Animation: `acTL`, `fcTL`, `fdAT`.
- `write_chunk(stream, chunk_type, data)` writes one complete chunk to a binary stream. That is the big-endian length, the type, the data, and a CRC-32 over the type and data.

### `pngcodec.adam7`

- `Adam7Info(pass_, line, width)` describes one interlaced row. `pass_` must be between 1 and 7 and `width` must be positive; otherwise it raises `ValueError`.
- `adam7_passes(width, height)` yields an `Adam7Info` for every interlaced row of an image, in pass order. Empty passes are skipped.
- `expand_pass(img, img_row_stride, interlaced_row, interlace_info, bits_per_pixel)` copies the pixels of one interlaced row into their places in a mutable image buffer, in place. It handles 1-, 2- and 4-bit pixels as well as whole-byte pixels.
- `subbyte_pixels` and `expand_adam7_bits` are the helpers `expand_pass` is built on.
  - `subbyte_pixels` unpacks sub-byte samples, high bits first.
  - `expand_adam7_bits` yields the bit offset of each pixel of a row within the full frame.

### `pngcodec.interlace`

- `interlace_infos(width, height, interlaced)` yields one description per row in decoding order.
  - For an interlaced image these are `Adam7Info` objects.
  - For a non-interlaced image these are `NullInfo(line)` entries.
- `line_number(info)` returns the row's line number.
- `adam7_info(info)` returns the `Adam7Info`, or `None` for a non-interlaced row.

### `pngcodec.pixel`

- `ColorType` (`GRAYSCALE`, `RGB`, `INDEXED`, `GRAYSCALE_ALPHA`, `RGBA`) and `BitDepth` (`ONE` to `SIXTEEN`) are integer enums.
  - `ColorType` has `samples()`, `bits_per_pixel()` and `bytes_per_pixel()`.
  - `raw_row_length_from_width()` gives the row length with the filter byte included.
  - `checked_raw_row_length()` does the same but returns `None` for an out-of-range width.
  - `is_combination_invalid()` flags the color type and bit depth pairs that PNG forbids.
- `BytesPerPixel` and `Unit` are integer enums. `PixelDimensions` is a frozen dataclass.
- `DisposeOp` and `BlendOp` print as `DISPOSE_OP_...` and `BLEND_OP_...`.
- `FrameControl` holds the fields of an `fcTL` chunk. Its defaults are a delay of 1/30 s, `DisposeOp.NONE` and `BlendOp.SOURCE`. It has these methods:
  - `inc_seq_num(i)` adds `i` to the sequence number.
  - `to_bytes()` returns the 26-byte payload.
  - `encode(stream)` writes the chunk.
- `AnimationControl(num_frames, num_plays)` has `to_bytes()` (the 8-byte payload) and `encode(stream)`.
- For both control classes, a field that does not fit its binary width raises `ValueError`.
- `Compression` names the compression levels: `DEFAULT`, `FAST`, `BEST`, `HUFFMAN`, `RLE`.
- `Transformations` is a flag set with `IDENTITY`, `STRIP_16`, `EXPAND` and `ALPHA`. `Transformations.normalize_to_color8()` returns `EXPAND | STRIP_16`.
- `ParameterError` is the base exception. Its subclasses are:
  - `ImageBufferSizeError`, which has `expected` and `actual` attributes.
  - `PolledAfterEndOfImage`.
  - `PolledAfterFatalError`.

### `pngcodec.metadata`

- `ScaledFloat` stores a non-negative value as an integer multiple of 1/100000, using single-precision float arithmetic.
  - `from_value()` builds one from a float, clamping the result into range.
  - `from_scaled()` builds one from an already-scaled integer.
  - `value()` returns the unscaled value.
  - `in_range()` and `exact()` check whether a float is representable.
  - `encode_gama(stream)` writes a `gAMA` chunk.
- `SourceChromaticities` holds (x, y) pairs for white, red, green and blue.
  - `from_values()` builds one from unscaled pairs.
  - `to_bytes()` returns the 32-byte payload.
  - `encode(stream)` writes a `cHRM` chunk.
- `SrgbRenderingIntent` is an enum. Its `encode(stream)` writes an `sRGB` chunk.
- `CodingIndependentCodePoints`, `MasteringDisplayColorVolume` and `ContentLightLevelInfo` are plain records.
- `Info` is a dataclass describing an image: its size, format, palette, transparency, color metadata, animation control and text lists. It has:
  - `with_size()`, `size()`, `is_animated()`, `bits_per_pixel()`, `bytes_per_pixel()` and `bpp_in_prediction()`.
  - `raw_bytes()`, `raw_row_length()`, `raw_row_length_from_width()` and `checked_raw_row_length()`.
  - `set_source_srgb()`, which sets the rendering intent and drops any ICC profile.

## Examples

Expand the first row of the fifth Adam7 pass into an 8×8 image that uses 8 bits per pixel:

```python
from pngcodec.adam7 import Adam7Info, expand_pass

img = bytearray(64)
expand_pass(img, 8, bytes([1, 2, 3, 4]), Adam7Info(5, 0, 4), 8)
assert img[16:24] == bytes([1, 0, 2, 0, 3, 0, 4, 0])
```

Write an animation-control chunk to a stream:

```python
import io
from pngcodec.pixel import AnimationControl

out = io.BytesIO()
AnimationControl(num_frames=3, num_plays=0).encode(out)
```

Work out the size of a raw image:

```python
from pngcodec.metadata import Info

info = Info.with_size(32, 32)
print(info.raw_row_length(), info.raw_bytes())  # 33 1056
```

## What it does not do

pngcodec is a set of building blocks, not a complete image reader or writer. In particular:

- There is no decoder that reads a PNG file from a stream.
- There is no encoder that writes a whole image.
- Compressed image data is neither inflated nor deflated, and rows are not filtered or unfiltered.
- The `Compression` and `Transformations` values are only descriptions. Nothing in the package applies them.
- Text chunks are not parsed. The text lists on `Info` simply hold whatever is put in them.
- There is no command-line tool.