# Binary font resource.
#
#   [u32 glyph count]
#   glyph count x [u16 code point][u32 offset][u8 length]
#   glyph data, concatenated in the same order
#
# All integers are big-endian. Offsets are relative to the start of the
# glyph data.

import os
import struct
import tempfile

from .errors import ResourceFormatError
from .pack import GlyphRecord, PackedFont

COUNT = struct.Struct(">I")
RECORD = struct.Struct(">HIB")


def encode_font(font):
    out = bytearray(COUNT.pack(len(font.records)))
    for rec in font.records:
        out += RECORD.pack(rec.code_point, rec.offset, rec.length)
    out += font.data
    return bytes(out)


def write_font(font, out_path):
    """Write `font` to `out_path`, replacing it only once fully written."""
    out_dir = os.path.dirname(os.path.abspath(out_path))
    os.makedirs(out_dir, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(
        prefix=os.path.basename(out_path) + ".", suffix=".tmp", dir=out_dir
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(encode_font(font))
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, out_path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
    return out_path


def load_font(data):
    if len(data) < COUNT.size:
        raise ResourceFormatError("Truncated header")
    (count,) = COUNT.unpack_from(data, 0)
    index_end = COUNT.size + count * RECORD.size
    if len(data) < index_end:
        raise ResourceFormatError(
            f"Truncated index: {count} records need {index_end} bytes, have {len(data)}"
        )
    records = []
    expected_offset = 0
    prev = -1
    for i in range(count):
        rec = GlyphRecord(*RECORD.unpack_from(data, COUNT.size + i * RECORD.size))
        if rec.code_point <= prev:
            raise ResourceFormatError(f"Record {i} out of order: U+{rec.code_point:04X}")
        if rec.offset != expected_offset:
            raise ResourceFormatError(
                f"Record {i} (U+{rec.code_point:04X}) at offset {rec.offset}, "
                f"expected {expected_offset}"
            )
        records.append(rec)
        expected_offset += rec.length
        prev = rec.code_point
    glyph_data = bytes(data[index_end:])
    if len(glyph_data) != expected_offset:
        raise ResourceFormatError(
            f"Glyph data is {len(glyph_data)} bytes, index covers {expected_offset}"
        )
    return PackedFont(tuple(records), glyph_data)


def read_font(path):
    with open(path, "rb") as f:
        return load_font(f.read())
