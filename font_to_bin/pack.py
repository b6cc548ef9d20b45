import bisect
from typing import NamedTuple

from .bitmap import BYTES_PER_COLUMN
from .errors import LengthMismatchError

MAX_GLYPH_BYTES = 0xFF


class GlyphRecord(NamedTuple):
    code_point: int
    offset: int
    length: int


class PackedFont(NamedTuple):
    """Index records sorted by code point plus the glyph data they slice."""

    records: tuple
    data: bytes

    def __len__(self):
        return len(self.records)

    def find(self, code_point):
        i = bisect.bisect_left(self.records, (code_point,))
        if i < len(self.records) and self.records[i].code_point == code_point:
            return self.records[i]
        return None

    def glyph(self, code_point):
        rec = self.find(code_point)
        if rec is None:
            return None
        return self.data[rec.offset:rec.offset + rec.length]

    def items(self):
        for rec in self.records:
            yield rec.code_point, self.data[rec.offset:rec.offset + rec.length]


def glyph_width(length):
    return length // BYTES_PER_COLUMN


def pack_glyphs(chars):
    """Lay out a character table as one buffer in ascending code point order."""
    records = []
    data = bytearray()
    for code_point in sorted(chars):
        bitmap = chars[code_point]
        if len(bitmap) > MAX_GLYPH_BYTES:
            raise LengthMismatchError(f"Glyph U+{code_point:04X} too large: {len(bitmap)} bytes")
        records.append(GlyphRecord(code_point, len(data), len(bitmap)))
        data += bitmap
    return PackedFont(tuple(records), bytes(data))
