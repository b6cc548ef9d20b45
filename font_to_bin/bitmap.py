# Column-major 16-row monochrome bitmaps.
#
# Column c of a glyph occupies two bytes: byte c*2 holds rows 0-7 and byte
# c*2+1 holds rows 8-15, with row r at bit r&7.

from .errors import LengthMismatchError

NUM_ROWS = 16
BYTES_PER_COLUMN = NUM_ROWS >> 3
VALID_WIDTHS = (8, 16)


def new_bitmap(width):
    return bytearray(width * BYTES_PER_COLUMN)


def bitmap_width(bitmap):
    return len(bitmap) // BYTES_PER_COLUMN


def byte_index(col, row):
    return col * BYTES_PER_COLUMN + (row >> 3)


def set_pixel(bitmap, col, row, bit=1):
    bitmap[byte_index(col, row)] |= (bit & 1) << (row & 7)


def get_pixel(bitmap, col, row):
    return (bitmap[byte_index(col, row)] >> (row & 7)) & 1


def merge_into(target, source):
    """OR `source` into `target` in place. Both must have the same shape."""
    if len(source) != len(target):
        raise LengthMismatchError(
            f"Length mismatch: cannot merge {len(source)} bytes into {len(target)}"
        )
    for i, b in enumerate(source):
        target[i] |= b
    return target


def bitmap_rows(bitmap):
    """Return the 16 rows of a bitmap as strings of '0' and '1'."""
    width = bitmap_width(bitmap)
    return [
        "".join(str(get_pixel(bitmap, col, row)) for col in range(width))
        for row in range(NUM_ROWS)
    ]


def format_block(fields, bitmap):
    """Format one source block: the header line followed by the 16 row lines."""
    header = " ".join(str(f) for f in fields)
    return "\n".join([header] + bitmap_rows(bitmap)) + "\n"
