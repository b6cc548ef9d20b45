import os

from .bitmap import NUM_ROWS, VALID_WIDTHS, new_bitmap, set_pixel
from .errors import (
    DirectoryNotFoundError,
    DuplicateDefinitionError,
    FormatError,
    UnsupportedFeatureError,
)

SOURCE_EXT = ".fnt"
MAX_CODE_POINT = 0xFFFF


def _parse_int(field, what, path, line):
    # Plain ASCII decimal only: no '_' separators or other Unicode digits
    digits = field[1:] if field[:1] in "+-" else field
    if not (digits.isascii() and digits.isdigit()):
        raise FormatError(f"Bad {what}: {field!r}", path, line)
    return int(field)


def _read_rows(rows, width, path, first_line, log):
    bitmap = new_bitmap(width)
    odd_chars = set()
    for r, line in enumerate(rows):
        if len(line) < width:
            raise FormatError(
                f"Row has {len(line)} pixels, expected {width}", path, first_line + r
            )
        for c in range(width):
            ch = line[c]
            if ch not in "01":
                odd_chars.add(ch)
            # Anything other than 0/1 is reduced to its low bit
            set_pixel(bitmap, c, r, ord(ch) & 1)
    if odd_chars:
        log(
            f"[warn] {path}:{first_line}: non-binary pixel characters "
            f"{''.join(sorted(odd_chars))!r} read by low bit"
        )
    return bytes(bitmap)


def parse_fnt(text, path="<string>", chars=None, jamo=None,
              allow_duplicates=False, log=print):
    """Parse the blocks of one .fnt source into `chars` and `jamo`.

    A block is a header line and 16 row lines. A header of `code width`
    defines a character at decimal code point `code`; `key width xoff`
    defines a jamo component used for Hangul composition.
    """
    chars = {} if chars is None else chars
    jamo = {} if jamo is None else jamo
    # Only "\n" ends a line; other control characters in a row are pixels
    lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
    i = 0
    while i < len(lines):
        header = lines[i].split()
        lineno = i + 1
        if not header:
            i += 1
            continue
        if len(header) not in (2, 3):
            raise FormatError(
                f"Wrong number of fields in header: {len(header)}", path, lineno
            )
        width = _parse_int(header[1], "width", path, lineno)
        if width not in VALID_WIDTHS:
            raise FormatError(f"Bad width: {width}", path, lineno)
        rows = lines[i + 1:i + 1 + NUM_ROWS]
        if len(rows) < NUM_ROWS:
            raise FormatError(
                f"Block has {len(rows)} rows, expected {NUM_ROWS}", path, lineno
            )

        if len(header) == 2:
            code = _parse_int(header[0], "code point", path, lineno)
            if not 0 <= code <= MAX_CODE_POINT:
                raise FormatError(f"Code point out of range: {code}", path, lineno)
            table, key = chars, code
        else:
            xoff = _parse_int(header[2], "x offset", path, lineno)
            if xoff != 0:
                raise UnsupportedFeatureError(f"Unsupported xoff: {xoff}", path, lineno)
            table, key = jamo, header[0]

        if key in table and not allow_duplicates:
            name = f"U+{key:04X}" if isinstance(key, int) else repr(key)
            raise DuplicateDefinitionError(f"Duplicate definition of {name}", path, lineno)
        table[key] = _read_rows(rows, width, path, lineno + 1, log)
        i += 1 + NUM_ROWS
    return chars, jamo


def list_sources(src_dir):
    if not os.path.isdir(src_dir):
        raise DirectoryNotFoundError(f"Source directory not found: {src_dir}")
    # Sorted so that duplicates (when allowed) resolve the same way every run
    return sorted(
        os.path.join(src_dir, name)
        for name in os.listdir(src_dir)
        if name.endswith(SOURCE_EXT) and os.path.isfile(os.path.join(src_dir, name))
    )


def parse_source_dir(src_dir, allow_duplicates=False, log=print):
    """Read every .fnt file in `src_dir`, returning (chars, jamo) tables."""
    chars = {}
    jamo = {}
    for path in list_sources(src_dir):
        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                text = f.read()
        except UnicodeDecodeError as e:
            raise FormatError(f"Not valid UTF-8: {e.reason} at byte {e.start}", path) from None
        parse_fnt(text, path, chars, jamo, allow_duplicates, log)
    return chars, jamo
