from PIL import Image, ImageDraw, ImageFont

from .bitmap import NUM_ROWS, format_block, new_bitmap, set_pixel

ASCII_START = 0x20  # ' '
ASCII_END = 0x7E  # '~'
DEFAULT_SIZE = 16
THRESHOLD = 128


def glyph_width_for(ch):
    # ASCII is halfwidth, everything else fullwidth
    return 8 if ord(ch) < 0x80 else 16


def render_char(ch, font, width, threshold=THRESHOLD):
    """Rasterize one character into a column-major bitmap, centered in the cell."""
    # White background (255), black text (0)
    img = Image.new("L", (width, NUM_ROWS), color=255)
    draw = ImageDraw.Draw(img)

    bbox = font.getbbox(ch)
    if bbox:
        w = bbox[2] - bbox[0]
        h = bbox[3] - bbox[1]
        x = (width - w) // 2 - bbox[0]
        y = (NUM_ROWS - h) // 2 - bbox[1]
        # Prevent left clipping for wide characters
        if x + bbox[0] < 0:
            x = -bbox[0]
        draw.text((x, y), ch, font=font, fill=0)

    bitmap = new_bitmap(width)
    for row in range(NUM_ROWS):
        for col in range(width):
            # p<threshold -> ink
            if img.getpixel((col, row)) < threshold:
                set_pixel(bitmap, col, row)
    return bytes(bitmap)


def import_ttf(ttf_path, chars, size=DEFAULT_SIZE, threshold=THRESHOLD, log=print):
    """Render `chars` from a TrueType font into a dict of code point -> bitmap."""
    font = ImageFont.truetype(ttf_path, size)
    glyphs = {}
    for ch in sorted(set(chars)):
        if ord(ch) > 0xFFFF:
            log(f"[warn] skipping {ch!r} (U+{ord(ch):04X}): outside 16-bit range")
            continue
        bitmap = render_char(ch, font, glyph_width_for(ch), threshold)
        if not any(bitmap):
            log(f"[warn] empty glyph {ch!r} (U+{ord(ch):04X})")
        glyphs[ord(ch)] = bitmap
    return glyphs


def write_fnt(glyphs, out_path):
    with open(out_path, "w", encoding="utf-8") as f:
        for code_point in sorted(glyphs):
            bitmap = glyphs[code_point]
            f.write(format_block((code_point, len(bitmap) // 2), bitmap))
    return out_path


def ascii_chars():
    return "".join(chr(code) for code in range(ASCII_START, ASCII_END + 1))
