from PIL import Image

from .bitmap import NUM_ROWS, bitmap_width, get_pixel

MISSING_WIDTH = 8
CELL_GAP = 2


def draw_glyph(image, glyph, x0, y0):
    pixels = image.load()
    for col in range(bitmap_width(glyph)):
        for row in range(NUM_ROWS):
            if get_pixel(glyph, col, row):
                pixels[x0 + col, y0 + row] = 0  # black ink on white


def _scaled(image, scale):
    if scale == 1:
        return image
    return image.resize((image.width * scale, image.height * scale), Image.NEAREST)


def render_text(font, text, scale=1):
    """Render a line of text the way the runtime renderer lays it out."""
    glyphs = [font.glyph(ord(ch)) for ch in text]
    width = sum(MISSING_WIDTH if g is None else bitmap_width(g) for g in glyphs)
    image = Image.new("1", (max(width, 1), NUM_ROWS), "white")
    x = 0
    for glyph in glyphs:
        if glyph is None:
            x += MISSING_WIDTH
            continue
        draw_glyph(image, glyph, x, 0)
        x += bitmap_width(glyph)
    return _scaled(image, scale)


def render_sheet(font, start=0, end=0xFFFF, columns=16, scale=1):
    """Render every glyph with a code point in [start, end] on a grid."""
    glyphs = [(cp, g) for cp, g in font.items() if start <= cp <= end]
    rows = max(1, (len(glyphs) + columns - 1) // columns)
    cell_w = 16 + CELL_GAP
    cell_h = NUM_ROWS + CELL_GAP
    image = Image.new("1", (columns * cell_w, rows * cell_h), "white")
    for i, (_, glyph) in enumerate(glyphs):
        draw_glyph(image, glyph, (i % columns) * cell_w, (i // columns) * cell_h)
    return _scaled(image, scale)


def dump_glyph(code_point, glyph):
    """Frame a glyph with box-drawing characters for printing to a terminal."""
    width = bitmap_width(glyph)
    lines = [f"U+{code_point:04X}", "┌" + "─" * width * 2 + "┐"]
    for row in range(NUM_ROWS):
        lines.append("│" + "".join(
            "██" if get_pixel(glyph, col, row) else "  "
            for col in range(width)
        ) + "│")
    lines.append("└" + "─" * width * 2 + "┘")
    return "\n".join(lines)
