from .fnt_source import parse_source_dir
from .hangul import compose_hangul
from .pack import pack_glyphs
from .resource import write_font

DEFAULT_SRC_DIR = "neodgm-font-src"
DEFAULT_OUT_PATH = "src/main/resources/fonts/neodgm-font"


def build_font(src_dir=DEFAULT_SRC_DIR, out_path=DEFAULT_OUT_PATH,
               allow_duplicates=False, log=print):
    """Parse, compose, pack and write a font resource. Returns the PackedFont."""
    chars, jamo = parse_source_dir(src_dir, allow_duplicates, log)
    log(f"[i] parsed {len(chars)} characters, {len(jamo)} jamo from {src_dir}")

    chars = compose_hangul(chars, jamo)
    log(f"[i] composed Hangul: {len(chars)} glyphs total")

    font = pack_glyphs(chars)
    write_font(font, out_path)
    log(f"[ok] wrote {out_path} ({len(font)} glyphs, {len(font.data)} bytes of glyph data)")
    return font
