# Usage:
#   font-to-bin compile --src neodgm-font-src --out src/main/resources/fonts/neodgm-font
#   font-to-bin dump --font src/main/resources/fonts/neodgm-font --text 한글
#   font-to-bin preview --font src/main/resources/fonts/neodgm-font --range AC00-AC3F --png sheet.png
#   font-to-bin import-ttf --ttf NanumGothic.ttf --chars "가나다" --out drafts.fnt

import argparse
import os
import sys

from .compiler import DEFAULT_OUT_PATH, DEFAULT_SRC_DIR, build_font
from .errors import FontCompileError
from .preview import dump_glyph, render_sheet, render_text
from .resource import read_font
from .ttf_import import DEFAULT_SIZE, THRESHOLD, ascii_chars, import_ttf, write_fnt


def parse_range(text):
    """Parse a hex code point range like 'AC00-D7A3' or a single 'AC00'."""
    lo, _, hi = text.partition("-")
    try:
        start = int(lo, 16)
        end = int(hi, 16) if hi else start
    except ValueError:
        raise argparse.ArgumentTypeError(f"bad code point range: {text!r}") from None
    if start > end or end > 0xFFFF:
        raise argparse.ArgumentTypeError(f"bad code point range: {text!r}")
    return start, end


def cmd_compile(args):
    build_font(args.src, args.out, allow_duplicates=args.allow_duplicates)


def cmd_dump(args):
    font = read_font(args.font)
    if args.text is not None:
        code_points = [ord(ch) for ch in args.text]
    else:
        start, end = args.range
        code_points = [rec.code_point for rec in font.records if start <= rec.code_point <= end]
    try:
        for cp in code_points:
            glyph = font.glyph(cp)
            if glyph is None:
                print(f"[warn] no glyph for U+{cp:04X}")
                continue
            print(dump_glyph(cp, glyph))
    except BrokenPipeError:
        pass


def cmd_preview(args):
    font = read_font(args.font)
    if args.text is not None:
        image = render_text(font, args.text, args.scale)
    else:
        start, end = args.range
        image = render_sheet(font, start, end, args.columns, args.scale)
    image.save(args.png)
    print(f"[ok] generated: {args.png} ({image.width}x{image.height})")


def cmd_import_ttf(args):
    chars = args.chars if args.chars is not None else ascii_chars()
    if args.range is not None:
        start, end = args.range
        chars += "".join(chr(cp) for cp in range(start, end + 1))
    glyphs = import_ttf(args.ttf, chars, args.size, args.threshold)
    out_dir = os.path.dirname(args.out)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    write_fnt(glyphs, args.out)
    print(f"[ok] generated: {args.out} ({len(glyphs)} characters)")


def build_parser():
    ap = argparse.ArgumentParser(
        prog="font-to-bin",
        description="Compile .fnt bitmap sources and Hangul jamo into a binary font resource.",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("compile", help="build the binary font resource")
    p.add_argument("--src", default=DEFAULT_SRC_DIR, help="directory of .fnt files")
    p.add_argument("--out", default=DEFAULT_OUT_PATH, help="output resource path")
    p.add_argument(
        "--allow-duplicates", action="store_true",
        help="let later files (in name order) override duplicate definitions",
    )
    p.set_defaults(func=cmd_compile)

    for name, func, helptext in (
        ("dump", cmd_dump, "print glyphs of a compiled resource"),
        ("preview", cmd_preview, "render glyphs of a compiled resource to PNG"),
    ):
        p = sub.add_parser(name, help=helptext)
        p.add_argument("--font", default=DEFAULT_OUT_PATH, help="compiled resource")
        group = p.add_mutually_exclusive_group()
        group.add_argument("--text", help="characters to show")
        group.add_argument(
            "--range", type=parse_range, default=(0, 0xFFFF),
            help="hex code point range, e.g. AC00-AC3F",
        )
        p.set_defaults(func=func)
        if name == "preview":
            p.add_argument("--png", required=True, help="output image")
            p.add_argument("--scale", type=int, default=4)
            p.add_argument("--columns", type=int, default=16)

    p = sub.add_parser("import-ttf", help="draft .fnt characters from a TrueType font")
    p.add_argument("--ttf", required=True, help="path to TTF file")
    p.add_argument("--out", required=True, help="output .fnt file")
    p.add_argument("--chars", help="characters to render (default: printable ASCII)")
    p.add_argument("--range", type=parse_range, help="additional hex code point range")
    p.add_argument("--size", type=int, default=DEFAULT_SIZE, help=f"font size (default {DEFAULT_SIZE})")
    p.add_argument("--threshold", type=int, default=THRESHOLD, help="ink threshold (0-255)")
    p.set_defaults(func=cmd_import_ttf)
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        args.func(args)
    except (FontCompileError, OSError) as e:
        print(f"[error] {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
