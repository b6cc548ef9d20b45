"""Compile .fnt bitmap glyph sources into a packed binary font resource."""

from .compiler import build_font
from .errors import FontCompileError
from .pack import PackedFont, pack_glyphs
from .resource import read_font, write_font

__version__ = "1.0.0"
