import pytest

from conftest import JAMO_KEYS, fnt_block, pattern_rows
from font_to_bin.bitmap import get_pixel
from font_to_bin.errors import (
    DirectoryNotFoundError,
    DuplicateDefinitionError,
    FontCompileError,
    FormatError,
    UnsupportedFeatureError,
)
from font_to_bin.fnt_source import list_sources, parse_fnt, parse_source_dir

BLANK8 = ["00000000"] * 16


def test_character_block():
    rows = ["10000000"] + ["00000000"] * 14 + ["00000001"]
    chars, jamo = parse_fnt(fnt_block("65 8", rows))
    assert jamo == {}
    bm = chars[65]
    assert len(bm) == 16
    assert get_pixel(bm, 0, 0) == 1
    assert get_pixel(bm, 7, 15) == 1
    assert bm[0] == 0x01
    assert bm[15] == 0x80
    assert sum(bin(b).count("1") for b in bm) == 2


def test_jamo_block():
    chars, jamo = parse_fnt(fnt_block("cho_3_1 16 0", pattern_rows(5)))
    assert chars == {}
    assert len(jamo["cho_3_1"]) == 32


def test_multiple_blocks_and_blank_lines():
    text = fnt_block("65 8", BLANK8) + "\n" + fnt_block("44032 16 ", ["1" * 16] * 16) + "\n\n"
    chars, _ = parse_fnt(text)
    assert sorted(chars) == [65, 44032]
    assert chars[44032] == bytes([0xFF] * 32)


def test_extra_row_characters_are_ignored():
    chars, _ = parse_fnt(fnt_block("66 8", ["00000000  trailing"] * 16))
    assert chars[66] == bytes(16)


def test_non_binary_characters_use_low_bit():
    messages = []
    rows = ["3a" + "0" * 6] + ["00000000"] * 15
    chars, _ = parse_fnt(fnt_block("67 8", rows), log=messages.append)
    # '3' is odd, 'a' (0x61) is odd
    assert get_pixel(chars[67], 0, 0) == 1
    assert get_pixel(chars[67], 1, 0) == 1
    assert messages and messages[0].startswith("[warn]")


@pytest.mark.parametrize("header", ["65 8 0 1", "65", "a b c d e"])
def test_wrong_field_count(header):
    with pytest.raises(FormatError, match="Wrong number of fields"):
        parse_fnt(fnt_block(header, BLANK8))


@pytest.mark.parametrize("width", ["7", "12", "32", "0", "x"])
def test_bad_width(width):
    with pytest.raises(FormatError):
        parse_fnt(fnt_block(f"65 {width}", BLANK8))


def test_bad_code_point():
    with pytest.raises(FormatError):
        parse_fnt(fnt_block("U+0041 8", BLANK8))
    with pytest.raises(FormatError, match="out of range"):
        parse_fnt(fnt_block("65536 8", BLANK8))


def test_nonzero_x_offset():
    with pytest.raises(UnsupportedFeatureError):
        parse_fnt(fnt_block("jong_1_0 16 1", pattern_rows(1)))


def test_zero_x_offset_variants_accepted():
    _, jamo = parse_fnt(fnt_block("jong_1_0 16 00", pattern_rows(1)))
    assert "jong_1_0" in jamo


def test_short_row():
    rows = ["0000000"] + ["00000000"] * 15
    with pytest.raises(FormatError, match="pixels"):
        parse_fnt(fnt_block("65 8", rows))


def test_truncated_block_reports_line():
    with pytest.raises(FormatError) as excinfo:
        parse_fnt(fnt_block("65 8", BLANK8) + "66 8\n00000000\n", path="x.fnt")
    assert excinfo.value.path == "x.fnt"
    assert excinfo.value.line == 18
    assert "x.fnt:18" in str(excinfo.value)


def test_duplicates_rejected_by_default():
    text = fnt_block("65 8", BLANK8) * 2
    with pytest.raises(DuplicateDefinitionError, match="U\\+0041"):
        parse_fnt(text)


def test_duplicates_allowed_last_wins():
    text = fnt_block("65 8", BLANK8) + fnt_block("65 8", ["11111111"] * 16)
    chars, _ = parse_fnt(text, allow_duplicates=True)
    assert chars[65] == bytes([0xFF] * 16)


def test_missing_directory(tmp_path):
    with pytest.raises(DirectoryNotFoundError):
        parse_source_dir(tmp_path / "nope")
    assert issubclass(DirectoryNotFoundError, FileNotFoundError)
    assert issubclass(DirectoryNotFoundError, FontCompileError)


def test_directory_reads_only_fnt_files_sorted(tmp_path, quiet):
    (tmp_path / "b.fnt").write_text(fnt_block("66 8", BLANK8))
    (tmp_path / "a.fnt").write_text(fnt_block("65 8", BLANK8))
    (tmp_path / "notes.txt").write_text("not a font\n")
    (tmp_path / "sub.fnt").mkdir()
    assert [p.rsplit("/", 1)[-1] for p in list_sources(str(tmp_path))] == ["a.fnt", "b.fnt"]
    chars, jamo = parse_source_dir(str(tmp_path), log=quiet)
    assert sorted(chars) == [65, 66]
    assert jamo == {}


def test_duplicates_across_files(tmp_path, quiet):
    (tmp_path / "a.fnt").write_text(fnt_block("65 8", BLANK8))
    (tmp_path / "b.fnt").write_text(fnt_block("65 8", ["11111111"] * 16))
    with pytest.raises(DuplicateDefinitionError):
        parse_source_dir(str(tmp_path), log=quiet)
    chars, _ = parse_source_dir(str(tmp_path), allow_duplicates=True, log=quiet)
    assert chars[65] == bytes([0xFF] * 16)


def test_jamo_source_fixture(src_dir, quiet):
    chars, jamo = parse_source_dir(str(src_dir), log=quiet)
    assert chars == {}
    assert set(jamo) == set(JAMO_KEYS)


def test_control_characters_stay_inside_a_row():
    messages = []
    rows = ["0\x0c1\x0b\x1c\x85 1"] + ["00000000"] * 15
    chars, _ = parse_fnt(fnt_block("68 8", rows), log=messages.append)
    # \x0c, \x1c and the space are even; \x0b and \x85 are odd
    assert [get_pixel(chars[68], col, 0) for col in range(8)] == [0, 0, 1, 1, 0, 1, 0, 1]
    assert messages and messages[0].startswith("[warn]")


def test_crlf_line_endings():
    text = fnt_block("65 8", ["10000000"] * 16).replace("\n", "\r\n")
    chars, _ = parse_fnt(text)
    assert chars[65] == bytes([0xFF, 0xFF]) + bytes(14)


@pytest.mark.parametrize("width", ["1_6", "１６", "16.0", "+"])
def test_width_must_be_plain_decimal(width):
    with pytest.raises(FormatError, match="Bad width"):
        parse_fnt(fnt_block(f"65 {width}", ["0" * 16] * 16))


def test_code_point_must_be_plain_decimal():
    with pytest.raises(FormatError, match="Bad code point"):
        parse_fnt(fnt_block("6_5 8", BLANK8))
    chars, _ = parse_fnt(fnt_block("+65 8", BLANK8))
    assert 65 in chars


def test_undecodable_source_file(tmp_path, quiet):
    (tmp_path / "latin1.fnt").write_bytes(b"\xff\xfe65 8\n")
    with pytest.raises(FormatError, match="Not valid UTF-8") as excinfo:
        parse_source_dir(str(tmp_path), log=quiet)
    assert excinfo.value.path.endswith("latin1.fnt")
