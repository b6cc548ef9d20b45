import pytest

NUM_ROWS = 16

# Every jamo key the composer can ask for: leading consonants use variants
# 0-7, vowels 0-3 and trailing consonants 0-3 (index 0 only for direct glyphs)
JAMO_KEYS = (
    [f"cho_{i}_{v}" for i in range(19) for v in range(8)]
    + [f"jung_{i}_{v}" for i in range(21) for v in range(4)]
    + [f"jong_{i}_{v}" for i in range(28) for v in range(4)]
)


def pattern_rows(seed, width=16):
    """A sparse, seed-dependent pixel pattern as 16 strings of '0'/'1'."""
    return [
        "".join("1" if (col * 7 + row * 3 + seed) % 11 == 0 else "0" for col in range(width))
        for row in range(NUM_ROWS)
    ]


def fnt_block(header, rows):
    return "\n".join([header] + list(rows)) + "\n"


def jamo_source():
    return "".join(
        fnt_block(f"{key} 16 0", pattern_rows(seed))
        for seed, key in enumerate(JAMO_KEYS)
    )


@pytest.fixture
def src_dir(tmp_path):
    d = tmp_path / "neodgm-font-src"
    d.mkdir()
    (d / "hangul-jamo-source.fnt").write_text(jamo_source(), encoding="utf-8")
    return d


@pytest.fixture
def out_path(tmp_path):
    return tmp_path / "out" / "neodgm-font"


@pytest.fixture
def quiet():
    messages = []
    return messages.append
