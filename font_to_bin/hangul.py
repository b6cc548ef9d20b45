from .bitmap import merge_into, new_bitmap
from .errors import MissingJamoError

# Conjoining jamo: 19 leading consonants, 21 vowels, 27 trailing consonants
CHO_START = 0x1100
JUNG_START = 0x1161
JONG_START = 0x11A8
NUM_CHO = 19
NUM_JUNG = 21
NUM_JONG = 27

# Hangul syllables: AC00 - D7A3
SYLLABLE_START = 0xAC00
NUM_SYLLABLES = NUM_CHO * NUM_JUNG * (NUM_JONG + 1)
SYLLABLE_END = SYLLABLE_START + NUM_SYLLABLES - 1

# Leading consonant variant, by [has trailing consonant][vowel]
CHO_TABLE = (
    (0, 0, 0, 0, 0, 0, 0, 0, 1, 3, 3, 3, 1, 2, 4, 4, 4, 2, 1, 3, 0),
    (5, 5, 5, 5, 5, 5, 5, 5, 6, 7, 7, 7, 6, 6, 7, 7, 7, 6, 6, 7, 5),
)
# Vowel variant, by leading consonant (+2 when there is a trailing consonant)
JUNG_TABLE = (0, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 0, 1, 1, 1)
# Trailing consonant variant, by vowel
JONG_TABLE = (0, 2, 0, 2, 1, 2, 1, 2, 3, 0, 2, 1, 3, 3, 1, 2, 1, 3, 3, 1, 1)


def get_jamo(jamo, key):
    try:
        return jamo[key]
    except KeyError:
        raise MissingJamoError(key) from None


def decompose(code_point):
    """Split a syllable code point into (lead, vowel, tail); tail 0 means none."""
    idx = code_point - SYLLABLE_START
    lead = idx // (NUM_JUNG * (NUM_JONG + 1))
    vowel = (idx % (NUM_JUNG * (NUM_JONG + 1))) // (NUM_JONG + 1)
    tail = idx % (NUM_JONG + 1)
    return lead, vowel, tail


def syllable_jamo_keys(code_point):
    """Jamo component keys that make up a syllable, leading consonant first."""
    lead, vowel, tail = decompose(code_point)
    has_tail = tail != 0
    keys = [
        f"cho_{lead}_{CHO_TABLE[1 if has_tail else 0][vowel]}",
        f"jung_{vowel}_{JUNG_TABLE[lead] + (2 if has_tail else 0)}",
    ]
    if has_tail:
        keys.append(f"jong_{tail}_{JONG_TABLE[vowel]}")
    return keys


def compose_syllable(code_point, jamo, base=None):
    """OR the syllable's jamo components into `base` (or a blank 16x16 bitmap)."""
    bitmap = new_bitmap(16) if base is None else bytearray(base)
    for key in syllable_jamo_keys(code_point):
        merge_into(bitmap, get_jamo(jamo, key))
    return bytes(bitmap)


def direct_jamo_glyphs(jamo):
    glyphs = {}
    for start, count, prefix in (
        (CHO_START, NUM_CHO, "cho"),
        (JUNG_START, NUM_JUNG, "jung"),
        (JONG_START, NUM_JONG, "jong"),
    ):
        for i in range(count):
            glyphs[start + i] = get_jamo(jamo, f"{prefix}_{i}_0")
    return glyphs


def compose_hangul(chars, jamo):
    """Return a new character table with the jamo and all syllables added.

    Syllables already in `chars` are used as the base the components are
    merged into; the input table itself is left untouched.
    """
    result = dict(chars)
    result.update(direct_jamo_glyphs(jamo))
    for code_point in range(SYLLABLE_START, SYLLABLE_END + 1):
        result[code_point] = compose_syllable(code_point, jamo, chars.get(code_point))
    return result
