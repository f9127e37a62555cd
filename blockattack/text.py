"""
English-likelihood scoring.

Score = cosine similarity between the character counts of the text and an
English frequency table (26 letters plus the space), weighted by the share
of characters that look like prose: lowercase letters and spaces count
fully, uppercase letters count half.
"""

import math
import string

# Letter frequencies in English (https://en.wikipedia.org/wiki/Letter_frequency)
LETTER_FREQS = [
    0.08167, 0.01492, 0.02782, 0.04253, 0.12702, 0.02228, 0.02015,  # a-g
    0.06094, 0.06966, 0.00153, 0.00772, 0.04025, 0.02406, 0.06749,  # h-n
    0.07507, 0.01929, 0.00095, 0.05987, 0.06327, 0.09056, 0.02758,  # o-u
    0.00978, 0.02360, 0.00150, 0.01974, 0.00074,                    # v-z
]
SPACE_FREQ = 0.13000   # relative to the letter table above
ENGLISH_FREQS = LETTER_FREQS + [SPACE_FREQ]

UPPERCASE_WEIGHT = 0.5

_INDEX = {ch: i for i, ch in enumerate(string.ascii_lowercase)}
_INDEX[" "] = 26


def cosine_similarity(u, v) -> float:
    norm = math.sqrt(sum(x * x for x in u)) * math.sqrt(sum(y * y for y in v))
    if norm == 0:
        return 0.0
    return sum(x * y for x, y in zip(u, v)) / norm


def score(text: str) -> float:
    """Higher is more English-like; 0.0 for text with no letter and no space."""
    if not text:
        return 0.0
    counts = [0.0] * len(ENGLISH_FREQS)
    weight = 0.0
    for ch in text:
        i = _INDEX.get(ch.lower())
        if i is None:
            continue
        counts[i] += 1
        weight += UPPERCASE_WEIGHT if ch in string.ascii_uppercase else 1.0
    return cosine_similarity(ENGLISH_FREQS, counts) * weight / len(text)
