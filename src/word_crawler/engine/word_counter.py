"""
Word Counter - Tokenizing, merging and ranking word frequencies.
"""

from collections import Counter
from typing import Iterable, List, Mapping, Tuple


PUNCTUATION = ".,?!:;()[]'\"<>"

_STRIP_TABLE = str.maketrans('', '', PUNCTUATION)


def normalize_word(token: str) -> str:
    """Lower-case token and remove every punctuation character from it."""
    return token.lower().translate(_STRIP_TABLE)


def count_words(fragments: Iterable[str]) -> Counter:
    """
    Count normalized words in text fragments.

    Tokens are split on whitespace. A token made only of punctuation
    is counted as the empty string.
    """
    counts = Counter()
    for fragment in fragments:
        for token in fragment.split():
            counts[normalize_word(token)] += 1
    return counts


def merge_frequencies(*maps: Mapping[str, int]) -> Counter:
    """Add counts from every map into a new Counter."""
    total = Counter()
    for freq_map in maps:
        total.update(freq_map)
    return total


def rank_words(counts: Mapping[str, int]) -> List[Tuple[str, int]]:
    """Sort (word, count) pairs by count descending, then word ascending."""
    return sorted(counts.items(), key=lambda pair: (-pair[1], pair[0]))
