"""
Bit layout of bag-of-bigrams keys.

Every feature produced by the bigram builder is a single unsigned 64-bit key.

Unigram key::

    bits [0, HIGHEST_BIT)                        window-length index
    bits [HIGHEST_BIT, HIGHEST_BIT + n_bits)     masked SFA word

Bigram key::

    bits [0, 32)                                 unigram key of the current word
    bits [32, 64)                                masked SFA word one window back

where ``n_bits = used_bits(alphabet_size) * word_length``. Keys are collision
free as long as ``n_bits + HIGHEST_BIT <= 32``; wider layouts are accepted up
to 63 bits but the two halves of a bigram may then overlap.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

# Upper bound on any window length; it fixes the width of the window-index field
MAX_WINDOW_LENGTH = 350

UINT64_MASK = (1 << 64) - 1
BIGRAM_SHIFT = 32
MAX_KEY_BITS = 63


def binlog(bits: int) -> int:
    """Integer floor of log2 (0 for non-positive input)."""
    if bits <= 0:
        return 0
    return bits.bit_length() - 1


def highest_one_bit(value: int) -> int:
    """Largest power of two not greater than ``value``."""
    if value <= 0:
        return 0
    return 1 << binlog(value)


def used_bits(alphabet_size: int) -> int:
    """Bits needed to store one SFA letter."""
    if alphabet_size < 2:
        raise ValueError(f"alphabet_size must be >= 2, got {alphabet_size}")
    return (alphabet_size - 1).bit_length()


def highest_bit(max_window_length: int = MAX_WINDOW_LENGTH) -> int:
    """Offset of the word field, i.e. the width of the window-index field."""
    return binlog(highest_one_bit(max_window_length)) + 1


HIGHEST_BIT = highest_bit()


def word_mask(alphabet_size: int, word_length: int) -> int:
    """Mask keeping the first ``word_length`` letters of a packed SFA word."""
    return (1 << (used_bits(alphabet_size) * word_length)) - 1


def key_bits(alphabet_size: int, word_length: int) -> int:
    """Width of a unigram key for the given alphabet and word length."""
    return used_bits(alphabet_size) * word_length + HIGHEST_BIT


def validate_layout(alphabet_size: int, word_length: int) -> int:
    """
    Check that unigram keys fit into 64 bits.

    Returns
    -------
    int
        Number of bits used by a unigram key.

    Raises
    ------
    ValueError
        If the layout does not fit.
    """
    if word_length < 1:
        raise ValueError(f"word_length must be >= 1, got {word_length}")
    bits = key_bits(alphabet_size, word_length)
    if bits > MAX_KEY_BITS:
        raise ValueError(
            f"alphabet_size={alphabet_size} with word_length={word_length} needs "
            f"{bits} key bits, more than the {MAX_KEY_BITS} available"
        )
    return bits


def encode_unigram(word: int, window_index: int, mask: int) -> int:
    """Key of a single (masked) word produced by window length ``window_index``."""
    return ((word & mask) << HIGHEST_BIT) | window_index


def encode_bigram(prev_word: int, current_key: int) -> int:
    """Key of ``prev_word`` (already masked) followed by the unigram ``current_key``."""
    return ((prev_word << BIGRAM_SHIFT) | current_key) & UINT64_MASK


def decode_key(key: int) -> Tuple[int, int, Optional[int]]:
    """
    Split a key into ``(window_index, word, prev_word)``.

    ``prev_word`` is None for unigram keys. Only exact for layouts of at
    most 32 bits.
    """
    low = key & ((1 << BIGRAM_SHIFT) - 1)
    prev_word = key >> BIGRAM_SHIFT
    window_index = low & ((1 << HIGHEST_BIT) - 1)
    word = low >> HIGHEST_BIT
    return window_index, word, (prev_word if prev_word else None)


def pack_words(letters: np.ndarray, bits: int) -> np.ndarray:
    """
    Pack rows of SFA letters into integer words.

    Letter ``i`` of a row occupies bits ``[i*bits, (i+1)*bits)``, so masking a
    word with :func:`word_mask` keeps its leading letters.
    """
    letters = np.asarray(letters, dtype=np.int64)
    if letters.ndim != 2:
        raise ValueError(f"letters must be 2D, got shape {letters.shape}")
    words = np.zeros(letters.shape[0], dtype=np.int64)
    for i in range(letters.shape[1]):
        words |= letters[:, i] << (i * bits)
    return words
