"""
Bag-of-bigrams construction.

Turns SFA word sequences into per-sample sparse histograms of unigram and
bigram keys (see :mod:`ts2bob.core.encoding` for the key layout).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import numpy as np

from .encoding import encode_bigram, encode_unigram, validate_layout, word_mask
from .timeseries import TimeSeries

logger = logging.getLogger(__name__)


@dataclass
class BagOfBigrams:
    """
    Histogram of SFA word and bigram frequencies for one sample.

    Selectors zero out entries of ``bob`` instead of deleting them, so the key
    set of a bag never shrinks after construction.
    """

    bob: Dict[int, int] = field(default_factory=dict)
    label: Optional[float] = None

    def add(self, key: int, count: int = 1) -> None:
        """Add ``count`` to ``key``, inserting it if missing."""
        self.bob[key] = self.bob.get(key, 0) + count

    def nonzero(self) -> Dict[int, int]:
        """Entries with a positive count."""
        return {key: value for key, value in self.bob.items() if value > 0}

    def __len__(self) -> int:
        return len(self.bob)

    def __getitem__(self, key: int) -> int:
        return self.bob[key]

    def __contains__(self, key: int) -> bool:
        return key in self.bob


def _add_words(
    bag: BagOfBigrams,
    words: Sequence[int],
    window_index: int,
    window_length: int,
    mask: int,
) -> None:
    """Add the unigrams and bigrams of one word sequence to ``bag``."""
    for offset in range(len(words)):
        key = encode_unigram(words[offset], window_index, mask)
        bag.add(key)

        # bigram with the word one full window length back
        if offset - window_length >= 0:
            prev_word = words[offset - window_length] & mask
            if prev_word != 0:
                bag.add(encode_bigram(prev_word, key))


def _as_int_list(words) -> List[int]:
    if isinstance(words, np.ndarray):
        return words.astype(np.int64, copy=False).tolist()
    return [int(w) for w in words]


def create_bag_of_patterns(
    words: Sequence[Sequence[int]],
    samples: Sequence[TimeSeries],
    window_lengths: Sequence[int],
    alphabet_size: int,
    word_length: int,
) -> List[BagOfBigrams]:
    """
    Build one bag per sample from the words of every window length.

    Parameters
    ----------
    words : sequence of shape (n_windows, n_samples, n_words)
        ``words[w][j]`` holds the SFA words of sample ``j`` for window
        length ``window_lengths[w]``.
    samples : sequence of TimeSeries
        Samples the words were generated from; only the labels are used.
    window_lengths : sequence of int
        Window lengths, indexed like the first axis of ``words``.
    alphabet_size : int
        SFA alphabet size.
    word_length : int
        Number of leading SFA letters kept per word.

    Returns
    -------
    list of BagOfBigrams
    """
    if len(words) != len(window_lengths):
        raise ValueError(
            f"got words for {len(words)} window lengths, expected {len(window_lengths)}"
        )
    validate_layout(alphabet_size, word_length)
    mask = word_mask(alphabet_size, word_length)

    bags = []
    for j, sample in enumerate(samples):
        bag = BagOfBigrams(label=sample.label)
        for w, window_length in enumerate(window_lengths):
            _add_words(bag, _as_int_list(words[w][j]), w, window_length, mask)
        bags.append(bag)

    logger.info(
        f"Built {len(bags)} bags over {len(window_lengths)} window lengths "
        f"(word_length={word_length}, mean size={_mean_size(bags):.1f})"
    )
    return bags


def create_bag_of_patterns_for_window(
    words: Sequence[Sequence[int]],
    samples: Sequence[TimeSeries],
    window_index: int,
    window_length: int,
    alphabet_size: int,
    word_length: int,
) -> List[BagOfBigrams]:
    """
    Build one bag per sample from the words of a single window length.

    ``words[j]`` holds the SFA words of sample ``j``; keys are tagged with
    ``window_index`` so they stay distinct from other window lengths.
    """
    validate_layout(alphabet_size, word_length)
    mask = word_mask(alphabet_size, word_length)

    bags = []
    for j, sample in enumerate(samples):
        bag = BagOfBigrams(label=sample.label)
        _add_words(bag, _as_int_list(words[j]), window_index, window_length, mask)
        bags.append(bag)

    logger.debug(
        f"Built {len(bags)} bags for window length {window_length} "
        f"(index {window_index})"
    )
    return bags


def _mean_size(bags: Sequence[BagOfBigrams]) -> float:
    if not bags:
        return 0.0
    return sum(len(bag) for bag in bags) / len(bags)
