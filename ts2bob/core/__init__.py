"""
Core building blocks: key encoding, word generation, bags and dictionary.
"""

from .encoding import (
    HIGHEST_BIT,
    MAX_WINDOW_LENGTH,
    decode_key,
    encode_bigram,
    encode_unigram,
    used_bits,
    validate_layout,
    word_mask,
)
from .timeseries import TimeSeries, as_samples
from .bag import BagOfBigrams, create_bag_of_patterns, create_bag_of_patterns_for_window
from .dictionary import Dictionary
from .words import WordGenerator, default_blocks

__all__ = [
    "HIGHEST_BIT",
    "MAX_WINDOW_LENGTH",
    "BagOfBigrams",
    "Dictionary",
    "TimeSeries",
    "WordGenerator",
    "as_samples",
    "create_bag_of_patterns",
    "create_bag_of_patterns_for_window",
    "decode_key",
    "default_blocks",
    "encode_bigram",
    "encode_unigram",
    "used_bits",
    "validate_layout",
    "word_mask",
]
