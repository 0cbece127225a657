"""
ts2bob: Time series to bags of bigrams

WEASEL feature extraction: SFA words and bigrams over several window lengths,
pruned to class-discriminative features with a chi-squared or ANOVA test.
"""

from .core import (
    BagOfBigrams,
    Dictionary,
    TimeSeries,
    WordGenerator,
    as_samples,
    decode_key,
    encode_bigram,
    encode_unigram,
)
from .model import WEASEL
from .selection import SelectionResult, train_anova, train_chi_squared
from .features import bags_to_csr
from .config import PipelineConfig, SelectionConfig, WeaselConfig
from .io import load_ucr

__version__ = "0.1.0"

__all__ = [
    'WEASEL',
    'BagOfBigrams',
    'Dictionary',
    'TimeSeries',
    'WordGenerator',
    'SelectionResult',
    'PipelineConfig',
    'SelectionConfig',
    'WeaselConfig',
    'as_samples',
    'bags_to_csr',
    'decode_key',
    'encode_bigram',
    'encode_unigram',
    'load_ucr',
    'train_anova',
    'train_chi_squared',
]
