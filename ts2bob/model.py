"""
The WEASEL feature model.

Schäfer, P., Leser, U.: Fast and Accurate Time Series Classification with
WEASEL. CIKM 2017.

A time series is represented by a histogram of SFA words and bigrams taken
over several window lengths; the histogram is then pruned to the features a
chi-squared or ANOVA test deems class-discriminative.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, Tuple, Union

from .config import SelectionConfig, WeaselConfig
from .core.bag import BagOfBigrams, create_bag_of_patterns, create_bag_of_patterns_for_window
from .core.dictionary import Dictionary
from .core.timeseries import TimeSeries
from .core.words import WordGenerator, Words
from .selection import SelectionResult, train_anova, train_chi_squared
from .sfa import SymbolicTransform

logger = logging.getLogger(__name__)


class WEASEL:
    """
    Bag-of-bigrams extraction and feature selection.

    Parameters
    ----------
    max_word_length : int
        Length of the SFA words.
    alphabet_size : int
        SFA alphabet size, a power of two.
    window_lengths : sequence of int
        Window lengths used to extract SFA words.
    normalize_mean : bool
        Set the mean of each window to 0.
    lower_bounding : bool
        Normalise the Fourier transform to lower bound the Euclidean distance.
    blocks : int, optional
        Number of word generation workers.
    transform_factory : callable, optional
        Creates the symbolic transform used per window length.

    Examples
    --------
    >>> model = WEASEL(max_word_length=4, alphabet_size=4, window_lengths=[8, 16])
    >>> words = model.create_words(samples)
    >>> bags = model.create_bag_of_patterns(words, samples, word_length=4)
    >>> result = model.train_chi_squared(bags, chi_limit=2.0)
    """

    def __init__(
        self,
        max_word_length: int,
        alphabet_size: int,
        window_lengths: Sequence[int],
        normalize_mean: bool = True,
        lower_bounding: bool = True,
        blocks: Optional[int] = None,
        transform_factory: Optional[Callable[[], SymbolicTransform]] = None,
    ):
        self.config = WeaselConfig(
            max_word_length=max_word_length,
            alphabet_size=alphabet_size,
            window_lengths=list(window_lengths),
            normalize_mean=normalize_mean,
            lower_bounding=lower_bounding,
            blocks=blocks,
        )
        self.dict = Dictionary()
        self.generator = WordGenerator(
            self.config.window_lengths,
            max_word_length,
            alphabet_size,
            normalize_mean=normalize_mean,
            lower_bounding=lower_bounding,
            blocks=blocks,
            transform_factory=transform_factory,
        )

    @classmethod
    def from_config(
        cls,
        config: WeaselConfig,
        transform_factory: Optional[Callable[[], SymbolicTransform]] = None,
    ) -> "WEASEL":
        return cls(
            config.max_word_length,
            config.alphabet_size,
            config.window_lengths,
            normalize_mean=config.normalize_mean,
            lower_bounding=config.lower_bounding,
            blocks=config.blocks,
            transform_factory=transform_factory,
        )

    @property
    def window_lengths(self) -> List[int]:
        return self.config.window_lengths

    @property
    def alphabet_size(self) -> int:
        return self.config.alphabet_size

    @property
    def max_word_length(self) -> int:
        return self.config.max_word_length

    def create_words(
        self, samples: Sequence[TimeSeries], index: Optional[int] = None
    ) -> Union[Words, List[Words]]:
        """
        SFA words of all samples.

        With ``index`` the words of that window length only; otherwise the
        words of every window length, computed in parallel.
        """
        if index is None:
            return self.generator.create_words_all(samples)
        return self.generator.create_words(samples, index)

    def create_bag_of_patterns(
        self,
        words,
        samples: Sequence[TimeSeries],
        word_length: int,
        index: Optional[int] = None,
    ) -> List[BagOfBigrams]:
        """
        Bags of words and bigrams.

        With ``index``, ``words`` holds the words of that window length only;
        otherwise it holds the words of every window length.
        """
        if not 1 <= word_length <= self.max_word_length:
            raise ValueError(
                f"word_length must be in [1, {self.max_word_length}], got {word_length}"
            )
        if index is None:
            return create_bag_of_patterns(
                words, samples, self.window_lengths, self.alphabet_size, word_length
            )
        return create_bag_of_patterns_for_window(
            words, samples, index, self.window_lengths[index], self.alphabet_size, word_length
        )

    def train_anova(
        self, bags: Sequence[BagOfBigrams], p_value: Optional[float] = None
    ) -> SelectionResult:
        return train_anova(bags, self.dict, p_value)

    def train_chi_squared(
        self, bags: Sequence[BagOfBigrams], chi_limit: float, limit: Optional[int] = None
    ) -> SelectionResult:
        return train_chi_squared(bags, chi_limit, limit)

    def fit_transform(
        self,
        samples: Sequence[TimeSeries],
        word_length: Optional[int] = None,
        selection: Optional[SelectionConfig] = None,
    ) -> Tuple[List[BagOfBigrams], Optional[SelectionResult]]:
        """
        Extract and select features of training samples in one go.

        Builds the joint bags over all window lengths and prunes them with the
        configured selector. Afterwards the dictionary holds exactly the
        features left with a positive count, which is what :meth:`transform`
        and :func:`ts2bob.features.bags_to_csr` index by.
        """
        selection = selection or SelectionConfig()
        word_length = word_length or self.max_word_length

        self.dict.reset()
        self.generator.reset()
        words = self.create_words(samples)
        bags = self.create_bag_of_patterns(words, samples, word_length)

        result = None
        if selection.method == "chi2":
            result = self.train_chi_squared(bags, selection.chi_limit, selection.limit)
        elif selection.method == "anova":
            result = self.train_anova(bags, selection.p_value)

        self.dict.reset()
        for bag in bags:
            for key, value in bag.bob.items():
                if value > 0:
                    self.dict.get_word_index(key)
        logger.info(f"Dictionary holds {self.dict.size()} features")
        return bags, result

    def transform(
        self, samples: Sequence[TimeSeries], word_length: Optional[int] = None
    ) -> List[BagOfBigrams]:
        """
        Bags of new samples using the already fitted transforms.

        Bags are pruned to the keys known to the dictionary.
        """
        if any(transform is None for transform in self.generator.signature):
            raise ValueError("Please fit the model first using .fit_transform()")
        word_length = word_length or self.max_word_length
        words = self.create_words(samples)
        bags = self.create_bag_of_patterns(words, samples, word_length)
        self.dict.filter_chi_squared(bags)
        return bags
