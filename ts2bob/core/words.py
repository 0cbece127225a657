"""
SFA word generation for every configured window length.

One symbolic transform is fitted per window length, lazily and exactly once,
and reused for every later call with the same window index.
"""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence

import numpy as np
from numpy.typing import NDArray
from tqdm.auto import tqdm

from ..sfa import MIN_WINDOW_LENGTH, SFA, SymbolicTransform
from .timeseries import TimeSeries

logger = logging.getLogger(__name__)

# Words of one window length: one array per sample
Words = List[NDArray[np.int64]]


def default_blocks() -> int:
    """Number of word generation workers: the CPU count, at least 8 on small machines."""
    cpus = os.cpu_count() or 1
    if cpus <= 4:
        return 8
    return cpus


class WordGenerator:
    """
    Produces SFA word sequences for each window length.

    Parameters
    ----------
    window_lengths : sequence of int
        Window lengths, addressed by their index.
    max_word_length : int
        Number of SFA letters per generated word.
    alphabet_size : int
        SFA alphabet size.
    normalize_mean : bool
        Subtract the window mean before the Fourier transform.
    lower_bounding : bool
        Scale Fourier coefficients to lower bound the Euclidean distance.
    blocks : int, optional
        Number of workers for :meth:`create_words_all`. Defaults to
        :func:`default_blocks`.
    transform_factory : callable, optional
        Returns a fresh, unfitted :class:`SymbolicTransform`. Defaults to
        :class:`ts2bob.sfa.SFA`. SFA needs window lengths of at least 2.
    """

    def __init__(
        self,
        window_lengths: Sequence[int],
        max_word_length: int,
        alphabet_size: int,
        normalize_mean: bool = True,
        lower_bounding: bool = True,
        blocks: Optional[int] = None,
        transform_factory: Optional[Callable[[], SymbolicTransform]] = None,
    ):
        self.window_lengths = list(window_lengths)
        self.max_word_length = max_word_length
        self.alphabet_size = alphabet_size
        self.normalize_mean = normalize_mean
        self.lower_bounding = lower_bounding
        self.blocks = blocks if blocks is not None else default_blocks()
        if self.blocks < 1:
            raise ValueError(f"blocks must be >= 1, got {self.blocks}")
        if transform_factory is None:
            short = [w for w in self.window_lengths if w < MIN_WINDOW_LENGTH]
            if short:
                raise ValueError(
                    f"window_length must be >= {MIN_WINDOW_LENGTH} for the default SFA, "
                    f"got {short[0]}"
                )
        self.transform_factory = transform_factory or SFA

        self.signature: List[Optional[SymbolicTransform]] = [None] * len(self.window_lengths)
        self._locks = [threading.Lock() for _ in self.window_lengths]

    def reset(self) -> None:
        """Forget all fitted transforms."""
        for index in range(len(self.signature)):
            with self._locks[index]:
                self.signature[index] = None

    def transform_for(self, samples: Sequence[TimeSeries], index: int) -> SymbolicTransform:
        """Fitted transform of window index ``index``, fitting it on first use."""
        transform = self.signature[index]
        if transform is None:
            with self._locks[index]:
                transform = self.signature[index]
                if transform is None:
                    window_length = self.window_lengths[index]
                    logger.info(f"Fitting SFA for window length {window_length}")
                    transform = self.transform_factory()
                    transform.fit_windowing(
                        samples,
                        window_length,
                        self.max_word_length,
                        self.alphabet_size,
                        self.normalize_mean,
                        self.lower_bounding,
                    )
                    self.signature[index] = transform
        return transform

    def create_words(self, samples: Sequence[TimeSeries], index: int) -> Words:
        """
        SFA words of every sample for window length ``window_lengths[index]``.

        Samples shorter than the window length get an empty array.
        """
        transform = self.transform_for(samples, index)
        window_length = self.window_lengths[index]

        words: Words = []
        for sample in samples:
            if sample.length >= window_length:
                words.append(
                    np.asarray(
                        transform.transform_windowing(sample, self.max_word_length),
                        dtype=np.int64,
                    )
                )
            else:
                words.append(np.zeros(0, dtype=np.int64))
        return words

    def create_words_all(
        self, samples: Sequence[TimeSeries], progress: bool = False
    ) -> List[Words]:
        """
        SFA words for all window lengths, computed in parallel.

        Window index ``w`` is handled by worker ``w % blocks``; every worker
        writes to its own slots of the result, so the only synchronisation is
        the final join. Errors raised by a transform are re-raised here.
        """
        n_windows = len(self.window_lengths)
        words: List[Optional[Words]] = [None] * n_windows
        bar = tqdm(total=n_windows, desc="SFA words", disable=not progress)

        def run(worker_id: int) -> None:
            for w in range(n_windows):
                if w % self.blocks == worker_id:
                    logger.debug(f"Worker {worker_id} handles window index {w}")
                    words[w] = self.create_words(samples, w)
                    bar.update(1)

        try:
            with ThreadPoolExecutor(max_workers=self.blocks) as executor:
                futures = [executor.submit(run, worker_id) for worker_id in range(self.blocks)]
                for future in futures:
                    future.result()
        finally:
            bar.close()
        return words
