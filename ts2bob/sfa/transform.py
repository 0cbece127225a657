"""
Symbolic Fourier Approximation (SFA).

Sliding windows of a series are z-normalised, reduced to their leading
Fourier coefficients, and each coefficient is quantised into one of
``alphabet_size`` letters using equi-depth bins learnt at fit time
(multiple coefficient binning). The letters of a window are packed into one
integer word with :func:`ts2bob.core.encoding.pack_words`.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Sequence, runtime_checkable

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view
from numpy.typing import NDArray

from ..core.encoding import pack_words, used_bits
from ..core.timeseries import TimeSeries

logger = logging.getLogger(__name__)

# a Fourier transform of one value has no coefficient past the mean
MIN_WINDOW_LENGTH = 2


@runtime_checkable
class SymbolicTransform(Protocol):
    """Interface the word generator needs from a symbolic transform."""

    def fit_windowing(
        self,
        samples: Sequence[TimeSeries],
        window_length: int,
        word_length: int,
        alphabet_size: int,
        normalize_mean: bool,
        lower_bounding: bool,
    ) -> "SymbolicTransform":
        ...

    def transform_windowing(self, sample: TimeSeries, word_length: int) -> NDArray[np.int64]:
        ...


class SFA:
    """
    Unsupervised SFA with equi-depth binning.

    Parameters
    ----------
    max_windows : int, optional
        Maximum number of windows sampled per series when learning the bins.
        None uses every window.
    """

    def __init__(self, max_windows: Optional[int] = None):
        self.max_windows = max_windows

    def fit_windowing(
        self,
        samples: Sequence[TimeSeries],
        window_length: int,
        word_length: int,
        alphabet_size: int,
        normalize_mean: bool,
        lower_bounding: bool,
    ) -> "SFA":
        """Learn the quantisation bins from all windows of ``samples``."""
        if window_length < MIN_WINDOW_LENGTH:
            raise ValueError(f"window_length must be >= {MIN_WINDOW_LENGTH}, got {window_length}")
        self.window_length = window_length
        self.word_length = word_length
        self.alphabet_size = alphabet_size
        self.normalize_mean = normalize_mean
        self.lower_bounding = lower_bounding
        self.bits_ = used_bits(alphabet_size)

        blocks: List[np.ndarray] = []
        for sample in samples:
            if sample.length < window_length:
                continue
            coefs = self._coefficients(sample.values)
            if self.max_windows is not None and coefs.shape[0] > self.max_windows:
                step = coefs.shape[0] / self.max_windows
                coefs = coefs[(np.arange(self.max_windows) * step).astype(int)]
            blocks.append(coefs)

        if not blocks:
            raise ValueError(
                f"cannot fit SFA: no sample is at least {window_length} values long"
            )
        coefs = np.vstack(blocks)

        # equi-depth breakpoints per coefficient
        quantiles = np.linspace(0, 1, alphabet_size + 1)[1:-1]
        self.bins_ = np.quantile(coefs, quantiles, axis=0).T
        logger.debug(
            f"Fitted SFA on {coefs.shape[0]} windows of length {window_length}"
        )
        return self

    def transform_windowing(self, sample: TimeSeries, word_length: int) -> NDArray[np.int64]:
        """One packed SFA word per sliding window position of ``sample``."""
        if not hasattr(self, "bins_"):
            raise ValueError("Please fit the transform first using .fit_windowing()")
        if sample.length < self.window_length:
            return np.zeros(0, dtype=np.int64)

        coefs = self._coefficients(sample.values)[:, :word_length]
        letters = np.empty(coefs.shape, dtype=np.int64)
        for i in range(coefs.shape[1]):
            letters[:, i] = np.searchsorted(self.bins_[i], coefs[:, i], side="right")
        return pack_words(letters, self.bits_)

    def _coefficients(self, values: np.ndarray) -> np.ndarray:
        windows = sliding_window_view(values, self.window_length)
        means = windows.mean(axis=1, keepdims=True)
        stds = windows.std(axis=1, keepdims=True)
        stds[stds == 0] = 1.0
        if self.normalize_mean:
            windows = (windows - means) / stds
        else:
            windows = windows / stds

        spectrum = np.fft.rfft(windows, axis=1)
        # interleave real and imaginary parts: re0, im0, re1, im1, ...
        coefs = np.empty((spectrum.shape[0], 2 * spectrum.shape[1]))
        coefs[:, 0::2] = spectrum.real
        coefs[:, 1::2] = -spectrum.imag
        if self.normalize_mean:
            # the DC component is zero after mean removal
            coefs = coefs[:, 2:]
        if self.lower_bounding:
            coefs = coefs / np.sqrt(self.window_length)

        coefs = coefs[:, : self.word_length]
        if coefs.shape[1] < self.word_length:
            pad = np.zeros((coefs.shape[0], self.word_length - coefs.shape[1]))
            coefs = np.hstack([coefs, pad])
        return coefs
