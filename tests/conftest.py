"""
Test configuration and fixtures for pytest.

This file contains fixtures and configuration that will be available to all tests.
"""
import threading
import time

import numpy as np
import pytest

from ts2bob.core.timeseries import TimeSeries


class CountingTransform:
    """Deterministic stand-in for SFA: word ``i`` is ``i % modulo``."""

    fits = 0
    lock = threading.Lock()

    def __init__(self, modulo=4, delay=0.0, fail=False):
        self.modulo = modulo
        self.delay = delay
        self.fail = fail

    def fit_windowing(self, samples, window_length, word_length, alphabet_size,
                      normalize_mean, lower_bounding):
        if self.fail:
            raise ValueError("cannot fit degenerate input")
        if self.delay:
            time.sleep(self.delay)
        with CountingTransform.lock:
            CountingTransform.fits += 1
        self.window_length = window_length
        return self

    def transform_windowing(self, sample, word_length):
        n_words = sample.length - self.window_length + 1
        return np.arange(n_words, dtype=np.int64) % self.modulo


@pytest.fixture
def counting_transform():
    """Factory of CountingTransform with the fit counter reset."""
    CountingTransform.fits = 0
    return CountingTransform


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(42)


@pytest.fixture
def two_class_samples(rng):
    """Sine waves (label 0) and square waves (label 1) with noise."""
    t = np.linspace(0, 4 * np.pi, 64)
    samples = []
    for i in range(10):
        phase = rng.uniform(0, np.pi)
        samples.append(TimeSeries(np.sin(t + phase) + 0.1 * rng.standard_normal(64), 0))
        samples.append(TimeSeries(np.sign(np.sin(t + phase)) + 0.1 * rng.standard_normal(64), 1))
    return samples
