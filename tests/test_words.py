"""Tests for word generation over window lengths."""

from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from ts2bob.core import words as words_module
from ts2bob.core.timeseries import TimeSeries
from ts2bob.core.words import WordGenerator, default_blocks


def _samples():
    return [TimeSeries(np.arange(10.0), 0), TimeSeries(np.arange(3.0), 1)]


class TestDefaultBlocks:
    """Test the worker count."""

    def test_small_machine(self, monkeypatch):
        monkeypatch.setattr(words_module.os, "cpu_count", lambda: 2)
        assert default_blocks() == 8

    def test_large_machine(self, monkeypatch):
        monkeypatch.setattr(words_module.os, "cpu_count", lambda: 16)
        assert default_blocks() == 16

    def test_unknown_cpu_count(self, monkeypatch):
        monkeypatch.setattr(words_module.os, "cpu_count", lambda: None)
        assert default_blocks() == 8


class TestCreateWords:
    """Test words of a single window length."""

    def test_one_word_per_window(self, counting_transform):
        gen = WordGenerator([4], 2, 4, transform_factory=counting_transform)
        words = gen.create_words(_samples(), 0)
        np.testing.assert_array_equal(words[0], np.arange(7) % 4)

    def test_default_sfa_rejects_window_of_one(self):
        with pytest.raises(ValueError, match="default SFA"):
            WordGenerator([4, 1], 2, 4, blocks=1)

    def test_window_of_one_with_custom_transform(self, counting_transform):
        gen = WordGenerator([1], 2, 4, blocks=1, transform_factory=counting_transform)
        words = gen.create_words(_samples(), 0)
        assert words[0].shape == (10,)

    def test_short_sample_empty(self, counting_transform):
        gen = WordGenerator([4], 2, 4, transform_factory=counting_transform)
        words = gen.create_words(_samples(), 0)
        assert words[1].shape == (0,)

    def test_transform_cached(self, counting_transform):
        gen = WordGenerator([4, 5], 2, 4, transform_factory=counting_transform)
        first = gen.create_words(_samples(), 0)
        second = gen.create_words(_samples(), 0)
        assert counting_transform.fits == 1
        for a, b in zip(first, second):
            np.testing.assert_array_equal(a, b)
        gen.create_words(_samples(), 1)
        assert counting_transform.fits == 2

    def test_reset_refits(self, counting_transform):
        gen = WordGenerator([4], 2, 4, transform_factory=counting_transform)
        gen.create_words(_samples(), 0)
        gen.reset()
        gen.create_words(_samples(), 0)
        assert counting_transform.fits == 2

    def test_concurrent_first_use_fits_once(self, counting_transform):
        gen = WordGenerator(
            [4], 2, 4, transform_factory=lambda: counting_transform(delay=0.05)
        )
        samples = _samples()
        with ThreadPoolExecutor(max_workers=8) as executor:
            transforms = list(executor.map(lambda _: gen.transform_for(samples, 0), range(8)))
        assert counting_transform.fits == 1
        assert all(t is transforms[0] for t in transforms)

    def test_fit_error_propagates(self, counting_transform):
        gen = WordGenerator([4], 2, 4, transform_factory=lambda: counting_transform(fail=True))
        with pytest.raises(ValueError, match="degenerate"):
            gen.create_words(_samples(), 0)
        assert gen.signature[0] is None

    def test_invalid_blocks(self):
        with pytest.raises(ValueError, match="blocks"):
            WordGenerator([4], 2, 4, blocks=0)


class TestCreateWordsAll:
    """Test the parallel fan-out over window lengths."""

    @pytest.mark.parametrize("blocks", [1, 2, 8])
    def test_matches_sequential(self, counting_transform, blocks):
        window_lengths = [2, 3, 4, 5, 6]
        gen = WordGenerator(window_lengths, 2, 4, blocks=blocks,
                            transform_factory=counting_transform)
        parallel = gen.create_words_all(_samples())

        sequential = WordGenerator(window_lengths, 2, 4, blocks=1,
                                   transform_factory=counting_transform)
        assert len(parallel) == len(window_lengths)
        for w in range(len(window_lengths)):
            expected = sequential.create_words(_samples(), w)
            for a, b in zip(parallel[w], expected):
                np.testing.assert_array_equal(a, b)

    def test_fits_each_window_once(self, counting_transform):
        gen = WordGenerator([2, 3, 4], 2, 4, blocks=2, transform_factory=counting_transform)
        gen.create_words_all(_samples())
        gen.create_words_all(_samples())
        assert counting_transform.fits == 3

    def test_error_reraised_at_join(self, counting_transform):
        gen = WordGenerator([2, 3], 2, 4, blocks=2,
                            transform_factory=lambda: counting_transform(fail=True))
        with pytest.raises(ValueError, match="degenerate"):
            gen.create_words_all(_samples())
