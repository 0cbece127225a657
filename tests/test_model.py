"""End-to-end tests for the WEASEL model."""

import numpy as np
import pytest

from ts2bob import WEASEL, SelectionConfig, TimeSeries, bags_to_csr
from ts2bob.core.encoding import decode_key


@pytest.fixture
def model():
    return WEASEL(max_word_length=4, alphabet_size=4, window_lengths=[8, 16], blocks=2)


class TestConstruction:
    """Test configuration errors surface at construction."""

    def test_alphabet_not_power_of_two(self):
        with pytest.raises(ValueError, match="power of two"):
            WEASEL(4, 3, [8])

    def test_layout_overflow(self):
        with pytest.raises(ValueError, match="key bits"):
            WEASEL(8, 1 << 8, [8])

    def test_window_too_short_for_sfa(self):
        with pytest.raises(ValueError, match="window_length must be >= 2"):
            WEASEL(4, 4, [1, 8])

    def test_window_of_one_with_custom_transform(self, counting_transform):
        model = WEASEL(4, 4, [1], blocks=1, transform_factory=counting_transform)
        assert model.window_lengths == [1]

    def test_word_length_out_of_range(self, model, two_class_samples):
        words = model.create_words(two_class_samples)
        with pytest.raises(ValueError, match="word_length"):
            model.create_bag_of_patterns(words, two_class_samples, word_length=5)


class TestPipeline:
    """Test word generation, bags and selection together."""

    def test_words_per_window_length(self, model, two_class_samples):
        words = model.create_words(two_class_samples)
        assert len(words) == 2
        assert words[0][0].shape == (64 - 8 + 1,)
        assert words[1][0].shape == (64 - 16 + 1,)

    def test_words_idempotent(self, model, two_class_samples):
        first = model.create_words(two_class_samples, 1)
        second = model.create_words(two_class_samples, 1)
        for a, b in zip(first, second):
            np.testing.assert_array_equal(a, b)

    def test_bag_counts(self, model, two_class_samples):
        words = model.create_words(two_class_samples)
        bags = model.create_bag_of_patterns(words, two_class_samples, word_length=2)
        unigrams = sum(
            count for key, count in bags[0].bob.items() if decode_key(key)[2] is None
        )
        assert unigrams == (64 - 8 + 1) + (64 - 16 + 1)
        assert bags[0].label == 0.0

    def test_single_window_bags(self, model, two_class_samples):
        words = model.create_words(two_class_samples, 1)
        bags = model.create_bag_of_patterns(words, two_class_samples, 3, index=1)
        assert all(decode_key(key)[0] == 1 for key in bags[0].bob)

    def test_chi_squared_keeps_key_set(self, model, two_class_samples):
        words = model.create_words(two_class_samples)
        bags = model.create_bag_of_patterns(words, two_class_samples, 4)
        keys_before = [set(bag.bob) for bag in bags]
        result = model.train_chi_squared(bags, chi_limit=1.0)
        assert [set(bag.bob) for bag in bags] == keys_before
        assert result.n_kept > 0
        for bag in bags:
            assert set(bag.nonzero()) <= result.kept

    def test_anova_grows_dictionary(self, model, two_class_samples):
        words = model.create_words(two_class_samples)
        bags = model.create_bag_of_patterns(words, two_class_samples, 4)
        n_keys = len(set().union(*(bag.bob for bag in bags)))
        model.train_anova(bags)
        assert model.dict.size() == n_keys

    @pytest.mark.parametrize("method", ["chi2", "anova", "none"])
    def test_fit_transform(self, model, two_class_samples, method):
        bags, result = model.fit_transform(
            two_class_samples, selection=SelectionConfig(method=method)
        )
        assert len(bags) == len(two_class_samples)
        positive = set().union(*(bag.nonzero() for bag in bags))
        assert model.dict.size() == len(positive)
        if method == "none":
            assert result is None
        else:
            assert result.method == method
            assert positive <= result.kept

        X, y = bags_to_csr(bags, model.dict, grow=False)
        assert X.shape == (len(bags), model.dict.size())
        np.testing.assert_array_equal(y, [s.label for s in two_class_samples])

    def test_transform_prunes_to_dictionary(self, model, two_class_samples, rng):
        model.fit_transform(two_class_samples)
        new = [TimeSeries(rng.standard_normal(64)) for _ in range(3)]
        bags = model.transform(new)
        for bag in bags:
            assert all(key in model.dict for key in bag.bob)
            assert all(value > 0 for value in bag.bob.values())
            assert bag.label is None

    def test_transform_requires_fit(self, model, two_class_samples):
        with pytest.raises(ValueError, match="fit"):
            model.transform(two_class_samples)

    def test_from_config(self):
        from ts2bob.config import WeaselConfig

        model = WEASEL.from_config(WeaselConfig(window_lengths=[5, 9], blocks=1))
        assert model.window_lengths == [5, 9]
        assert model.generator.blocks == 1

    def test_refit_relearns_transforms(self, two_class_samples, counting_transform):
        model = WEASEL(4, 4, [8], blocks=1, transform_factory=counting_transform)
        model.fit_transform(two_class_samples)
        first = model.generator.signature[0]
        model.fit_transform(two_class_samples[:4])
        assert counting_transform.fits == 2
        assert model.generator.signature[0] is not first

    def test_refit_matches_fresh_fit(self, two_class_samples):
        cubed = [TimeSeries(100 * s.values ** 3, s.label) for s in two_class_samples]
        model = WEASEL(4, 4, [8], blocks=1)
        model.fit_transform(two_class_samples)
        bags, _ = model.fit_transform(cubed)

        fresh = WEASEL(4, 4, [8], blocks=1)
        fresh_bags, _ = fresh.fit_transform(cubed)
        np.testing.assert_array_equal(
            model.generator.signature[0].bins_, fresh.generator.signature[0].bins_
        )
        assert [bag.bob for bag in bags] == [bag.bob for bag in fresh_bags]
