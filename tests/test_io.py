"""Tests for UCR file loading."""

import numpy as np
import pytest

from ts2bob.io import load_ucr


def test_load_whitespace(tmp_path):
    path = tmp_path / "train.txt"
    path.write_text("  1.0  0.5  0.25  0.125\n  2.0  -1.0  1.0  -1.0\n")
    samples = load_ucr(path)
    assert len(samples) == 2
    assert samples[0].label == 1.0
    np.testing.assert_array_equal(samples[1].values, [-1.0, 1.0, -1.0])


def test_load_ragged_csv(tmp_path):
    path = tmp_path / "train.csv"
    path.write_text("0,1,2,3,4\n1,5,6\n\n0,7,8,NaN\n")
    samples = load_ucr(path)
    assert [s.length for s in samples] == [4, 2, 2]
    assert [s.label for s in samples] == [0.0, 1.0, 0.0]


def test_interior_gap_kept(tmp_path):
    path = tmp_path / "gaps.csv"
    path.write_text("1,5,NaN,7\n0,1,2,3,4,5\n")
    samples = load_ucr(path)
    assert [s.length for s in samples] == [3, 5]
    np.testing.assert_array_equal(samples[0].values, [5.0, np.nan, 7.0])


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_ucr(tmp_path / "nope.txt")


def test_non_numeric_label(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_text("a 1 2 3\n")
    with pytest.raises(ValueError, match="label"):
        load_ucr(path)
