"""Sparse feature matrices for the downstream classifier."""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np
from numpy.typing import NDArray
from scipy.sparse import csr_matrix

from .core.bag import BagOfBigrams
from .core.dictionary import Dictionary


def bags_to_csr(
    bags: Sequence[BagOfBigrams],
    dictionary: Dictionary,
    grow: bool = True,
) -> Tuple[csr_matrix, NDArray[np.float64]]:
    """
    Convert bags into a sample-by-feature count matrix.

    Column ``i - 1`` holds the feature with dictionary index ``i``. Only
    positive counts are used, so features zeroed by a selector never enter
    the matrix (nor the dictionary).

    Parameters
    ----------
    bags : sequence of BagOfBigrams
        Bags to convert.
    dictionary : Dictionary
        Feature index. With ``grow=True`` unseen keys get new indices
        (training); with ``grow=False`` they are ignored (prediction).
    grow : bool
        Whether to add unseen keys to the dictionary.

    Returns
    -------
    X : scipy.sparse.csr_matrix (n_samples, dictionary.size())
        Feature counts
    y : array (n_samples,)
        Labels, NaN for unlabelled bags
    """
    rows = []
    cols = []
    data = []
    for row, bag in enumerate(bags):
        for key, value in bag.bob.items():
            if value <= 0:
                continue
            index = dictionary.get_word_index(key) if grow else dictionary.get(key)
            if index is None:
                continue
            rows.append(row)
            cols.append(index - 1)
            data.append(value)

    X = csr_matrix(
        (np.asarray(data, dtype=np.float64), (np.asarray(rows, dtype=np.int64), np.asarray(cols, dtype=np.int64))),
        shape=(len(bags), dictionary.size()),
    )
    y = np.array([np.nan if bag.label is None else bag.label for bag in bags], dtype=np.float64)
    return X, y
