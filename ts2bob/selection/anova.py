"""
ANOVA F-test feature selection on sparse bags.

The one-way F statistic follows ``sklearn.feature_selection.f_oneway``,
computed from per-class sums so that absent entries count as zeros without
materialising a dense sample-by-feature matrix.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

import numpy as np
import scipy.stats as st
from numba import njit
from numpy.typing import NDArray

from ..core.bag import BagOfBigrams
from ..core.dictionary import Dictionary
from .result import SelectionResult

logger = logging.getLogger(__name__)

# Features with an F statistic at or below this value are dropped
F_CUTOFF = 0.5


@njit(cache=True)
def _class_sums(indices, values, class_ids, n_features, n_classes):
    """Sum of squares over all samples and per-class sums of every feature."""
    ss_alldata = np.zeros(n_features)
    sums = np.zeros((n_classes, n_features))
    for k in range(indices.shape[0]):
        v = values[k]
        ss_alldata[indices[k]] += v * v
        sums[class_ids[k], indices[k]] += v
    return ss_alldata, sums


def f_oneway_sparse(
    n_features: int, classes: Dict[float, List[Dict[int, int]]]
) -> NDArray[np.float64]:
    """
    One-way ANOVA F statistic of every feature index.

    Parameters
    ----------
    n_features : int
        Length of the returned array; every index in ``classes`` must be
        smaller.
    classes : dict
        Maps each label to the samples of that class, each sample a mapping
        from feature index to count.

    Returns
    -------
    f : array (n_features,)
        F statistics. Degenerate features (no between-class or no
        within-class variance) come out as NaN or inf.
    """
    n_samples = sum(len(group) for group in classes.values())
    n_classes = len(classes)

    indices: List[int] = []
    values: List[float] = []
    class_ids: List[int] = []
    class_sizes = np.zeros(n_classes)
    for class_id, group in enumerate(classes.values()):
        class_sizes[class_id] = len(group)
        for sample in group:
            indices.extend(sample.keys())
            values.extend(sample.values())
            class_ids.extend([class_id] * len(sample))

    ss_alldata, sums = _class_sums(
        np.asarray(indices, dtype=np.int64),
        np.asarray(values, dtype=np.float64),
        np.asarray(class_ids, dtype=np.int64),
        n_features,
        n_classes,
    )

    square_of_sums_alldata = sums.sum(axis=0) ** 2
    square_of_sums_args = sums ** 2
    sstot = ss_alldata - square_of_sums_alldata / n_samples

    ssbn = (square_of_sums_args / class_sizes[:, None]).sum(axis=0)
    ssbn -= square_of_sums_alldata / n_samples
    sswn = sstot - ssbn

    dfbn = n_classes - 1
    dfwn = n_samples - n_classes
    with np.errstate(divide="ignore", invalid="ignore"):
        msb = ssbn / dfbn
        msw = sswn / dfwn
        f = msb / msw
    return f


def train_anova(
    bags: Sequence[BagOfBigrams],
    dictionary: Dictionary,
    p_value: Optional[float] = None,
) -> SelectionResult:
    """
    Zero out every feature that does not pass the ANOVA F-test.

    Each key is first mapped to its dictionary index (growing the dictionary
    as needed). A feature is kept if its F statistic is finite and greater
    than :data:`F_CUTOFF`, and, when ``p_value`` is given, its p-value is at
    most ``p_value``. Entries of dropped features are set to 0 in every bag;
    no entry is removed.

    Parameters
    ----------
    bags : sequence of BagOfBigrams
        Labelled bags; modified in place.
    dictionary : Dictionary
        Dictionary used to index the keys.
    p_value : float, optional
        Upper bound on the p-value of kept features.

    Returns
    -------
    SelectionResult
    """
    if len(bags) == 0:
        raise ValueError("train_anova needs at least one bag")

    highest_index = 0
    reverse_map: Dict[int, int] = {}
    classes: Dict[float, List[Dict[int, int]]] = {}
    for bag in bags:
        keys: Dict[int, int] = {}
        for key, count in bag.bob.items():
            index = dictionary.get_word_index(key)
            reverse_map[index] = key
            keys[index] = count
            highest_index = max(index, highest_index)
        classes.setdefault(bag.label, []).append(keys)

    n_samples = len(bags)
    n_classes = len(classes)
    f = f_oneway_sparse(highest_index + 1, classes)
    with np.errstate(invalid="ignore"):
        p = st.f.sf(f, n_classes - 1, n_samples - n_classes)

    # index 0 is never assigned by the dictionary
    selected = np.isfinite(f) & (f > F_CUTOFF)
    selected[0] = False
    if p_value is not None:
        selected &= p <= p_value

    scores: Dict[int, float] = {}
    p_values: Dict[int, float] = {}
    for index in np.flatnonzero(selected):
        key = reverse_map.get(int(index))
        if key is None:
            continue
        scores[key] = float(f[index])
        p_values[key] = float(p[index])
    best_words = set(scores)

    for bag in bags:
        for key in bag.bob:
            if key not in best_words:
                bag.bob[key] = 0

    result = SelectionResult(
        method="anova",
        kept=best_words,
        scores=scores,
        n_candidates=len(reverse_map),
        p_values=p_values,
    )
    logger.info(f"ANOVA selection over {n_classes} classes: {result}")
    return result
