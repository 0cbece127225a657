"""
Chi-squared feature selection on sparse bags.

Follows ``sklearn.feature_selection.chi2``, counting the number of samples in
which a feature occurs: for each class, the observed number of samples of
that class containing the feature is compared with the number expected under
independence, ``P(class) * (samples containing the feature)``.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..core.bag import BagOfBigrams
from .result import SelectionResult

logger = logging.getLogger(__name__)


def _top_k(scores: Dict[int, float], limit: int) -> Dict[int, float]:
    """
    Best ``limit`` features by statistic (ties broken by smaller key).

    Features tied with the last kept statistic are kept as well.
    """
    ranked: List[Tuple[int, float]] = sorted(scores.items(), key=lambda kv: (-kv[1], kv[0]))
    if len(ranked) <= limit:
        return dict(ranked)
    cutoff = ranked[limit - 1][1]
    return {key: value for i, (key, value) in enumerate(ranked) if i < limit or value == cutoff}


def train_chi_squared(
    bags: Sequence[BagOfBigrams],
    chi_limit: float,
    limit: Optional[int] = None,
) -> SelectionResult:
    """
    Zero out every feature whose chi-squared statistic stays below ``chi_limit``.

    A feature is kept as soon as one class yields a statistic that is
    positive and at least ``chi_limit``; the statistic of that first class is
    recorded. Classes are visited in order of first appearance. Features with
    zero expected frequency never qualify.

    Parameters
    ----------
    bags : sequence of BagOfBigrams
        Labelled bags; modified in place (entries are zeroed, not removed).
    chi_limit : float
        Critical value of the statistic.
    limit : int, optional
        Keep at most this many features (plus ties), best statistic first.

    Returns
    -------
    SelectionResult
    """
    if len(bags) == 0:
        raise ValueError("train_chi_squared needs at least one bag")
    if limit is not None and limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")

    # number of samples containing each feature, overall and per class
    feature_count: Dict[int, int] = {}
    observed: Dict[float, Dict[int, int]] = {}
    class_count: Dict[float, int] = {}
    for bag in bags:
        class_count[bag.label] = class_count.get(bag.label, 0) + 1
        obs = observed.setdefault(bag.label, {})
        for key, value in bag.bob.items():
            if value > 0:
                feature_count[key] = feature_count.get(key, 0) + 1
                obs[key] = obs.get(key, 0) + 1

    keys = np.fromiter(feature_count.keys(), dtype=np.uint64, count=len(feature_count))
    totals = np.fromiter(feature_count.values(), dtype=np.float64, count=len(feature_count))

    chi_square: Dict[int, float] = {}
    retained = np.zeros(len(keys), dtype=bool)
    for label, n_class in class_count.items():
        prob = n_class / len(bags)
        obs = observed[label]
        counts = np.fromiter(
            (obs.get(key, 0) for key in feature_count), dtype=np.float64, count=len(keys)
        )
        expected = prob * totals
        with np.errstate(divide="ignore", invalid="ignore"):
            chi = counts - expected
            statistic = chi * chi / expected

        # NaN and inf fail the comparisons below
        qualifies = (statistic > 0) & (statistic >= chi_limit) & np.isfinite(statistic) & ~retained
        for i in np.flatnonzero(qualifies):
            chi_square[int(keys[i])] = float(statistic[i])
        retained |= qualifies

    if limit is not None:
        chi_square = _top_k(chi_square, limit)

    for bag in bags:
        for key in bag.bob:
            if key not in chi_square:
                bag.bob[key] = 0

    result = SelectionResult(
        method="chi2",
        kept=set(chi_square),
        scores=chi_square,
        n_candidates=len(feature_count),
    )
    logger.info(f"Chi-squared selection (limit={chi_limit}): {result}")
    return result
