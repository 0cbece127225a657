"""Labelled time series samples."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class TimeSeries:
    """
    A single labelled time series.

    The values are copied into a read-only float64 array on construction.
    Labels are real numbers standing in for class identifiers; ``None`` marks
    an unlabelled sample (e.g. at prediction time).
    """

    values: NDArray[np.float64]
    label: Optional[float] = None

    def __post_init__(self):
        values = np.array(self.values, dtype=np.float64).ravel()
        values.setflags(write=False)
        object.__setattr__(self, "values", values)
        if self.label is not None:
            object.__setattr__(self, "label", float(self.label))

    @property
    def length(self) -> int:
        return int(self.values.shape[0])

    def __len__(self) -> int:
        return self.length


def as_samples(X: Sequence, y: Optional[Sequence] = None) -> list[TimeSeries]:
    """
    Wrap raw arrays (and optional labels) as :class:`TimeSeries` samples.

    Samples that already are :class:`TimeSeries` are passed through.
    """
    if y is not None and len(y) != len(X):
        raise ValueError(f"X and y must have the same length, got {len(X)} and {len(y)}")
    samples = []
    for i, x in enumerate(X):
        if isinstance(x, TimeSeries):
            samples.append(x)
        else:
            samples.append(TimeSeries(x, None if y is None else y[i]))
    return samples
