"""Loading labelled time series from UCR-style text files."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List

import numpy as np
import pandas as pd

from .core.timeseries import TimeSeries

logger = logging.getLogger(__name__)

_SEPARATOR = re.compile(r"[\s,]+")


def load_ucr(path: str | Path) -> List[TimeSeries]:
    """
    Load a UCR-format file: one series per line, class label first.

    Values may be separated by commas or whitespace. Series may differ in
    length. The trailing padding of short rows is dropped; missing or
    non-numeric values inside a series are kept as NaN.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    with open(path, 'r') as f:
        rows = [_SEPARATOR.split(line.strip()) for line in f if line.strip()]
    if not rows:
        raise ValueError(f"{path}: no series found")

    # ragged rows are padded with None
    frame = pd.DataFrame(rows).apply(pd.to_numeric, errors='coerce')
    labels = frame.iloc[:, 0].to_numpy(dtype=np.float64)
    if np.isnan(labels).any():
        raise ValueError(f"{path}: every line must start with a numeric label")

    samples = []
    for label, values in zip(labels, frame.iloc[:, 1:].to_numpy(dtype=np.float64)):
        present = np.flatnonzero(~np.isnan(values))
        end = present[-1] + 1 if present.size else 0
        samples.append(TimeSeries(values[:end], label))

    logger.info(f"Loaded {len(samples)} series from {path}")
    return samples
