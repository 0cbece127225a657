"""Quick Start Example

This example extracts WEASEL features from synthetic two-class data.
"""

import sys
import os
# Add parent directory to path for development
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
import logging
from ts2bob import WEASEL, SelectionConfig, as_samples, bags_to_csr, decode_key

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)

# Sine waves (class 0) against square waves (class 1)
rng = np.random.default_rng(42)
t = np.linspace(0, 6 * np.pi, 128)
X, y = [], []
for i in range(20):
    phase = rng.uniform(0, np.pi)
    X.append(np.sin(t + phase) + 0.2 * rng.standard_normal(t.size))
    y.append(0)
    X.append(np.sign(np.sin(t + phase)) + 0.2 * rng.standard_normal(t.size))
    y.append(1)
samples = as_samples(X, y)

logger.info("ts2bob Quick Start\n")

model = WEASEL(max_word_length=4, alphabet_size=4, window_lengths=[8, 16, 32])

logger.info("Chi-squared selection")
bags, result = model.fit_transform(samples, selection=SelectionConfig(method="chi2", chi_limit=2.0))
logger.info("%s", result)

best = sorted(result.scores.items(), key=lambda kv: -kv[1])[:5]
for key, score in best:
    window_index, word, prev_word = decode_key(key)
    logger.info(
        "window=%d word=%d prev=%s chi2=%.2f",
        model.window_lengths[window_index], word, prev_word, score,
    )

logger.info("\nFeature matrix")
X_train, y_train = bags_to_csr(bags, model.dict, grow=False)
logger.info("Shape: %s, non-zeros: %d", X_train.shape, X_train.nnz)

logger.info("\nANOVA selection")
bags, result = model.fit_transform(samples, selection=SelectionConfig(method="anova"))
logger.info("%s", result)
