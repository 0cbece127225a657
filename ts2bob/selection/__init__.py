"""Statistical feature selection for bags of bigrams."""

from .anova import F_CUTOFF, f_oneway_sparse, train_anova
from .chi2 import train_chi_squared
from .result import SelectionResult

__all__ = [
    "F_CUTOFF",
    "SelectionResult",
    "f_oneway_sparse",
    "train_anova",
    "train_chi_squared",
]
