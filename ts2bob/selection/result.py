"""Outcome of a feature selection run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Set


@dataclass
class SelectionResult:
    """
    Features kept by a selector.

    Attributes
    ----------
    method : str
        Selector name ("anova" or "chi2")
    kept : set of int
        Keys that survived selection
    scores : dict
        Test statistic of every kept key
    n_candidates : int
        Number of distinct keys seen by the selector
    p_values : dict
        p-value of every kept key (ANOVA only)
    """

    method: str
    kept: Set[int]
    scores: Dict[int, float]
    n_candidates: int
    p_values: Dict[int, float] = field(default_factory=dict)

    @property
    def n_kept(self) -> int:
        return len(self.kept)

    def __contains__(self, key: int) -> bool:
        return key in self.kept

    def __str__(self) -> str:
        return f"{self.method}: kept {self.n_kept} of {self.n_candidates} features"

    def summary(self) -> Dict[str, Any]:
        """Return a dictionary summary of the result."""
        return {
            "method": self.method,
            "n_candidates": self.n_candidates,
            "n_kept": self.n_kept,
        }
