"""Dense integer indices for bag-of-bigrams keys."""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Sequence

from .bag import BagOfBigrams


class Dictionary:
    """
    Maps each key to an integer index.

    Indices are assigned on first sight as ``size() + 1``, so they form the
    contiguous range ``1..size()``. Entries are never removed except by
    :meth:`reset`.
    """

    def __init__(self):
        self.dict: Dict[int, int] = {}

    def reset(self) -> None:
        self.dict = {}

    def get_word_index(self, word: int) -> int:
        """Index of ``word``, assigning the next free index if it is new."""
        index = self.dict.get(word)
        if index is None:
            index = len(self.dict) + 1
            self.dict[word] = index
        return index

    def get(self, word: int) -> Optional[int]:
        """Index of ``word`` or None, without assigning one."""
        return self.dict.get(word)

    def size(self) -> int:
        return len(self.dict)

    def filter_chi_squared(self, bag_of_patterns: Sequence[BagOfBigrams]) -> None:
        """
        Drop every entry whose key is unknown or whose count is not positive.

        Rebuilds each bag's histogram in place; used to prune bags that were
        built after the dictionary was trained (e.g. at prediction time).
        """
        for bag in bag_of_patterns:
            bag.bob = {
                key: value
                for key, value in bag.bob.items()
                if key in self.dict and value > 0
            }

    def __len__(self) -> int:
        return len(self.dict)

    def __contains__(self, word: int) -> bool:
        return word in self.dict

    def __iter__(self) -> Iterator[int]:
        return iter(self.dict)
