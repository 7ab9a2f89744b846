"""
Word frequency model for Jiezi.

Keeps raw counts and the total mass, and derives natural-log
probabilities from them on demand.
"""

import math
from typing import Dict, Iterator, Optional

from jiezi.settings import MIN_FLOAT


class FrequencyModel:
    """
    Raw word counts and the log-probabilities derived from them.

    The total mass is always the exact sum of the current counts.
    Log-probabilities are rebuilt lazily after any change.
    """

    def __init__(self):
        self.original_freq: Dict[str, float] = {}
        self.total: float = 0.0
        self._log_freq: Dict[str, float] = {}
        self._min_freq: float = MIN_FLOAT
        self._dirty = False

    def __repr__(self):
        return f"<FrequencyModel words={len(self.original_freq)} total={self.total}>"

    def __contains__(self, word) -> bool:
        return word in self.original_freq

    def __len__(self) -> int:
        return len(self.original_freq)

    def __iter__(self) -> Iterator[str]:
        return iter(self.original_freq)

    def add_or_update(self, word: str, freq: float) -> None:
        """
        Set a word's count, replacing any previous count.

        Args:
            word: The word.
            freq: Non-negative raw count.

        Raises:
            ValueError: If freq is negative or not a number.
        """
        freq = float(freq)
        if freq < 0 or math.isnan(freq):
            raise ValueError(f"Invalid frequency for {word!r}: {freq}")

        old = self.original_freq.get(word)
        if old is not None:
            self.total -= old

        self.original_freq[word] = freq
        self.total += freq
        self._dirty = True

    def remove(self, word: str) -> bool:
        """Forget a word. Returns True if it was known."""
        old = self.original_freq.pop(word, None)
        if old is None:
            return False
        self.total -= old
        self._dirty = True
        return True

    def frequency(self, word: str) -> Optional[float]:
        """Raw count of a word, or None."""
        return self.original_freq.get(word)

    def recompute(self) -> None:
        """Rebuild every log-probability and the floor probability."""
        log_freq = {}
        positive = []
        total = self.total
        for word, freq in self.original_freq.items():
            if freq > 0 and total > 0:
                value = math.log(freq / total)
                positive.append(value)
            else:
                value = MIN_FLOAT
            log_freq[word] = value

        self._log_freq = log_freq
        self._min_freq = min(positive) if positive else MIN_FLOAT
        self._dirty = False

    def _ensure(self) -> None:
        if self._dirty:
            self.recompute()

    @property
    def min_freq(self) -> float:
        """Lowest log-probability of any word with a positive count."""
        self._ensure()
        return self._min_freq

    def log_prob(self, word: str) -> float:
        """Log-probability of word, or the floor if it is unknown."""
        self._ensure()
        return self._log_freq.get(word, self._min_freq)
