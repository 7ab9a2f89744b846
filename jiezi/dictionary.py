"""
Dictionary context for Jiezi.

Bundles the trie store, the frequency model and the fragment resolution
cache behind one lock, so that several independent dictionaries can
live in the same process.
"""

import threading
from typing import Dict, Iterable, Optional, Tuple

from jiezi.freq import FrequencyModel
from jiezi.settings import DEFAULT_USER_FREQ
from jiezi.trie import DictionaryStore


class Dictionary:
    """
    A segmentation dictionary: trie structure plus word frequencies.

    Mutations and segmentation both take ``lock``; every mutation
    clears the resolution cache.
    """

    def __init__(self, store: Optional[DictionaryStore] = None,
                 model: Optional[FrequencyModel] = None,
                 name: Optional[str] = None):
        self.store = store if store is not None else DictionaryStore()
        self.model = model if model is not None else FrequencyModel()
        self.name = name
        self.lock = threading.RLock()
        self.resolution_cache: Dict[str, Tuple[bool, bool]] = {}
        self._cache_stamp = (id(self.store), self.store.version)

    def __repr__(self):
        return f"<Dictionary name={self.name!r} words={len(self.model)}>"

    def __contains__(self, word) -> bool:
        return word in self.model

    def __len__(self) -> int:
        return len(self.model)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def resolve(self, fragment: str) -> Tuple[bool, bool]:
        """
        Look up a character fragment in the trie.

        Results are memoized per fragment until the next mutation of the
        dictionary or its store.

        Returns:
            (exists, is_word): whether the fragment is a trie path, and
            whether it completes a word.
        """
        stamp = (id(self.store), self.store.version)
        if stamp != self._cache_stamp:
            # store mutated directly or replaced
            self.resolution_cache.clear()
            self._cache_stamp = stamp

        hit = self.resolution_cache.get(fragment)
        if hit is None:
            hit = self.store.resolve(tuple(fragment))
            self.resolution_cache[fragment] = hit
        return hit

    def is_word(self, word: str) -> bool:
        """True if word has a frequency entry."""
        return word in self.model

    def log_prob(self, word: str) -> float:
        return self.model.log_prob(word)

    @property
    def min_freq(self) -> float:
        return self.model.min_freq

    @property
    def total(self) -> float:
        return self.model.total

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def reset_cache(self) -> None:
        with self.lock:
            self.resolution_cache.clear()

    def set_frequency(self, word: str, freq: float) -> None:
        """Set a word's count without touching the trie structure."""
        with self.lock:
            self.model.add_or_update(word, freq)
            self.resolution_cache.clear()

    def add_word(self, word: str, freq: Optional[float] = None) -> None:
        """
        Add a word, or update its count.

        Args:
            word: The word to add.
            freq: Raw count. Defaults to DEFAULT_USER_FREQ.
        """
        if not word:
            raise ValueError("Cannot add an empty word")
        if freq is None:
            freq = DEFAULT_USER_FREQ

        with self.lock:
            self.model.add_or_update(word, freq)
            self.store.insert_word(word)
            self.resolution_cache.clear()

    def del_word(self, word: str) -> bool:
        """
        Remove a word's count and its trie terminal marker.

        Returns:
            True if anything was removed.
        """
        with self.lock:
            known = self.model.remove(word)
            marked = self.store.remove_word(word)
            self.resolution_cache.clear()
            return known or marked

    def update(self, entries: Iterable[Tuple[str, float]], mark_words: bool = True) -> int:
        """
        Add many (word, freq) pairs, rebuilding probabilities once.

        Args:
            entries: Pairs of word and raw count (None for the default).
            mark_words: Also mark each word as terminal in the trie.

        Returns:
            Number of entries processed.
        """
        count = 0
        with self.lock:
            for word, freq in entries:
                if freq is None:
                    freq = DEFAULT_USER_FREQ
                self.model.add_or_update(word, freq)
                if mark_words:
                    self.store.insert_word(word)
                count += 1
            self.model.recompute()
            self.resolution_cache.clear()
        return count
