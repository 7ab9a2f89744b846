"""
Shared fixtures for jiezi tests.

Dictionaries are written into tmp_path so the tests never depend on a
bundled dictionary file.
"""

import pytest

from jiezi.dictionary import Dictionary
from jiezi.tokenizer import Tokenizer

# Small frequency list covering 我来到北京清华大学 and friends
SAMPLE_WORDS = [
    ("我", 100), ("来到", 50), ("北京", 80), ("清华", 30), ("清华大学", 40),
    ("大学", 60), ("华大", 2), ("来", 20), ("到", 20), ("北", 10),
    ("京", 10), ("清", 5), ("华", 5), ("大", 30), ("学", 20),
    ("手机", 15), ("世界", 25),
]


def write_dict(path, entries):
    """Write (word, freq) pairs in dictionary format; freq None omits it."""
    lines = []
    for word, freq in entries:
        lines.append(word if freq is None else f"{word} {freq}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def make_dictionary(entries):
    """In-memory Dictionary with every word marked in the trie."""
    d = Dictionary(name="test")
    d.update(entries)
    return d


class RecordingFallback:
    """Fallback that records its input and returns preset tokens."""

    def __init__(self, result=None):
        self.calls = []
        self.result = result

    def segment(self, run):
        self.calls.append(run)
        if self.result is not None:
            return list(self.result)
        return list(run)


@pytest.fixture
def sample_dict_path(tmp_path):
    """Path of a main dictionary file built from SAMPLE_WORDS."""
    return write_dict(tmp_path / "dict.txt", SAMPLE_WORDS)


@pytest.fixture
def sample_dictionary():
    """In-memory Dictionary built from SAMPLE_WORDS."""
    return make_dictionary(SAMPLE_WORDS)


@pytest.fixture
def tokenizer(sample_dict_path):
    """Tokenizer over the sample dictionary file (no trie seed)."""
    return Tokenizer(sample_dict_path)


@pytest.fixture
def recording_fallback():
    return RecordingFallback()
