"""
Unknown-word fallback for Jiezi.

Runs of single characters that the dictionary cannot explain are handed
to a fallback segmenter. Any statistical recognizer can be plugged in by
implementing ``segment``; the default keeps ASCII words together and
splits everything else per character.
"""

import re
from abc import ABC, abstractmethod
from typing import Callable, List, Union

RE_ALNUM = re.compile(r"([a-zA-Z0-9]+(?:\.\d+)?%?)")


class UnknownWordSegmenter(ABC):
    """
    Segmenter for character runs absent from the dictionary.

    Implementations must accept any non-empty string and return tokens
    that concatenate back to it exactly.
    """

    @abstractmethod
    def segment(self, run: str) -> List[str]:
        """Split run into tokens."""

    def __call__(self, run: str) -> List[str]:
        return self.segment(run)


class CharacterFallback(UnknownWordSegmenter):
    """Keeps ASCII letter/digit runs whole, splits other text per character."""

    def segment(self, run: str) -> List[str]:
        tokens = []
        for piece in RE_ALNUM.split(run):
            if not piece:
                continue
            if RE_ALNUM.fullmatch(piece):
                tokens.append(piece)
            else:
                tokens.extend(piece)
        return tokens


class CallableFallback(UnknownWordSegmenter):
    """Wraps a plain function as a fallback segmenter."""

    def __init__(self, func: Callable[[str], List[str]]):
        self.func = func

    def segment(self, run: str) -> List[str]:
        return list(self.func(run))


FallbackLike = Union[UnknownWordSegmenter, Callable[[str], List[str]]]


def as_fallback(obj: FallbackLike = None) -> UnknownWordSegmenter:
    """
    Coerce obj into a fallback segmenter.

    Accepts None (the default CharacterFallback), an object with a
    ``segment`` method, or a callable.
    """
    if obj is None:
        return CharacterFallback()
    if isinstance(obj, UnknownWordSegmenter):
        return obj
    if hasattr(obj, "segment"):
        return CallableFallback(obj.segment)
    if callable(obj):
        return CallableFallback(obj)
    raise TypeError(f"Expected a segmenter or callable, got {type(obj).__name__}")
