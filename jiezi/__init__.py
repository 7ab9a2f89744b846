"""
Jiezi: Chinese word segmentation
Dictionary DAG + maximum-probability path segmenter.
"""

import time
from typing import Optional, Tuple

from jiezi.dictionary import Dictionary
from jiezi.errors import DictionaryLoadError, InvalidStructure, JieziError, KeyNotFound
from jiezi.fallback import CharacterFallback, UnknownWordSegmenter
from jiezi.models import SegmentationResult, Token
from jiezi.script import ScriptMode
from jiezi.tokenizer import Tokenizer

__version__ = "0.1.0"

# Default session used by the module-level functions
dt = Tokenizer()


def warm_up(verbose: bool = False) -> Tuple[float, dict]:
    """
    Load the default dictionary and prime the resolution cache.

    Call this once at application startup to avoid first-call latency.

    Args:
        verbose: If True, print timing information.

    Returns:
        Tuple of (total_time_seconds, timing_details_dict)

    Example:
        >>> import jiezi
        >>> elapsed, details = jiezi.warm_up(verbose=True)
        Warming up jiezi...
          Dictionary:     812.4ms
          First cut:        3.1ms
        Total warm-up:    815.5ms
    """
    timings = {}
    total_start = time.perf_counter()

    if verbose:
        print("Warming up jiezi...")

    t0 = time.perf_counter()
    dt.initialize()
    timings['dictionary'] = (time.perf_counter() - t0) * 1000
    if verbose:
        print(f"  Dictionary:   {timings['dictionary']:>7.1f}ms")

    t0 = time.perf_counter()
    dt.lcut("我来到北京清华大学")
    timings['first_cut'] = (time.perf_counter() - t0) * 1000
    if verbose:
        print(f"  First cut:    {timings['first_cut']:>7.1f}ms")

    total_time = time.perf_counter() - total_start
    timings['total'] = total_time * 1000

    if verbose:
        print(f"Total warm-up:  {timings['total']:>7.1f}ms")

    return total_time, timings


def analyze(text: str, mode: str = "default", hmm: bool = True,
            tokenizer: Optional[Tokenizer] = None) -> SegmentationResult:
    """
    Segment text and return tokens with offsets.

    This is the main high-level API for text analysis.

    Args:
        text: Text to segment.
        mode: "default", or "search" for denser index tokens.
        hmm: Use the unknown-word fallback.
        tokenizer: Optional session. Defaults to the module tokenizer.

    Example:
        >>> result = jiezi.analyze("我来到北京清华大学")
        >>> result.words()
        ['我', '来到', '北京', '清华大学']
    """
    return (tokenizer or dt).analyze(text, mode=mode, hmm=hmm)


# Module-level API on the default tokenizer
initialize = dt.initialize
set_dictionary = dt.set_dictionary
load_userdict = dt.load_userdict
add_word = dt.add_word
del_word = dt.del_word
get_dag = dt.get_dag
calc = dt.calc
cut = dt.cut
lcut = dt.lcut
cut_for_search = dt.cut_for_search
lcut_for_search = dt.lcut_for_search
tokenize = dt.tokenize


__all__ = [
    "Dictionary", "Tokenizer", "ScriptMode", "Token", "SegmentationResult",
    "UnknownWordSegmenter", "CharacterFallback",
    "JieziError", "DictionaryLoadError", "KeyNotFound", "InvalidStructure",
    "warm_up", "analyze", "initialize", "set_dictionary", "load_userdict",
    "add_word", "del_word", "get_dag", "calc", "cut", "lcut",
    "cut_for_search", "lcut_for_search", "tokenize",
]
