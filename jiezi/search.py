"""
Search-oriented expansion of a token stream.
"""

from typing import Iterable, Iterator, Tuple

from jiezi.dictionary import Dictionary


def iter_grams(dictionary: Dictionary, word: str) -> Iterator[Tuple[str, int]]:
    """
    Yield (gram, offset) for the known bigrams, then trigrams, inside word.

    Bigrams are only considered for words longer than 2 characters and
    trigrams for words longer than 3.
    """
    n = len(word)
    if n > 2:
        for i in range(n - 1):
            gram2 = word[i:i + 2]
            if dictionary.is_word(gram2):
                yield gram2, i
    if n > 3:
        for i in range(n - 2):
            gram3 = word[i:i + 3]
            if dictionary.is_word(gram3):
                yield gram3, i


def expand_for_search(dictionary: Dictionary, words: Iterable[str]) -> Iterator[str]:
    """
    Densify a token stream for indexing.

    Each token is preceded by the dictionary words it contains.

    Example:
        >>> list(expand_for_search(d, ["中华人民共和国"]))
        ['中华', '华人', '人民', '共和', '共和国', '中华人民共和国']
    """
    for word in words:
        for gram, _ in iter_grams(dictionary, word):
            yield gram
        yield word
