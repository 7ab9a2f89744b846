"""
Segmentation strategies for dictionary-script blocks.

Each strategy takes one block of dictionary-script text and returns its
tokens:

- cut_all: every dictionary word found in the block, overlapping.
- cut_dag: best path, unknown runs sent to the fallback segmenter.
- cut_dag_no_hmm: best path, ASCII pieces glued back together.
"""

from typing import List

from jiezi.dag import get_dag
from jiezi.dictionary import Dictionary
from jiezi.fallback import UnknownWordSegmenter
from jiezi.route import calc
from jiezi.script import RE_ENG


def cut_all(dictionary: Dictionary, sentence: str) -> List[str]:
    """
    Full enumeration: emit every word edge of the DAG.

    A start index with a single edge is emitted only when it begins past
    the last emitted end; otherwise all its multi-character edges that
    reach past that end are emitted.
    """
    words = []
    with dictionary.lock:
        dag = get_dag(dictionary, sentence)

    old_j = -1
    for k in range(len(sentence)):
        ends = dag[k]
        if len(ends) == 1 and k > old_j:
            words.append(sentence[k:ends[0] + 1])
            old_j = ends[0]
        else:
            for j in ends:
                if j > k:
                    words.append(sentence[k:j + 1])
                    old_j = j
    return words


def _flush(dictionary: Dictionary, fallback: UnknownWordSegmenter, buf: str) -> List[str]:
    """Tokens for a run of single characters collected along the route."""
    if len(buf) == 1:
        return [buf]
    if not dictionary.is_word(buf):
        return list(fallback.segment(buf))
    # The route preferred single characters over this word, keep them split
    return list(buf)


def cut_dag(dictionary: Dictionary, sentence: str,
            fallback: UnknownWordSegmenter) -> List[str]:
    """
    Best-path segmentation with unknown-word fallback.

    Consecutive single-character steps of the route are merged into a
    buffer; a buffer that is not itself a known word goes to the
    fallback segmenter.
    """
    with dictionary.lock:
        dag = get_dag(dictionary, sentence)
        route = calc(dictionary.model, sentence, dag)

        words = []
        buf = ""
        n = len(sentence)
        x = 0
        while x < n:
            y = route[x][0] + 1
            l_word = sentence[x:y]
            if y - x == 1:
                buf += l_word
            else:
                if buf:
                    words.extend(_flush(dictionary, fallback, buf))
                    buf = ""
                words.append(l_word)
            x = y

        if buf:
            words.extend(_flush(dictionary, fallback, buf))

    return words


def cut_dag_no_hmm(dictionary: Dictionary, sentence: str) -> List[str]:
    """
    Best-path segmentation without the fallback.

    Consecutive route steps that contain an ASCII letter, digit, "+" or
    "#" are joined into one token, so "T恤" followed by "ab" comes out
    as "T恤ab"; everything else is emitted as routed.
    """
    with dictionary.lock:
        dag = get_dag(dictionary, sentence)
        route = calc(dictionary.model, sentence, dag)

    words = []
    buf = ""
    n = len(sentence)
    x = 0
    while x < n:
        y = route[x][0] + 1
        l_word = sentence[x:y]
        if RE_ENG.search(l_word):
            buf += l_word
        else:
            if buf:
                words.append(buf)
                buf = ""
            words.append(l_word)
        x = y

    if buf:
        words.append(buf)
    return words
