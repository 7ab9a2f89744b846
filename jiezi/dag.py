"""
Word graph construction for Jiezi.

For a sentence of N characters, the DAG maps every start index to the
ascending list of end indices at which a dictionary word ends.
"""

from typing import Dict, List

from jiezi.dictionary import Dictionary

DAG = Dict[int, List[int]]


def get_dag(dictionary: Dictionary, sentence: str) -> DAG:
    """
    Build the word graph of a sentence.

    From each start index the fragment is extended one character at a
    time while it is still a trie path; every fragment that completes a
    word adds an edge. The first fragment that is not a trie path ends
    the scan for that start, since no longer fragment can match.

    Args:
        dictionary: Dictionary to look fragments up in.
        sentence: Text to analyze.

    Returns:
        Mapping of start index to end indices (inclusive). An index with
        no word starting at it maps to itself.

    Example:
        >>> get_dag(d, "研究生命")  # with 研究, 研究生, 生命
        {0: [1, 2], 1: [1], 2: [3], 3: [3]}
    """
    resolve = dictionary.resolve
    n = len(sentence)
    dag: DAG = {}

    for i in range(n):
        ends = []
        j = i
        while j < n:
            exists, is_word = resolve(sentence[i:j + 1])
            if not exists:
                break
            if is_word:
                ends.append(j)
            j += 1
        dag[i] = ends or [i]

    return dag
