"""
Maximum-probability path search over a word graph.
"""

from typing import Dict, Tuple

from jiezi.dag import DAG
from jiezi.freq import FrequencyModel

Route = Dict[int, Tuple[int, float]]


def calc(model: FrequencyModel, sentence: str, dag: DAG) -> Route:
    """
    Find the best segmentation path by dynamic programming.

    Walks the sentence backwards. For each start index the score of an
    edge i..x is the log-probability of sentence[i:x+1] (the floor
    probability for non-words) plus the best score from x+1 onwards.

    Ties keep the edge listed first in the DAG, i.e. the smallest end
    index, so output is reproducible for equal-scoring paths.

    Args:
        model: Frequency model providing log-probabilities.
        sentence: The sentence the DAG was built for.
        dag: Word graph from get_dag.

    Returns:
        Mapping of index to (best end index, cumulative log-probability),
        including the terminal entry route[N] = (N, 0.0).
    """
    n = len(sentence)
    log_prob = model.log_prob
    route: Route = {n: (n, 0.0)}

    for i in range(n - 1, -1, -1):
        best_end = -1
        best_prob = 0.0
        for x in dag[i]:
            prob = route[x + 1][1] + log_prob(sentence[i:x + 1])
            if best_end < 0 or prob > best_prob:
                best_end = x
                best_prob = prob
        route[i] = (best_end, best_prob)

    return route
