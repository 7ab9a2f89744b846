"""
Tests for dag.py and route.py - word graph and best path search.
"""

import math

import pytest

from jiezi.dag import get_dag
from jiezi.route import calc

from tests.conftest import make_dictionary

SCENARIO_A = [("研究", 10), ("研究生", 8), ("生命", 6)]


class FixedModel:
    """Model stub with hand-picked log-probabilities."""

    def __init__(self, probs, floor=-10.0):
        self.probs = probs
        self.floor = floor

    def log_prob(self, word):
        return self.probs.get(word, self.floor)


class TestDag:
    """Tests for get_dag."""

    def test_scenario_a_graph(self):
        d = make_dictionary(SCENARIO_A)
        assert get_dag(d, "研究生命") == {0: [1, 2], 1: [1], 2: [3], 3: [3]}

    def test_empty_sentence(self):
        d = make_dictionary(SCENARIO_A)
        assert get_dag(d, "") == {}

    def test_unknown_text_self_loops(self):
        d = make_dictionary(SCENARIO_A)
        assert get_dag(d, "abc") == {0: [0], 1: [1], 2: [2]}

    @pytest.mark.parametrize("sentence", [
        "研究生命", "我来到北京清华大学", "清华大学生命研究", "x研究y", "北京北京",
    ])
    def test_every_index_has_edges_in_range(self, sample_dictionary, sentence):
        dag = get_dag(sample_dictionary, sentence)
        n = len(sentence)
        assert sorted(dag) == list(range(n))
        for i, ends in dag.items():
            assert ends
            assert ends == sorted(ends)
            assert all(i <= x < n for x in ends)

    def test_edges_are_words(self, sample_dictionary):
        sentence = "我来到北京清华大学"
        dag = get_dag(sample_dictionary, sentence)
        assert dag[5] == [5, 6, 8]
        for i, ends in dag.items():
            for x in ends:
                assert sample_dictionary.is_word(sentence[i:x + 1])

    def test_memo_shared_across_calls(self):
        d = make_dictionary(SCENARIO_A)
        get_dag(d, "研究生命")
        assert d.resolution_cache["研究生"] == (True, True)
        assert d.resolution_cache["研究生命"] == (False, False)
        get_dag(d, "研究")
        assert d.resolution_cache["研究"] == (True, True)


class TestRoute:
    """Tests for calc."""

    def test_terminal_entry(self):
        d = make_dictionary(SCENARIO_A)
        route = calc(d.model, "研究生命", get_dag(d, "研究生命"))
        assert route[4] == (4, 0.0)
        assert sorted(route) == [0, 1, 2, 3, 4]

    def test_empty_sentence(self):
        d = make_dictionary(SCENARIO_A)
        assert calc(d.model, "", {}) == {0: (0, 0.0)}

    def test_scenario_a_probabilities(self):
        """研究/生命 beats 研究生/命 for 10, 8, 6 over a total of 24."""
        d = make_dictionary(SCENARIO_A)
        route = calc(d.model, "研究生命", get_dag(d, "研究生命"))

        floor = math.log(6 / 24)
        split_short = math.log(10 / 24) + math.log(6 / 24)
        split_long = math.log(8 / 24) + floor
        assert split_short > split_long

        assert route[3] == (3, pytest.approx(floor))
        assert route[2] == (3, pytest.approx(math.log(6 / 24)))
        assert route[0][0] == 1
        assert route[0][1] == pytest.approx(split_short)

    def test_tie_goes_to_first_edge(self):
        model = FixedModel({"甲": -1.0, "乙": -1.0, "甲乙": -2.0})
        route = calc(model, "甲乙", {0: [0, 1], 1: [1]})
        assert route[0] == (0, -2.0)

    def test_better_later_edge_wins(self):
        model = FixedModel({"甲": -1.0, "乙": -1.0, "甲乙": -1.5})
        route = calc(model, "甲乙", {0: [0, 1], 1: [1]})
        assert route[0] == (1, -1.5)

    def test_all_unknown_text_uses_floor(self):
        d = make_dictionary(SCENARIO_A)
        route = calc(d.model, "鬼灭", get_dag(d, "鬼灭"))
        assert route[0] == (0, pytest.approx(2 * d.min_freq))
