"""Tests for transition rules."""

import numpy as np
import pytest

from termlife.core.rules import CONWAY, Rule


class TestConwayRule:
    """Test the standard B3/S23 rule."""

    @pytest.mark.parametrize(
        "alive,neighbors,expected",
        [
            (True, 0, False),
            (True, 1, False),
            (True, 2, True),
            (True, 3, True),
            (True, 4, False),
            (True, 8, False),
            (False, 2, False),
            (False, 3, True),
            (False, 4, False),
            (False, 0, False),
        ],
    )
    def test_next_state(self, alive, neighbors, expected):
        assert CONWAY.next_state(alive, neighbors) is expected

    def test_apply_matches_next_state(self):
        """Test that the array form agrees with the single cell form for every input."""
        cells = np.array([[1] * 9, [0] * 9], dtype=np.int8)
        counts = np.array([list(range(9)), list(range(9))], dtype=np.int8)

        result = CONWAY.apply(cells, counts)

        for row in range(2):
            for n in range(9):
                assert bool(result[row, n]) == CONWAY.next_state(bool(cells[row, n]), n)

    def test_apply_leaves_inputs_untouched(self):
        cells = np.array([[1, 0], [0, 1]], dtype=np.int8)
        counts = np.array([[0, 3], [3, 0]], dtype=np.int8)

        result = CONWAY.apply(cells, counts)

        assert result.tolist() == [[0, 1], [1, 0]]
        assert cells.tolist() == [[1, 0], [0, 1]]

    def test_repr(self):
        assert repr(CONWAY) == "Rule('Conway', B3/S23)"

    def test_custom_rule(self):
        highlife = Rule("HighLife", birth=frozenset({3, 6}), survival=frozenset({2, 3}))
        assert highlife.next_state(False, 6)
        assert not CONWAY.next_state(False, 6)
