import sys
import os
from fractions import Fraction

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import kingmaker.component.rankscore as rs


@pytest.mark.parametrize(('base', 'n_ranked', 'expected'), [
    (1, 3, [3, 2, 1]),
    (0, 3, [2, 1, 0]),
    (1, 1, [1]),
    (0, 1, [0]),
    (1, 0, []),
    (2, 4, [5, 4, 3, 2]),
])
def test_borda(base, n_ranked, expected):
    assert rs.Borda(base=base).scores(n_ranked) == expected


def test_dowdall():
    assert rs.Dowdall().scores(3) == [1, Fraction(1, 2), Fraction(1, 3)]


def test_construct_by_name():
    assert isinstance(rs.construct('borda'), rs.Borda)
    assert isinstance(rs.construct('dowdall'), rs.Dowdall)
    scorer = rs.Borda(base=0)
    assert rs.construct(scorer) is scorer


def test_registered():
    assert set(rs.RANK_SCORERS.keys()) == {'borda', 'dowdall'}
    with pytest.raises(KeyError):
        rs.get('eurovision')


def test_serialization():
    assert rs.Borda(base=0).to_dict() == {
        'class': 'kingmaker.component.rankscore.Borda',
        'base': 0,
    }
