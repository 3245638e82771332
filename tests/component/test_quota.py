import sys
import os
import random
import itertools
from fractions import Fraction

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import kingmaker.component.quota as q

VOTES = [1, 2, 5, 100, 5, 1000, 42, 15000]
SEATS = [1, 1, 1, 1, 2, 2, 42, 200]

random.seed(1711)
for i in range(15):
    n_votes = random.randint(1, 100000)
    n_seats = random.randint(1, 100)
    VOTES.append(n_votes)
    SEATS.append(n_seats)


@pytest.mark.parametrize(
    ('n_votes', 'n_seats', 'quota_name'),
    [vs + (q,) for vs, q in itertools.product(
        list(zip(VOTES, SEATS)), q.QUOTAS.keys()
    )]
)
def test_quota_bounds(n_votes, n_seats, quota_name):
    quota = q.get(quota_name)(n_votes, n_seats)
    assert 0 < quota <= n_votes + 1
    assert quota * n_seats <= n_votes + n_seats


@pytest.mark.parametrize(('n_votes', 'n_seats', 'expected'), [
    (100, 1, 51),
    (100, 2, 34),
    (5, 1, 3),
    (4, 1, 3),
    (10, 3, 3),
])
def test_droop(n_votes, n_seats, expected):
    assert q.droop(n_votes, n_seats) == expected


def test_unrounded():
    assert q.hare(10, 3) == Fraction(10, 3)
    assert q.hagenbach_bischoff(10, 3) == Fraction(5, 2)


def test_construct():
    assert q.construct('droop') is q.droop
    assert q.construct(q.hare) is q.hare
    assert q.construct(q.constant(7))(100, 2) == 7


def test_unknown():
    with pytest.raises(KeyError):
        q.get('imperiali_plus_something')
