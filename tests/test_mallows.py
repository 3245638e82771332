import sys
import os
import math
import random
import itertools
import collections

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import kingmaker.candidate
import kingmaker.preference.core
import kingmaker.preference.mallows as mallows
from kingmaker.ballot import Ordinal
from kingmaker.candidate import Candidate

CANDS = [Candidate(i, name) for i, name in enumerate('ABCD')]


def kendall_tau(perm):
    return sum(
        1 for i, j in itertools.combinations(range(len(perm)), 2)
        if perm[i] > perm[j]
    )


@pytest.mark.parametrize(('n', 'expected'), [
    (1, (1, )),
    (2, (1, 1)),
    (3, (1, 2, 2, 1)),
    (4, (1, 3, 5, 6, 5, 3, 1)),
])
def test_inversion_table(n, expected):
    assert mallows.inversion_table(n) == expected


@pytest.mark.parametrize('n', range(1, 9))
def test_inversion_table_sums_to_factorial(n):
    assert sum(mallows.inversion_table(n)) == math.factorial(n)


def test_count_permutations():
    assert mallows.count_permutations(0, 0) == 0
    assert mallows.count_permutations(5, 0) == 1
    assert mallows.count_permutations(4, 3) == 6
    assert mallows.count_permutations(4, 7) == 0
    assert mallows.count_permutations(4, -1) == 0
    # no exponential blowup on larger sizes
    assert mallows.count_permutations(40, 300) > 0


@pytest.mark.parametrize(('vector', 'expected'), [
    ([0, 0, 0], [0, 1, 2]),
    ([2, 1, 0], [2, 1, 0]),
    ([1, 0, 0], [1, 0, 2]),
    ([0, 1, 0], [0, 2, 1]),
])
def test_decomposition_to_permutation(vector, expected):
    assert mallows.decomposition_to_permutation(vector) == expected


@pytest.mark.parametrize(('n', 'k'), [(1, 0), (3, 0), (3, 3), (5, 4), (6, 15)])
def test_sampled_permutation_distance(n, k):
    rng = random.Random(n * 100 + k)
    for i in range(50):
        perm = mallows.sample_permutation(n, k, rng)
        assert sorted(perm) == list(range(n))
        assert kendall_tau(perm) == k


def test_sample_decomposition_invalid():
    with pytest.raises(ValueError):
        mallows.sample_decomposition(3, 4, random.Random(0))


def test_permutations_uniform_at_fixed_distance():
    rng = random.Random(1234)
    drawn = collections.Counter(
        tuple(mallows.sample_permutation(4, 3, rng)) for i in range(6000)
    )
    # six permutations of four items have three inversions
    assert len(drawn) == 6
    assert all(800 < count < 1200 for count in drawn.values())


def test_zero_phi_is_uniform():
    model = mallows.Mallows([0, 1, 2], 0)
    rng = random.Random(2024)
    drawn = collections.Counter(
        model.draw(CANDS[:3], rng) for i in range(6000)
    )
    assert len(drawn) == 6
    expected = 1000
    chi_square = sum(
        (count - expected) ** 2 / expected for count in drawn.values()
    )
    # 99.9th percentile of chi-square with 5 degrees of freedom
    assert chi_square < 20.52


def test_large_phi_sticks_to_reference():
    model = mallows.Mallows([2, 0, 3, 1], 10)
    rng = random.Random(99)
    drawn = [model.draw(CANDS, rng) for i in range(1000)]
    assert sum(1 for ballot in drawn if ballot == (2, 0, 3, 1)) >= 990


def test_draws_reference_candidates():
    model = mallows.Mallows([3, 1, 0], 1.0)
    rng = random.Random(3)
    for i in range(100):
        ballot = model.draw(CANDS, rng)
        assert isinstance(ballot, Ordinal)
        assert sorted(ballot) == [0, 1, 3]


def test_distance_distribution():
    model = mallows.Mallows([0, 1, 2], 1.0)
    rng = random.Random(11)
    drawn = collections.Counter(
        model.sample_distance(rng) for i in range(5000)
    )
    weights = mallows.distance_weights(3, 1.0)
    total = sum(weights)
    for d, weight in enumerate(weights):
        assert abs(drawn[d] / 5000 - weight / total) < .03


@pytest.mark.parametrize(('pi_0', 'phi'), [
    ([], 1.0),
    ([0, 1, 0], 1.0),
    ([0, 1], -0.5),
    ([0, 1], math.inf),
    ([0, 1], math.nan),
])
def test_invalid(pi_0, phi):
    with pytest.raises(kingmaker.preference.core.PreferenceError):
        mallows.Mallows(pi_0, phi)


def test_check_candidates():
    model = mallows.Mallows([0, 1, 9], 1.0)
    with pytest.raises(kingmaker.candidate.UnknownCandidateError):
        model.check_candidates(CANDS)
    mallows.Mallows([0, 1, 3], 1.0).check_candidates(CANDS)


def test_to_dict():
    assert mallows.Mallows([1, 0], 1.5).to_dict() == {
        'class': 'kingmaker.preference.mallows.Mallows',
        'pi_0': [1, 0],
        'phi': 1.5,
    }
