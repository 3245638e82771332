import sys
import os
import math
import random
import collections

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import kingmaker.util


@pytest.mark.parametrize('weights', [
    [],
    [0, 0],
    [1, -1],
    [1, math.inf],
    [math.nan],
    [1, 'heavy'],
])
def test_invalid_weights(weights):
    with pytest.raises(kingmaker.util.WeightError):
        kingmaker.util.WeightedChoice(weights)


def test_weight_error_is_value_error():
    with pytest.raises(ValueError):
        kingmaker.util.check_weights([])


def test_zero_weight_never_drawn():
    chooser = kingmaker.util.WeightedChoice([0, 3, 0, 1])
    rng = random.Random(42)
    drawn = collections.Counter(chooser.sample(rng) for i in range(2000))
    assert set(drawn) == {1, 3}
    assert 1300 < drawn[1] < 1700


def test_float_weights():
    chooser = kingmaker.util.WeightedChoice([.25, .75])
    rng = random.Random(7)
    drawn = collections.Counter(chooser.sample(rng) for i in range(4000))
    assert 800 < drawn[0] < 1200


def test_deterministic():
    chooser = kingmaker.util.WeightedChoice([1, 2, 3])
    first = [chooser.sample(random.Random(5)) for i in range(10)]
    second = [chooser.sample(random.Random(5)) for i in range(10)]
    assert first == second


def test_best_candidates():
    assert kingmaker.util.best_candidates({0: 3, 1: 5, 2: 5}) == [1, 2]
    assert kingmaker.util.best_candidates({0: 0, 1: 0}) == []
    assert kingmaker.util.best_candidates({}) == []


def test_sorted_votes():
    assert kingmaker.util.sorted_votes({2: 5, 0: 5, 1: 7}) == [
        (1, 7), (0, 5), (2, 5)
    ]
