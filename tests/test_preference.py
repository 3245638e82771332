import sys
import os
import random
import collections

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import kingmaker.candidate
import kingmaker.util
from kingmaker.ballot import Nominal, Ordinal, Cardinal, Profile
from kingmaker.candidate import Candidate
from kingmaker.preference import (
    Impartial, PlackettLuce, Manual, Mallows, PreferenceError
)

CANDS = [Candidate(0, 'A'), Candidate(1, 'B'), Candidate(2, 'C')]


@pytest.mark.parametrize(('model', 'btype'), [
    (Impartial(), Ordinal),
    (Impartial('nominal'), Nominal),
    (Impartial(Cardinal, max_score=3), Cardinal),
    (PlackettLuce({0: 1, 1: 2, 2: 3}), Ordinal),
    (Manual([Nominal([0]), Nominal([1, 2])]), Nominal),
    (Mallows([0, 1, 2], .5), Ordinal),
])
def test_sample_profile(model, btype):
    profile = model.sample(CANDS, 25, random.Random(0))
    assert isinstance(profile, Profile)
    assert len(profile) == 25
    assert profile.ballot_type is btype
    assert model.ballot_type is btype
    assert all(isinstance(ballot, btype) for ballot in profile)


@pytest.mark.parametrize('model', [
    Impartial(), Impartial('nominal'), Impartial('cardinal'),
    PlackettLuce([(0, 5), (2, 1)]), Mallows([2, 1, 0], 0.3),
])
def test_deterministic(model):
    first = model.sample(CANDS, 20, random.Random(42))
    second = model.sample(CANDS, 20, random.Random(42))
    assert first == second


def test_impartial_ordinal_complete():
    rng = random.Random(1)
    drawn = collections.Counter(
        Impartial().draw(CANDS, rng) for i in range(3000)
    )
    assert len(drawn) == 6
    assert all(sorted(ballot) == [0, 1, 2] for ballot in drawn)
    assert all(350 < count < 650 for count in drawn.values())


def test_impartial_cardinal_range():
    rng = random.Random(2)
    for i in range(200):
        ballot = Impartial('cardinal', max_score=2).draw(CANDS, rng)
        assert set(ballot) == {0, 1, 2}
        assert all(0 <= ballot[c] <= 2 for c in ballot)


def test_impartial_nominal_half():
    rng = random.Random(3)
    approvals = collections.Counter()
    for i in range(2000):
        approvals.update(Impartial('nominal').draw(CANDS, rng))
    assert all(850 < count < 1150 for count in approvals.values())


def test_impartial_invalid():
    with pytest.raises(PreferenceError):
        Impartial('cardinal', max_score=-1)
    with pytest.raises(KeyError):
        Impartial('ranked')


def test_plackett_luce_strength():
    model = PlackettLuce({0: 8, 1: 1, 2: 1})
    rng = random.Random(4)
    firsts = collections.Counter(
        model.draw(CANDS, rng)[0] for i in range(2000)
    )
    assert 1450 < firsts[0] < 1750


def test_plackett_luce_ranks_weighted_only():
    ballot = PlackettLuce({2: 1, 0: 1}).draw(CANDS, random.Random(5))
    assert sorted(ballot) == [0, 2]


@pytest.mark.parametrize('weights', [
    {},
    {0: 0, 1: 1},
    {0: -1},
    [(0, 1), (0, 2)],
])
def test_plackett_luce_invalid(weights):
    with pytest.raises(PreferenceError):
        PlackettLuce(weights)


def test_manual_draws_given_ballots():
    ballots = [Ordinal([0, 1]), Ordinal([2])]
    model = Manual(ballots)
    rng = random.Random(6)
    drawn = collections.Counter(model.draw(CANDS, rng) for i in range(1000))
    assert set(drawn) == set(ballots)
    assert model.ballot_type is Ordinal


def test_manual_empty():
    with pytest.raises(PreferenceError):
        Manual([])


def test_check_candidates():
    with pytest.raises(kingmaker.candidate.UnknownCandidateError):
        Manual([Ordinal([0, 5])]).check_candidates(CANDS)
    with pytest.raises(kingmaker.candidate.UnknownCandidateError):
        PlackettLuce({3: 1}).check_candidates(CANDS)
    Impartial().check_candidates(CANDS)


def test_impartial_to_dict():
    assert Impartial('nominal').to_dict() == {
        'class': 'kingmaker.preference.core.Impartial',
        'ballot_type': {'type': 'kingmaker.ballot.Nominal'},
        'max_score': 5,
    }
