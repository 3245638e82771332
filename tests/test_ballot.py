import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import kingmaker.ballot
from kingmaker.ballot import Nominal, Ordinal, Cardinal, Profile


def test_ordinal_rejects_duplicates():
    assert Ordinal([2, 0, 1]) == (2, 0, 1)
    with pytest.raises(kingmaker.ballot.BallotError):
        Ordinal([0, 1, 0])


def test_ordinal_partial():
    assert len(Ordinal([1])) == 1
    assert Ordinal() == ()


@pytest.mark.parametrize('scores', [{0: -1}, {0: 1.5}, {0: '3'}, {0: True}])
def test_cardinal_invalid(scores):
    with pytest.raises(kingmaker.ballot.BallotError):
        Cardinal(scores)


def test_cardinal_mapping():
    ballot = Cardinal({0: 5, 2: 0})
    assert ballot[0] == 5
    assert ballot.get(1, 0) == 0
    assert set(ballot) == {0, 2}
    assert len(ballot) == 2
    assert ballot == Cardinal([(2, 0), (0, 5)])
    assert hash(ballot) == hash(Cardinal([(2, 0), (0, 5)]))
    assert ballot != Cardinal({0: 4, 2: 0})


def test_nominal():
    assert Nominal([1, 0, 1]) == Nominal([0, 1])
    assert repr(Nominal([1, 0])) == 'Nominal([0, 1])'


@pytest.mark.parametrize(('name', 'btype'), [
    ('nominal', Nominal),
    ('ordinal', Ordinal),
    ('cardinal', Cardinal),
    (Ordinal, Ordinal),
])
def test_get_ballot_type(name, btype):
    assert kingmaker.ballot.get_ballot_type(name) is btype


def test_get_ballot_type_invalid():
    with pytest.raises(KeyError):
        kingmaker.ballot.get_ballot_type('ranked')
    with pytest.raises(kingmaker.ballot.BallotTypeError):
        kingmaker.ballot.get_ballot_type(tuple)


def test_get_ballot_type_unknown_name_unchained():
    with pytest.raises(KeyError) as excinfo:
        kingmaker.ballot.get_ballot_type('ranked')
    assert excinfo.value.__cause__ is None
    assert excinfo.value.__suppress_context__


def test_profile_detects_type():
    profile = Profile([Ordinal([0, 1]), Ordinal([1, 0])])
    assert profile.ballot_type is Ordinal
    assert len(profile) == 2
    assert profile[1] == (1, 0)
    assert Profile().ballot_type is None


def test_profile_mixed():
    with pytest.raises(kingmaker.ballot.BallotTypeError):
        Profile([Ordinal([0]), Nominal([0])])
    with pytest.raises(TypeError):
        Profile([Nominal([0])], ballot_type=Ordinal)


def test_profile_slice():
    profile = Profile([Ordinal([0]), Ordinal([1]), Ordinal([2])])
    part = profile[1:]
    assert isinstance(part, Profile)
    assert list(part) == [(1, ), (2, )]


def test_profile_concat():
    first = Profile([Ordinal([0, 1])])
    second = Profile([Ordinal([1, 0]), Ordinal([1])])
    joined = Profile.concat([first, Profile(), second])
    assert list(joined) == [(0, 1), (1, 0), (1, )]
    assert joined.ballot_type is Ordinal
    with pytest.raises(kingmaker.ballot.BallotTypeError):
        Profile.concat([first, Profile([Nominal([1])])])


def test_profile_tally():
    profile = Profile([
        Ordinal([0, 1]), Ordinal([1, 0]), Ordinal([0, 1]), Ordinal([1]),
    ])
    assert list(profile.tally().items()) == [
        ((0, 1), 2), ((1, 0), 1), ((1, ), 1)
    ]
