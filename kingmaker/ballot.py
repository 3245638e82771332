'''Ballot types and ballot profiles.

A ballot is a single voter's expressed preference. Three shapes of ballots
are recognized, and every election uses exactly one of them:

-   **Nominal** ballots - a voter approves a number of candidates.
    Represented by a frozen set of candidate ids.
-   **Ordinal** ballots - a voter ranks a number of candidates, most
    preferred first. Represented by a tuple of candidate ids without
    duplicates. The ranking may be partial.
-   **Cardinal** ballots - a voter assigns a non-negative integer score to
    candidates. Represented by an immutable mapping of candidate ids to
    scores.

All ballots are hashable so that identical ballots can be counted.
A :class:`Profile` is the ordered collection of ballots submitted in one
election run.
'''

import collections.abc
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple


class BallotError(Exception):
    '''A ballot is malformed.

    :param ballot: The offending ballot contents.
    :param reason: What is wrong with it.
    '''
    def __init__(self, ballot: Any, reason: str):
        self.ballot = ballot
        self.reason = reason
        super().__init__(f'invalid ballot {ballot!r}: {reason}')


class BallotTypeError(BallotError, TypeError):
    '''A ballot is of a different shape than expected.

    :param btype: Ballot type detected as invalid.
    :param expected: Ballot type that was expected.
    '''
    def __init__(self, btype: Any, expected: Any = None):
        self.btype = btype
        self.expected = expected
        message = f'invalid ballot type: {_type_name(btype)}'
        if expected:
            message += f', must be {_type_name(expected)}'
        self.ballot = None
        self.reason = message
        Exception.__init__(self, message)


class Nominal(frozenset):
    '''An approval ballot: a set of approved candidate ids.'''

    def __repr__(self) -> str:
        return f'Nominal({sorted(self)})'


class Ordinal(tuple):
    '''A ranked ballot: candidate ids ordered from the most preferred.

    :raises BallotError: If a candidate id is ranked more than once.
    '''
    def __new__(cls, ranking: Iterable[int] = ()):
        self = super().__new__(cls, ranking)
        if len(set(self)) != len(self):
            raise BallotError(tuple(self), 'candidate ranked more than once')
        return self

    def __repr__(self) -> str:
        return f'Ordinal({list(self)})'


class Cardinal(collections.abc.Mapping):
    '''A score ballot: a mapping of candidate ids to non-negative scores.

    :param scores: Scores given to candidates, either as a mapping or as
        an iterable of (id, score) pairs.
    :raises BallotError: If any score is not a non-negative integer.
    '''
    def __init__(self, scores: Any = ()):
        self._scores: Dict[int, int] = dict(scores)
        for cand_id, score in self._scores.items():
            if not isinstance(score, int) or isinstance(score, bool) \
                    or score < 0:
                raise BallotError(
                    self._scores,
                    f'score for {cand_id} must be a non-negative integer'
                )
        self._hash = None

    def __getitem__(self, cand_id: int) -> int:
        return self._scores[cand_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self._scores)

    def __len__(self) -> int:
        return len(self._scores)

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(frozenset(self._scores.items()))
        return self._hash

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Cardinal):
            return self._scores == other._scores
        return NotImplemented

    def __repr__(self) -> str:
        return f'Cardinal({dict(sorted(self._scores.items()))})'


BALLOT_TYPES: Tuple[type, ...] = (Nominal, Ordinal, Cardinal)

BALLOT_TYPE_NAMES: Dict[str, type] = {
    'nominal': Nominal,
    'ordinal': Ordinal,
    'cardinal': Cardinal,
}


def get_ballot_type(btype: Any) -> type:
    '''Return a ballot type given by itself or by its lowercase name.'''
    if isinstance(btype, str):
        try:
            return BALLOT_TYPE_NAMES[btype]
        except KeyError:
            raise KeyError(f'unknown ballot type: {btype}') from None
    elif btype in BALLOT_TYPES:
        return btype
    else:
        raise BallotTypeError(btype, 'one of ' + ', '.join(BALLOT_TYPE_NAMES))


def detect_ballot_type(ballot: Any) -> type:
    '''Determine which of the ballot types the given ballot is.'''
    for btype in BALLOT_TYPES:
        if isinstance(ballot, btype):
            return btype
    raise BallotTypeError(type(ballot))


class Profile(collections.abc.Sequence):
    '''The collection of ballots cast in one election run.

    Ballots keep their insertion order but most methods treat the profile
    as a multiset. All ballots must be of the same type. The profile cannot
    be modified after construction.

    :param ballots: The ballots.
    :param ballot_type: The ballot type the profile should hold. If not
        given, it is detected from the first ballot; an empty profile without
        an explicit type has a ballot type of None.
    :raises BallotTypeError: If the ballots are of more than one type.
    '''
    def __init__(self,
                 ballots: Iterable[Any] = (),
                 ballot_type: Optional[type] = None,
                 ):
        self._ballots = tuple(ballots)
        if ballot_type is None and self._ballots:
            ballot_type = detect_ballot_type(self._ballots[0])
        for ballot in self._ballots:
            if not isinstance(ballot, ballot_type):
                raise BallotTypeError(type(ballot), ballot_type)
        self.ballot_type = ballot_type

    @classmethod
    def concat(cls, profiles: Iterable['Profile']) -> 'Profile':
        '''Join several profiles of the same ballot type into one.'''
        ballots = []
        ballot_type = None
        for profile in profiles:
            if profile.ballot_type is not None:
                if ballot_type is None:
                    ballot_type = profile.ballot_type
                elif profile.ballot_type is not ballot_type:
                    raise BallotTypeError(profile.ballot_type, ballot_type)
            ballots.extend(profile)
        return cls(ballots, ballot_type=ballot_type)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Profile(self._ballots[index], ballot_type=self.ballot_type)
        return self._ballots[index]

    def __len__(self) -> int:
        return len(self._ballots)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Profile):
            return self._ballots == other._ballots
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._ballots)

    def __repr__(self) -> str:
        return f'Profile({list(self._ballots)!r})'

    def tally(self) -> Dict[Any, int]:
        '''Count identical ballots.

        :returns: A mapping of distinct ballots to the number of times they
            appear in the profile, in order of first appearance.
        '''
        return dict(collections.Counter(self._ballots))


def _type_name(btype: Any) -> str:
    return getattr(btype, '__name__', str(btype))
