'''Candidates standing in a simulated election.

A candidate is identified by a small integer id which is what ballots refer
to. Everything else (name, party, issue space positions) is metadata used for
reporting. Candidates compare, hash and sort by their id only.
'''

from __future__ import annotations

import math
import functools
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from kingmaker.persist import simple_serialization


MAX_ID = 2 ** 16 - 1


class CandidateError(Exception):
    '''A candidate is invalid in the given context.

    :param candidate: Candidate (or candidate id) that was found to be
        invalid.
    :param expected: Definition of a candidate that was expected.
    '''
    def __init__(self, candidate: Any, expected: Any = None):
        self.candidate = candidate
        self.expected = expected
        message = f'invalid candidate: {candidate}'
        if expected:
            message += f', must be {expected}'
        super().__init__(message)


class InvalidPosition(CandidateError, ValueError):
    '''A candidate position is not a finite real number.'''
    def __init__(self, candidate: Any, position: Any):
        self.position = position
        super().__init__(candidate, f'finite positions, got {position!r}')


class DuplicateCandidateError(CandidateError):
    '''Two candidates of a single election share an id.'''
    def __init__(self, candidate: Any):
        super().__init__(candidate, 'unique id within the election')


class UnknownCandidateError(CandidateError):
    '''A ballot refers to a candidate id not standing in the election.'''
    def __init__(self, candidate_id: Any):
        super().__init__(candidate_id, 'id of a candidate in the election')


@functools.total_ordering
@simple_serialization
class Candidate:
    '''A candidate standing in the election.

    :param id: Unique identifier of the candidate within the election, an
        integer between 0 and 65535. Ballots refer to candidates by it.
    :param name: Name of the candidate, used in reports.
    :param party: The party the candidate is associated with, if any.
    :param positions: Positions of the candidate in an issue space, if any.
        All must be finite numbers.
    :raises InvalidPosition: If any of the positions is NaN or infinite.
    '''
    def __init__(self,
                 id: int,
                 name: str,
                 party: Optional[str] = None,
                 positions: Optional[Sequence[float]] = None,
                 ):
        if not isinstance(id, int) or isinstance(id, bool) \
                or not 0 <= id <= MAX_ID:
            raise CandidateError(id, f'integer id between 0 and {MAX_ID}')
        if positions is not None:
            positions = tuple(positions)
            for position in positions:
                if not isinstance(position, (int, float)) \
                        or not math.isfinite(position):
                    raise InvalidPosition(name, position)
            positions = tuple(float(position) for position in positions)
        self._id = id
        self._name = name
        self._party = party
        self._positions = positions

    @property
    def id(self) -> int:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def party(self) -> Optional[str]:
        return self._party

    @property
    def positions(self) -> Optional[Tuple[float, ...]]:
        return self._positions

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Candidate):
            return NotImplemented
        return self._id == other._id

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Candidate):
            return NotImplemented
        return self._id < other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return (
            f'<Candidate({self._id},{self._name}'
            + (f',{self._party}' if self._party is not None else '')
            + ')>'
        )

    def __str__(self) -> str:
        return self._name


def check_unique(candidates: Iterable[Candidate]) -> List[Candidate]:
    '''Return the candidates as a list, verifying their ids are unique.

    :raises DuplicateCandidateError: If two candidates share an id.
    '''
    seen = set()
    checked = []
    for candidate in candidates:
        if candidate.id in seen:
            raise DuplicateCandidateError(candidate)
        seen.add(candidate.id)
        checked.append(candidate)
    return checked


def by_id(candidates: Iterable[Candidate]) -> dict:
    '''Index candidates by their ids.'''
    return {candidate.id: candidate for candidate in candidates}
