'''Outcomes of simulated elections.

Single-winner methods produce a :class:`SingleWinner` outcome: a win of one
candidate, a tie among several, or no winner at all. Multi-winner methods
produce a :class:`MultiWinner` outcome: a set of elected candidates or none.

Outcomes compare and hash by value so that outcomes of many simulation runs
can be counted by :meth:`kingmaker.election.Election.tabulate`.
'''

import abc
from typing import Any, Dict, FrozenSet, Iterable, List, Sequence

from kingmaker.candidate import Candidate, UnknownCandidateError, by_id
from kingmaker.persist import scoped_class_name


class Outcome(metaclass=abc.ABCMeta):
    '''The result of an election.'''
    kind: str
    candidates: FrozenSet[Candidate]

    def winners(self) -> List[str]:
        '''Return names of the winning (or tied) candidates, ordered by id.'''
        return [cand.name for cand in sorted(self.candidates)]

    def __eq__(self, other: Any) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.kind == other.kind and self.candidates == other.candidates

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.kind, self.candidates))

    def __bool__(self) -> bool:
        return self.kind != 'none'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'class': scoped_class_name(self),
            'kind': self.kind,
            'winners': self.winners(),
        }


class SingleWinner(Outcome):
    '''The outcome of a single-winner election.

    Construct it by one of the class methods :meth:`win`, :meth:`tie` or
    :meth:`none`.
    '''
    KINDS = ('win', 'tie', 'none')

    def __init__(self, kind: str, candidates: Iterable[Candidate] = ()):
        if kind not in self.KINDS:
            raise ValueError(f'invalid single-winner outcome kind: {kind}')
        self.kind = kind
        self.candidates = frozenset(candidates)

    @classmethod
    def win(cls, candidates: Sequence[Candidate], cand_id: int
            ) -> 'SingleWinner':
        '''A win of the candidate with the given id.'''
        return cls('win', _lookup(candidates, [cand_id]))

    @classmethod
    def tie(cls, candidates: Sequence[Candidate], cand_ids: Iterable[int]
            ) -> 'SingleWinner':
        '''A tie among the candidates with the given ids.'''
        return cls('tie', _lookup(candidates, cand_ids))

    @classmethod
    def none(cls) -> 'SingleWinner':
        '''No winner.'''
        return cls('none')

    @classmethod
    def from_best(cls, candidates: Sequence[Candidate], best: List[int]
                  ) -> 'SingleWinner':
        '''Construct a win, tie or no-winner outcome from best candidates.'''
        if not best:
            return cls.none()
        elif len(best) == 1:
            return cls.win(candidates, best[0])
        else:
            return cls.tie(candidates, best)

    @property
    def winner(self) -> Candidate:
        '''The single winner; only valid for wins.'''
        if self.kind != 'win':
            raise ValueError(f'{self} has no single winner')
        return next(iter(self.candidates))

    def __repr__(self) -> str:
        if self.kind == 'none':
            return 'None'
        names = ', '.join(self.winners())
        return f'{self.kind.capitalize()}({names})'


class MultiWinner(Outcome):
    '''The outcome of a multi-winner election.

    Construct it by one of the class methods :meth:`elected` or :meth:`none`.
    '''
    KINDS = ('elected', 'none')

    def __init__(self, kind: str, candidates: Iterable[Candidate] = ()):
        if kind not in self.KINDS:
            raise ValueError(f'invalid multi-winner outcome kind: {kind}')
        self.kind = kind
        self.candidates = frozenset(candidates)

    @classmethod
    def elected(cls, candidates: Sequence[Candidate], cand_ids: Iterable[int]
                ) -> 'MultiWinner':
        '''Election of the candidates with the given ids.'''
        return cls('elected', _lookup(candidates, cand_ids))

    @classmethod
    def none(cls) -> 'MultiWinner':
        '''Nobody elected.'''
        return cls('none')

    def __repr__(self) -> str:
        if self.kind == 'none':
            return 'MultiWinner(None)'
        return 'MultiWinner(' + ', '.join(self.winners()) + ')'


def _lookup(candidates: Sequence[Candidate],
            cand_ids: Iterable[int],
            ) -> List[Candidate]:
    index = by_id(candidates)
    try:
        return [index[cand_id] for cand_id in cand_ids]
    except KeyError as e:
        raise UnknownCandidateError(e.args[0]) from e
