'''Objects to assign scores to ranks in positional methods such as Borda.

A rank scorer returns a list of numerical scores to be assigned to the ranks
of a single ranked ballot. The scores depend only on the length of that
ballot, so partial rankings are scored by their own length.

Rank scorers can be referred to by name (`get()`, `construct()`); the
name-constructed scorers use their default parameters.
'''

import abc
from fractions import Fraction
from typing import List
from numbers import Number

import kingmaker.component.core
from kingmaker.persist import simple_serialization


RANK_SCORERS = {}


scorer_mark, get, _ = kingmaker.component.core.register_functions(
    RANK_SCORERS, 'rank scorer'
)


class RankScorer(metaclass=abc.ABCMeta):
    '''An abstract base class for rank scorers.

    Rank scorers must provide a `scores()` method that returns a list of
    scores for the ranks of a ballot ranking a given number of candidates.
    '''
    @abc.abstractmethod
    def scores(self, n_ranked: int) -> List[Number]:
        raise NotImplementedError


@scorer_mark
@simple_serialization
class Borda(RankScorer):
    '''Borda rank scorer.

    Assigns the `base` score to the candidate ranked last on the ballot, and
    one point more for each higher rank. A ballot ranking ``L`` candidates
    thus gives ``L - 1 - i + base`` points to the candidate at (zero-based)
    position ``i``. Unranked candidates get nothing.

    :param base: The score of the candidate ranked last. With 1, the last
        ranked candidate still gets a point over the unranked ones; with 0,
        the first ranked candidate gets ``L - 1`` points.
    '''
    def __init__(self, base: int = 1):
        self.base = base

    def scores(self, n_ranked: int) -> List[int]:
        top_score = n_ranked - 1 + self.base
        return [top_score - rank for rank in range(n_ranked)]


@scorer_mark
@simple_serialization
class Dowdall(RankScorer):
    '''Dowdall (Nauru) rank scorer.

    Assigns the numbers of the harmonic series (1, 1/2, 1/3...) to
    progressively lower ranks.
    '''
    def scores(self, n_ranked: int) -> List[Fraction]:
        return [Fraction(1, rank + 1) for rank in range(n_ranked)]


def construct(definition) -> RankScorer:
    '''Return a rank scorer, instantiating it by name if a string is given.'''
    if isinstance(definition, RankScorer):
        return definition
    return get(definition)()
