'''Various utility functions for other modules of kingmaker.

There should normally be no need to use these functions directly.
'''

import bisect
import itertools
import math
import operator
import random
from numbers import Number
from typing import Any, Dict, Iterable, List, Tuple


class WeightError(ValueError):
    '''A set of weights cannot be used for a weighted random choice.

    :param weights: The offending weights.
    :param reason: What is wrong with them.
    '''
    def __init__(self, weights: Any, reason: str):
        self.weights = weights
        super().__init__(f'invalid weights {weights!r}: {reason}')


def check_weights(weights: Iterable[Number]) -> List[Number]:
    '''Verify weights for a weighted random choice and return them as a list.

    :raises WeightError: If there are no weights, any of them is negative or
        not finite, or they are all zero.
    '''
    weights = list(weights)
    if not weights:
        raise WeightError(weights, 'no weights given')
    for weight in weights:
        if isinstance(weight, bool) or not isinstance(weight, Number):
            raise WeightError(weights, f'{weight!r} is not a number')
        if weight < 0 or not math.isfinite(weight):
            raise WeightError(weights, 'must be finite and non-negative')
    if not sum(weights) > 0:
        raise WeightError(weights, 'all weights are zero')
    return weights


class WeightedChoice:
    '''Draw indices with probability proportional to their weight.

    Integer weights are sampled exactly, using a uniformly drawn integer
    below the weight total; other weights use a uniform float.

    :param weights: Non-negative weights, at least one of which is positive.
    :raises WeightError: If the weights cannot be sampled from.
    '''
    def __init__(self, weights: Iterable[Number]):
        self.weights = check_weights(weights)
        self._cum_weights = list(itertools.accumulate(self.weights))
        self._total = self._cum_weights[-1]
        self._exact = all(isinstance(w, int) for w in self.weights)

    def __len__(self) -> int:
        return len(self.weights)

    def sample(self, rng: random.Random) -> int:
        '''Draw one index from the distribution using the given source.'''
        if self._exact:
            point = rng.randrange(self._total)
        else:
            point = rng.random() * self._total
        index = bisect.bisect_right(self._cum_weights, point)
        # rounding can push a float point onto the total
        return min(index, len(self._cum_weights) - 1)

    def __repr__(self) -> str:
        return f'WeightedChoice({self.weights!r})'


def sorted_votes(votes: Dict[Any, Number],
                 descending: bool = True,
                 ) -> List[Tuple[Any, Number]]:
    '''Return votes items sorted by value, ties ordered by key.'''
    return list(sorted(
        sorted(votes.items(), key=operator.itemgetter(0)),
        key=operator.itemgetter(1),
        reverse=descending
    ))


def best_candidates(totals: Dict[int, Number]) -> List[int]:
    '''Return ids of candidates with the maximum positive total.

    Produces an empty list if no candidate has a positive total.
    '''
    if not totals:
        return []
    best_total = max(totals.values())
    if not best_total > 0:
        return []
    return sorted(
        cand_id for cand_id, total in totals.items() if total == best_total
    )
