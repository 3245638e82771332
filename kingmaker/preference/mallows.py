'''The Mallows model of rankings clustered around a reference ranking.

A ranking ``pi`` is drawn with probability proportional to
``exp(-phi * d(pi, pi_0))`` where ``d`` is the Kendall tau distance (the
number of pairwise disagreements) to the reference ranking ``pi_0``. With
``phi`` equal to zero, all rankings are equally likely; the larger ``phi``,
the closer the rankings stick to ``pi_0``.

Sampling is done in two steps. First, the distance ``D`` is drawn; since
``I(n, d)`` rankings of ``n`` candidates lie at distance ``d``, its
probability is proportional to ``I(n, d) * exp(-phi * d)``. Second, a
ranking at exactly that distance is drawn uniformly through its inversion
(Lehmer) vector, which is then turned into a permutation of ``pi_0``.

The numbers ``I(n, d)`` (Mahonian numbers) grow quickly and their naive
recursive computation is exponential, so they are tabulated once per ``n``
and shared by all models.
'''

import itertools
import math
import random
import functools
from numbers import Number
from typing import List, Sequence, Tuple

import kingmaker.util
from kingmaker.ballot import Ordinal
from kingmaker.candidate import Candidate
from kingmaker.persist import simple_serialization
from kingmaker.preference.core import Preference, PreferenceError


def max_inversions(n: int) -> int:
    '''The largest number of inversions a permutation of n items can have.'''
    return n * (n - 1) // 2


@functools.lru_cache(maxsize=None)
def inversion_table(n: int) -> Tuple[int, ...]:
    '''Count permutations of n items by their number of inversions.

    :returns: A tuple whose d-th item is the number of permutations of n
        items with exactly d inversions, for d from zero to
        ``max_inversions(n)``. The empty permutation counts as having zero
        inversions.
    '''
    if n <= 1:
        return (1, )
    prev = inversion_table(n - 1)
    prev_cum = [0] + list(itertools.accumulate(prev))
    row = []
    for d in range(max_inversions(n) + 1):
        # sum of prev[d - i] for i in 0..min(d, n - 1), clipped to prev
        hi = min(d, len(prev) - 1)
        lo = max(d - (n - 1), 0)
        row.append(prev_cum[hi + 1] - prev_cum[lo] if lo <= hi else 0)
    return tuple(row)


def count_permutations(n: int, d: int) -> int:
    '''Number of permutations of n items with exactly d inversions.

    Satisfies ``I(0, d) = 0``, ``I(n, 0) = 1`` for positive n and
    ``I(n, d) = sum(I(n - 1, d - i) for i in range(min(d, n - 1) + 1))``.
    '''
    if n <= 0 or d < 0:
        return 0
    table = inversion_table(n)
    return table[d] if d < len(table) else 0


def distance_weights(n: int, phi: float) -> List[float]:
    '''Unnormalized probabilities of Kendall tau distances under Mallows.'''
    return [
        float(count_permutations(n, d)) * math.exp(-phi * d)
        for d in range(max_inversions(n) + 1)
    ]


def sample_decomposition(n: int, k: int, rng: random.Random) -> List[int]:
    '''Draw a uniformly random inversion vector of length n summing to k.

    The i-th entry is the number of inversions contributed by the i-th
    position and lies between zero and ``n - i - 1``. Each entry is drawn
    from the values that still leave a solution for the later positions,
    weighted by how many solutions they leave, so every permutation with k
    inversions is equally likely.
    '''
    if not 0 <= k <= max_inversions(n):
        raise ValueError(f'{n} items cannot have {k} inversions')
    vector = [0] * n
    inv_left = k
    for i in range(n - 1):
        if inv_left == 0:
            break
        slots_left = n - i - 1
        min_value = max(0, inv_left - max_inversions(slots_left))
        max_value = min(slots_left, inv_left)
        completions = inversion_table(slots_left)
        chooser = kingmaker.util.WeightedChoice([
            completions[inv_left - value]
            for value in range(min_value, max_value + 1)
        ])
        value = min_value + chooser.sample(rng)
        vector[i] = value
        inv_left -= value
    return vector


def decomposition_to_permutation(vector: Sequence[int]) -> List[int]:
    '''Turn an inversion vector into the permutation it describes.'''
    available = list(range(len(vector)))
    return [available.pop(sigma_i) for sigma_i in vector]


def sample_permutation(n: int, k: int, rng: random.Random) -> List[int]:
    '''Draw a uniformly random permutation of n items with k inversions.'''
    return decomposition_to_permutation(sample_decomposition(n, k, rng))


@simple_serialization
class Mallows(Preference):
    '''Rankings dispersed around a reference ranking by the Mallows model.

    :param pi_0: The reference (modal) ranking as a sequence of candidate
        ids, most preferred first.
    :param phi: Dispersion parameter. Zero gives uniformly random rankings,
        larger values concentrate the rankings around ``pi_0``.
    :raises PreferenceError: If ``pi_0`` is empty or repeats a candidate, or
        ``phi`` is negative or not finite.
    '''
    ballot_type = Ordinal

    def __init__(self, pi_0: Sequence[int], phi: float):
        self.pi_0 = tuple(pi_0)
        if not self.pi_0:
            raise PreferenceError('Mallows reference ranking is empty')
        if len(set(self.pi_0)) != len(self.pi_0):
            raise PreferenceError(
                f'Mallows reference ranking repeats candidates: {self.pi_0}'
            )
        if isinstance(phi, bool) or not isinstance(phi, Number) \
                or not math.isfinite(phi) or phi < 0:
            raise PreferenceError(
                f'Mallows dispersion must be finite and non-negative,'
                f' got {phi!r}'
            )
        self.phi = phi
        self._distances = kingmaker.util.WeightedChoice(
            distance_weights(len(self.pi_0), phi)
        )

    def draw(self,
             candidates: Sequence[Candidate],
             rng: random.Random,
             ) -> Ordinal:
        distance = self.sample_distance(rng)
        permutation = sample_permutation(len(self.pi_0), distance, rng)
        return Ordinal(self.pi_0[i] for i in permutation)

    def sample_distance(self, rng: random.Random) -> int:
        '''Draw a Kendall tau distance from the reference ranking.'''
        return self._distances.sample(rng)

    def referenced_ids(self) -> Tuple[int, ...]:
        return self.pi_0
