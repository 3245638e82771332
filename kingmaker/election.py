'''Simulated elections: candidates, voting blocs and a method combined.

An :class:`Election` is an immutable configuration. Each run of it draws a
fresh profile of ballots from its voting blocs using a random source seeded
by the run's seed, and tabulates it with the voting method. The same seed
always produces the same ballots and the same outcome.

Many runs are evaluated in parallel by :meth:`Election.run_many`. The seeds
of the individual runs are drawn from a single random source before the
work is distributed, so the outcomes do not depend on the number of
workers or on the order in which they complete.
'''

import collections
import concurrent.futures
import logging
import random
from typing import Any, Dict, Iterable, List, Optional, Tuple

from kingmaker.ballot import Profile, BallotTypeError
from kingmaker.bloc import VotingBloc
from kingmaker.candidate import Candidate, check_unique
from kingmaker.evaluate.core import Method
from kingmaker.outcome import Outcome


logger = logging.getLogger(__name__)

SEED_BITS = 64

EXECUTORS = {
    'process': concurrent.futures.ProcessPoolExecutor,
    'thread': concurrent.futures.ThreadPoolExecutor,
}


class Election:
    '''A configured election that can be run repeatedly.

    :param candidates: Candidates standing, with unique ids.
    :param blocs: Voting blocs casting the ballots.
    :param method: The voting method to tabulate the ballots.
    :param shuffle: Whether to shuffle the ballots of all blocs together
        after drawing them. Methods sensitive to ballot order (such as
        :class:`kingmaker.evaluate.RandomDictator`) need this to treat all
        voters alike.
    :raises DuplicateCandidateError: If candidate ids are not unique.
    :raises BallotTypeError: If a voting bloc produces ballots of another
        type than the method counts.
    :raises UnknownCandidateError: If a preference model refers to a
        candidate that does not stand.
    :raises SeatCountError: If the method cannot fill its seats with the
        candidates.
    '''
    def __init__(self,
                 candidates: Iterable[Candidate],
                 blocs: Iterable[VotingBloc],
                 method: Method,
                 shuffle: bool = True,
                 ):
        self._candidates = tuple(check_unique(candidates))
        self._blocs = tuple(blocs)
        self._method = method
        self._shuffle = shuffle
        for bloc in self._blocs:
            if bloc.ballot_type is not method.ballot_type:
                raise BallotTypeError(bloc.ballot_type, method.ballot_type)
            bloc.preference.check_candidates(self._candidates)
        method.check_candidates(self._candidates)

    @property
    def candidates(self) -> Tuple[Candidate, ...]:
        return self._candidates

    @property
    def blocs(self) -> Tuple[VotingBloc, ...]:
        return self._blocs

    @property
    def method(self) -> Method:
        return self._method

    @property
    def shuffle(self) -> bool:
        return self._shuffle

    @property
    def n_voters(self) -> int:
        '''Total number of voters in all blocs.'''
        return sum(bloc.members for bloc in self._blocs)

    def realize(self, rng: random.Random) -> Profile:
        '''Draw the honest ballots of all voters.'''
        return self._combine(
            [bloc.realize(self._candidates, rng) for bloc in self._blocs],
            rng
        )

    def vote(self, rng: random.Random) -> Profile:
        '''Draw the ballots all voters actually cast, tactics applied.'''
        return self._combine(
            [bloc.vote(self._candidates, rng) for bloc in self._blocs],
            rng
        )

    def _combine(self, profiles: List[Profile], rng: random.Random
                 ) -> Profile:
        if self._shuffle:
            ballots = list(Profile.concat(profiles))
            rng.shuffle(ballots)
            return Profile(ballots, ballot_type=self._method.ballot_type)
        else:
            return Profile.concat(profiles)

    def outcome(self, profile: Profile) -> Outcome:
        '''Tabulate a profile with the election's method.'''
        return self._method.outcome(self._candidates, profile)

    def run_once(self, seed: int) -> Outcome:
        '''Run the election once, with a random source seeded by seed.'''
        rng = random.Random(seed)
        return self.outcome(self.vote(rng))

    def run_many(self,
                 n: int,
                 seed: int,
                 workers: Optional[int] = None,
                 executor: str = 'process',
                 ) -> List[Outcome]:
        '''Run the election n times in parallel.

        :param n: Number of runs.
        :param seed: Seed of the random source drawing the seeds of the
            individual runs.
        :param workers: Number of parallel workers. None leaves it to the
            executor; 1 runs all elections in the current thread.
        :param executor: ``'process'`` to run in a process pool (the election
            must be picklable then), ``'thread'`` for a thread pool.
        :returns: Outcomes of the runs, in the order of their seeds.
        '''
        if n < 0:
            raise ValueError(f'run count must be non-negative: {n}')
        seeds = self.run_seeds(n, seed)
        if workers == 1 or n <= 1:
            logger.info('running %d elections sequentially', n)
            return [self.run_once(run_seed) for run_seed in seeds]
        try:
            executor_class = EXECUTORS[executor]
        except KeyError:
            raise ValueError(f'unknown executor: {executor}, available: '
                             + ', '.join(EXECUTORS.keys()))
        logger.info('running %d elections in a %s pool', n, executor)
        with executor_class(max_workers=workers) as pool:
            chunksize = max(1, n // (4 * (workers or 8)))
            return list(pool.map(self.run_once, seeds, chunksize=chunksize))

    @staticmethod
    def run_seeds(n: int, seed: int) -> List[int]:
        '''Draw the seeds of n individual runs from the master seed.'''
        rng = random.Random(seed)
        return [rng.getrandbits(SEED_BITS) for i in range(n)]

    @staticmethod
    def tabulate(outcomes: Iterable[Outcome]) -> List[Tuple[Outcome, int]]:
        '''Count identical outcomes, in the order of their first occurrence.'''
        return list(collections.Counter(outcomes).items())

    def report(self, outcomes: Iterable[Outcome]) -> Dict[str, Any]:
        '''Summarize the configuration and tabulated outcomes for JSON.'''
        return {
            'configuration': self.to_dict(),
            'outcomes': [
                {'winners': outcome.winners(), 'kind': outcome.kind,
                 'times': count}
                for outcome, count in self.tabulate(outcomes)
            ],
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            'candidates': [cand.to_dict() for cand in self._candidates],
            'blocs': [bloc.to_dict() for bloc in self._blocs],
            'method': self._method.to_dict(),
            'shuffle': self._shuffle,
        }

    def __repr__(self) -> str:
        return (f'Election({list(self._candidates)!r}, '
                f'{list(self._blocs)!r}, {self._method!r})')
