'''General voting method machinery and the simple tally-based methods.'''

from __future__ import annotations

import abc
from numbers import Number
from typing import Any, Dict, Iterable, Sequence, Union

import kingmaker.component.rankscore
import kingmaker.util
from kingmaker.ballot import Profile, Nominal, Ordinal, BallotTypeError
from kingmaker.candidate import Candidate, UnknownCandidateError
from kingmaker.candidate import check_unique
from kingmaker.outcome import Outcome, SingleWinner
from kingmaker.persist import simple_serialization, scoped_class_name


class SeatCountError(ValueError):
    '''More seats are to be filled than there are candidates.

    :param n_seats: Number of seats requested.
    :param n_candidates: Number of candidates standing.
    '''
    def __init__(self, n_seats: int, n_candidates: int):
        self.n_seats = n_seats
        self.n_candidates = n_candidates
        super().__init__(
            f'cannot fill {n_seats} seats with {n_candidates} candidates'
        )


class Method(metaclass=abc.ABCMeta):
    '''A voting method turning a profile of ballots into an outcome.

    A root abstract base class for all methods. Subclasses must set the
    ``ballot_type`` attribute to the type of ballots they tabulate.
    '''
    ballot_type: type

    @abc.abstractmethod
    def outcome(self,
                candidates: Sequence[Candidate],
                profile: Iterable[Any],
                ) -> Outcome:
        '''Determine the outcome of an election.

        :param candidates: Candidates standing in the election.
        :param profile: The ballots cast, all of the method's ballot type.
        '''
        raise NotImplementedError

    def check_candidates(self, candidates: Sequence[Candidate]) -> None:
        '''Verify the method can run an election with the candidates.

        :raises DuplicateCandidateError: If candidate ids are not unique.
        '''
        check_unique(candidates)

    def prepare(self, profile: Iterable[Any]) -> Profile:
        '''Turn the ballots into a profile of the method's ballot type.

        :raises BallotTypeError: If the ballots are of a different type.
        '''
        if not isinstance(profile, Profile):
            profile = Profile(profile)
        if profile.ballot_type is not None \
                and profile.ballot_type is not self.ballot_type:
            raise BallotTypeError(profile.ballot_type, self.ballot_type)
        return profile

    def __repr__(self) -> str:
        return type(self).__name__ + '()'


def initial_totals(candidates: Sequence[Candidate]) -> Dict[int, Number]:
    '''Return a zero total for every candidate id.'''
    return {cand.id: 0 for cand in check_unique(candidates)}


def credit(totals: Dict[int, Number], cand_id: int, amount: Number) -> None:
    '''Add to the total of a candidate standing in the election.

    :raises UnknownCandidateError: If no such candidate stands.
    '''
    if cand_id not in totals:
        raise UnknownCandidateError(cand_id)
    totals[cand_id] += amount


def check_referenced(profile: Profile, cand_ids: Iterable[int]) -> None:
    '''Verify all ballots of the profile only refer to the given ids.

    :raises UnknownCandidateError: If a ballot refers to another id.
    '''
    cand_ids = frozenset(cand_ids)
    for ballot in profile.tally():
        for cand_id in ballot:
            if cand_id not in cand_ids:
                raise UnknownCandidateError(cand_id)


def best_outcome(candidates: Sequence[Candidate],
                 totals: Dict[int, Number],
                 ) -> SingleWinner:
    '''Declare the candidate(s) with the highest positive total.

    Several candidates sharing the highest total produce a tie; if nobody
    has a positive total, there is no winner.
    '''
    return SingleWinner.from_best(
        candidates, kingmaker.util.best_candidates(totals)
    )


@simple_serialization
class Plurality(Method):
    '''First-past-the-post: the most first preferences win.

    Only the top choice of each ranked ballot counts.
    '''
    ballot_type = Ordinal

    def outcome(self,
                candidates: Sequence[Candidate],
                profile: Iterable[Ordinal],
                ) -> SingleWinner:
        return best_outcome(candidates, self.totals(candidates, profile))

    def totals(self,
               candidates: Sequence[Candidate],
               profile: Iterable[Ordinal],
               ) -> Dict[int, int]:
        '''Count first preferences of all candidates.'''
        totals = initial_totals(candidates)
        profile = self.prepare(profile)
        check_referenced(profile, totals)
        for ballot in profile:
            if ballot:
                credit(totals, ballot[0], 1)
        return totals


@simple_serialization
class Approval(Method):
    '''Approval voting: the candidate approved by the most voters wins.'''
    ballot_type = Nominal

    def outcome(self,
                candidates: Sequence[Candidate],
                profile: Iterable[Nominal],
                ) -> SingleWinner:
        return best_outcome(candidates, self.totals(candidates, profile))

    def totals(self,
               candidates: Sequence[Candidate],
               profile: Iterable[Nominal],
               ) -> Dict[int, int]:
        '''Count approvals of all candidates.'''
        totals = initial_totals(candidates)
        for ballot in self.prepare(profile):
            for cand_id in ballot:
                credit(totals, cand_id, 1)
        return totals


@simple_serialization
class Positional(Method):
    '''A positional method: ranks on a ballot earn points, most points win.

    :param rank_scorer: Determines the points for each rank of a ballot.
        Either a :class:`kingmaker.component.rankscore.RankScorer` or the
        name of one (``'borda'``, ``'dowdall'``).
    '''
    ballot_type = Ordinal

    def __init__(self,
                 rank_scorer: Union[
                     str, kingmaker.component.rankscore.RankScorer
                 ] = 'borda',
                 ):
        self.rank_scorer = kingmaker.component.rankscore.construct(
            rank_scorer
        )

    def outcome(self,
                candidates: Sequence[Candidate],
                profile: Iterable[Ordinal],
                ) -> SingleWinner:
        return best_outcome(candidates, self.totals(candidates, profile))

    def totals(self,
               candidates: Sequence[Candidate],
               profile: Iterable[Ordinal],
               ) -> Dict[int, Number]:
        '''Sum the rank points of all candidates.'''
        totals = initial_totals(candidates)
        for ballot in self.prepare(profile):
            for cand_id, points in zip(
                ballot, self.rank_scorer.scores(len(ballot))
            ):
                credit(totals, cand_id, points)
        return totals


class Borda(Positional):
    '''Borda count.

    A ballot ranking ``L`` candidates gives ``L - 1 - i + base`` points to
    the candidate at (zero-based) position ``i``; the candidate with the
    most points wins.

    :param base: Points for the candidate ranked last on a ballot. The
        default of 1 ranks the last ranked candidate above the unranked
        ones; use 0 for the variant where the first choice earns ``L - 1``.
    '''
    def __init__(self, base: int = 1):
        super().__init__(kingmaker.component.rankscore.Borda(base=base))
        self.base = base

    def to_dict(self) -> Dict[str, Any]:
        return {
            'class': scoped_class_name(self),
            'base': self.base,
        }


@simple_serialization
class RandomDictator(Method):
    '''Random dictatorship: the top choice of a single ballot wins.

    The dictator is the first ballot of the profile; profiles produced by an
    election are shuffled by the run's random source, so this is a random
    voter. Never produces a tie.
    '''
    ballot_type = Ordinal

    def outcome(self,
                candidates: Sequence[Candidate],
                profile: Iterable[Ordinal],
                ) -> SingleWinner:
        profile = self.prepare(profile)
        if not profile or not profile[0]:
            return SingleWinner.none()
        check_referenced(profile, initial_totals(candidates))
        return SingleWinner.win(candidates, profile[0][0])
