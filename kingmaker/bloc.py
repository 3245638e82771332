'''Voting blocs: groups of voters sharing a preference model and a strategy.'''

import random
from typing import Any, Dict, Iterable, Sequence

from kingmaker.ballot import Ordinal, Profile, BallotTypeError
from kingmaker.candidate import Candidate
from kingmaker.preference.core import Preference
from kingmaker.tactic import RankingTactic, Strategy


class VotingBloc:
    '''A group of voters sharing a preference model and a strategy.

    Every member draws an honest ballot from the preference model
    independently; when voting, each honest ballot is rewritten by one
    tactic drawn from the strategy.

    :param preference: The preference model of the members.
    :param members: Number of voters in the bloc.
    :param strategy: How the members vote strategically. Either a
        :class:`kingmaker.tactic.Strategy`, a single tactic, an iterable of
        (tactic, weight) pairs, or None for honest voting.
    :raises BallotTypeError: If the strategy contains a tactic that cannot
        rewrite the ballots of the preference model.
    '''
    def __init__(self,
                 preference: Preference,
                 members: int,
                 strategy: Any = None,
                 ):
        if not isinstance(preference, Preference):
            raise TypeError(f'not a preference model: {preference!r}')
        if isinstance(members, bool) or not isinstance(members, int) \
                or members < 0:
            raise ValueError(
                f'member count must be a non-negative integer: {members!r}'
            )
        self._preference = preference
        self._members = members
        self._strategy = Strategy.construct(strategy)
        if preference.ballot_type is not Ordinal:
            for tactic, weight in self._strategy.tactics:
                if isinstance(tactic, RankingTactic):
                    raise BallotTypeError(preference.ballot_type, Ordinal)

    @property
    def preference(self) -> Preference:
        return self._preference

    @property
    def members(self) -> int:
        return self._members

    @property
    def strategy(self) -> Strategy:
        return self._strategy

    @property
    def ballot_type(self) -> type:
        return self._preference.ballot_type

    def realize(self,
                candidates: Sequence[Candidate],
                rng: random.Random,
                ) -> Profile:
        '''Draw the honest ballots of all members.'''
        return self._preference.sample(candidates, self._members, rng)

    def vote(self,
             candidates: Sequence[Candidate],
             rng: random.Random,
             ) -> Profile:
        '''Draw the ballots the members actually cast.

        Each honest ballot is rewritten by the strategy right after it is
        drawn, so the draws from the random source interleave.
        '''
        return Profile(
            self._iter_votes(candidates, rng),
            ballot_type=self.ballot_type,
        )

    def _iter_votes(self,
                    candidates: Sequence[Candidate],
                    rng: random.Random,
                    ) -> Iterable[Any]:
        for i in range(self._members):
            honest = self._preference.draw(candidates, rng)
            yield self._strategy.apply(honest, rng)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'preference': self._preference.to_dict(),
            'strategy': self._strategy.to_dict(),
            'members': self._members,
        }

    def __repr__(self) -> str:
        return (f'VotingBloc({self._preference!r}, {self._members}, '
                f'{self._strategy!r})')
