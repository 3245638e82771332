'''Preference models producing honest ballots.

A preference model is a probability distribution over ballots of a single
type. When a voter of a voting bloc casts a ballot, one ballot is drawn from
the bloc's preference model using the random source of the election run.
Preference models are immutable parameter bundles; all randomness comes
from the source passed to :meth:`Preference.draw`.
'''

import abc
import random
from numbers import Number
from typing import Any, Iterable, List, Mapping, Sequence, Tuple, Union

import kingmaker.util
from kingmaker.ballot import Profile, Nominal, Ordinal, Cardinal
from kingmaker.ballot import get_ballot_type
from kingmaker.candidate import Candidate, UnknownCandidateError
from kingmaker.persist import simple_serialization


class PreferenceError(ValueError):
    '''A preference model is configured in an unusable way.'''
    pass


class Preference(metaclass=abc.ABCMeta):
    '''A distribution over the ballots of a voter.

    Subclasses must set the ``ballot_type`` attribute to the type of ballots
    they produce.
    '''
    ballot_type: type

    @abc.abstractmethod
    def draw(self,
             candidates: Sequence[Candidate],
             rng: random.Random,
             ) -> Any:
        '''Draw a single ballot.

        :param candidates: Candidates standing in the election.
        :param rng: The random source of the election run.
        '''
        raise NotImplementedError

    def sample(self,
               candidates: Sequence[Candidate],
               n: int,
               rng: random.Random,
               ) -> Profile:
        '''Draw n ballots into a profile.'''
        return Profile(
            (self.draw(candidates, rng) for i in range(n)),
            ballot_type=self.ballot_type
        )

    def check_candidates(self, candidates: Sequence[Candidate]) -> None:
        '''Verify that all candidates the model refers to stand.

        :raises UnknownCandidateError: If the model refers to a candidate
            id that is not among the candidates.
        '''
        known = {cand.id for cand in candidates}
        for cand_id in self.referenced_ids():
            if cand_id not in known:
                raise UnknownCandidateError(cand_id)

    def referenced_ids(self) -> Iterable[int]:
        '''Candidate ids fixed in the model's parameters.'''
        return ()


@simple_serialization
class Impartial(Preference):
    '''Impartial culture: all ballots are equally likely.

    -   Ordinal ballots are drawn as uniformly random rankings of all
        candidates.
    -   Nominal ballots approve each candidate independently with
        probability one half.
    -   Cardinal ballots score each candidate independently with a uniformly
        random integer from zero to ``max_score``.

    :param ballot_type: Type of ballots to produce, either a ballot class or
        its lowercase name (``'ordinal'``, ``'nominal'``, ``'cardinal'``).
    :param max_score: The highest score for cardinal ballots.
    '''
    def __init__(self,
                 ballot_type: Union[type, str] = Ordinal,
                 max_score: int = 5,
                 ):
        self.ballot_type = get_ballot_type(ballot_type)
        if max_score < 0:
            raise PreferenceError(f'negative maximum score: {max_score}')
        self.max_score = max_score

    def draw(self,
             candidates: Sequence[Candidate],
             rng: random.Random,
             ) -> Any:
        if self.ballot_type is Ordinal:
            keyed = [(cand.id, rng.random()) for cand in candidates]
            keyed.sort(key=lambda item: item[1], reverse=True)
            return Ordinal(cand_id for cand_id, key in keyed)
        elif self.ballot_type is Nominal:
            return Nominal(
                cand.id for cand in candidates if rng.random() < .5
            )
        else:
            return Cardinal(
                (cand.id, rng.randint(0, self.max_score))
                for cand in candidates
            )


@simple_serialization
class PlackettLuce(Preference):
    '''The Plackett-Luce model of rankings by candidate strength.

    The ranking is built from the top by repeatedly drawing one of the
    candidates not yet ranked, with probability proportional to its weight.
    If all weights are equal, the rankings are uniformly random.

    Only the candidates that are given weights are ranked.

    :param weights: Positive weights of candidates keyed by candidate id,
        either as a mapping or as (id, weight) pairs.
    :raises PreferenceError: If there are no weights, any of them is not
        positive, or an id is repeated.
    '''
    ballot_type = Ordinal

    def __init__(self,
                 weights: Union[Mapping[int, Number],
                                Iterable[Tuple[int, Number]]],
                 ):
        pairs = list(weights.items() if hasattr(weights, 'items')
                     else weights)
        if not pairs:
            raise PreferenceError('Plackett-Luce model needs weights')
        ids = [cand_id for cand_id, weight in pairs]
        if len(set(ids)) != len(ids):
            raise PreferenceError(f'repeated candidate ids in weights: {ids}')
        for cand_id, weight in pairs:
            if isinstance(weight, bool) or not isinstance(weight, Number) \
                    or not weight > 0:
                raise PreferenceError(
                    f'weight of candidate {cand_id} must be positive,'
                    f' got {weight!r}'
                )
        kingmaker.util.check_weights(weight for cand_id, weight in pairs)
        self.weights = dict(pairs)

    def draw(self,
             candidates: Sequence[Candidate],
             rng: random.Random,
             ) -> Ordinal:
        remaining = list(self.weights.items())
        ranking = []
        while remaining:
            chooser = kingmaker.util.WeightedChoice(
                weight for cand_id, weight in remaining
            )
            cand_id, weight = remaining.pop(chooser.sample(rng))
            ranking.append(cand_id)
        return Ordinal(ranking)

    def referenced_ids(self) -> List[int]:
        return list(self.weights)


@simple_serialization
class Manual(Preference):
    '''Preferences given by a fixed set of real ballots.

    Each draw picks one of the ballots uniformly at random, with replacement.

    :param profile: The ballots to draw from.
    :raises PreferenceError: If the profile is empty.
    '''
    def __init__(self, profile: Iterable[Any]):
        if not isinstance(profile, Profile):
            profile = Profile(profile)
        if not profile:
            raise PreferenceError('manual preferences need some ballots')
        self.profile = profile
        self.ballot_type = profile.ballot_type

    def draw(self,
             candidates: Sequence[Candidate],
             rng: random.Random,
             ) -> Any:
        return self.profile[rng.randrange(len(self.profile))]

    def referenced_ids(self) -> List[int]:
        ids = set()
        for ballot in self.profile:
            ids.update(ballot)
        return sorted(ids)
