'''Tactics and strategies of strategic voting.

A tactic rewrites an honest ballot into a strategic one. Tactics are applied
after the honest ballot has been drawn from the preference model, one ballot
at a time, and never modify the ballot in place.

The tactics implemented here are the classic strategic behaviours for ranked
ballots:

-   :class:`Identity` - vote honestly (valid for all ballot types),
-   :class:`Compromise` - rank more electable candidates first,
-   :class:`Burial` - rank strong rivals last,
-   :class:`Pushover` - rank weak candidates right behind the preferred ones
    so that they knock out stronger rivals in runoff rounds.

A :class:`Strategy` is a weighted mixture of tactics: each ballot of a voting
bloc is rewritten by one tactic drawn from the mixture.

All tactics ignore candidates that do not appear on the ballot and never
drop or duplicate a candidate. Target ids given more than once count at
their first occurrence only.
'''

import abc
import random
from numbers import Number
from typing import Any, Iterable, List, Sequence, Tuple, Union

import kingmaker.util
from kingmaker.ballot import Ordinal, BallotTypeError
from kingmaker.persist import simple_serialization, scoped_class_name


class Tactic(metaclass=abc.ABCMeta):
    '''A rule rewriting an honest ballot into a strategic ballot.'''

    @abc.abstractmethod
    def apply(self, ballot: Any) -> Any:
        '''Return the strategic version of the ballot (of the same type).'''
        raise NotImplementedError


@simple_serialization
class Identity(Tactic):
    '''Honest voting: the ballot is returned unchanged.'''

    def apply(self, ballot: Any) -> Any:
        return ballot

    def __repr__(self) -> str:
        return 'Identity()'


class RankingTactic(Tactic):
    '''An abstract tactic that reorders ranked ballots.'''

    def apply(self, ballot: Ordinal) -> Ordinal:
        if not isinstance(ballot, Ordinal):
            raise BallotTypeError(type(ballot), Ordinal)
        return Ordinal(self.reorder(ballot))

    @abc.abstractmethod
    def reorder(self, ranking: Ordinal) -> List[int]:
        raise NotImplementedError


def _unique(targets: Iterable[int]) -> Tuple[int, ...]:
    # repeated ids keep their first position
    return tuple(dict.fromkeys(targets))


def _present(targets: Sequence[int], ranking: Ordinal) -> List[int]:
    return [cand_id for cand_id in targets if cand_id in ranking]


@simple_serialization
class Compromise(RankingTactic):
    '''Rank the compromise candidates first, in the given order.

    The remaining candidates follow in their honest order.

    :param targets: Ids of the compromise (more electable) candidates.
    '''
    def __init__(self, targets: Sequence[int]):
        self.targets = _unique(targets)

    def reorder(self, ranking: Ordinal) -> List[int]:
        front = _present(self.targets, ranking)
        return front + [c for c in ranking if c not in front]

    def __repr__(self) -> str:
        return f'Compromise({list(self.targets)})'


@simple_serialization
class Burial(RankingTactic):
    '''Rank the buried candidates last, in the given order.

    The remaining candidates keep their honest order.

    :param targets: Ids of the candidates to bury (usually strong rivals).
    '''
    def __init__(self, targets: Sequence[int]):
        self.targets = _unique(targets)

    def reorder(self, ranking: Ordinal) -> List[int]:
        back = _present(self.targets, ranking)
        return [c for c in ranking if c not in back] + back


@simple_serialization
class Pushover(RankingTactic):
    '''Rank the preferred, then the pushover candidates, then the rest.

    :param preferred: Ids of the candidates the voter actually wants elected.
    :param pushover: Ids of weak candidates expected to lose to the
        preferred ones in a runoff.
    '''
    def __init__(self, preferred: Sequence[int], pushover: Sequence[int]):
        self.preferred = _unique(preferred)
        self.pushover = _unique(pushover)

    def reorder(self, ranking: Ordinal) -> List[int]:
        front = _present(self.preferred, ranking)
        front += [
            c for c in _present(self.pushover, ranking) if c not in front
        ]
        return front + [c for c in ranking if c not in front]


class Strategy:
    '''A weighted mixture of tactics.

    Weights need not sum to one; they are normalized when drawing.
    A strategy with no tactics votes honestly.

    :param tactics: Pairs of tactics and their non-negative weights.
    :raises kingmaker.util.WeightError: If a weight is negative or not
        finite, or all weights are zero.
    '''
    def __init__(self,
                 tactics: Iterable[Tuple[Tactic, Number]] = (),
                 ):
        tactics = list(tactics)
        if not tactics:
            tactics = [(Identity(), 1)]
        for tactic, weight in tactics:
            if not isinstance(tactic, Tactic):
                raise TypeError(f'not a tactic: {tactic!r}')
        self.tactics = tactics
        self._chooser = kingmaker.util.WeightedChoice(
            weight for tactic, weight in tactics
        )

    @classmethod
    def construct(cls, strategy: Union['Strategy', Tactic, None,
                                       Iterable[Tuple[Tactic, Number]]]
                  ) -> 'Strategy':
        '''Create a strategy from a strategy, a single tactic or pairs.'''
        if isinstance(strategy, Strategy):
            return strategy
        elif strategy is None:
            return cls()
        elif isinstance(strategy, Tactic):
            return cls([(strategy, 1)])
        else:
            return cls(strategy)

    def choose(self, rng: random.Random) -> Tactic:
        '''Draw one tactic proportionally to its weight.'''
        return self.tactics[self._chooser.sample(rng)][0]

    def apply(self, ballot: Any, rng: random.Random) -> Any:
        '''Rewrite the ballot by a tactic drawn from the mixture.'''
        return self.choose(rng).apply(ballot)

    def to_dict(self):
        return {
            'class': scoped_class_name(self),
            'tactics': [
                {'tactic': tactic.to_dict(), 'weight': weight}
                for tactic, weight in self.tactics
            ],
        }

    def __repr__(self) -> str:
        return f'Strategy({self.tactics!r})'
