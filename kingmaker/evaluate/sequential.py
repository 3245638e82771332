'''Methods that count ranked ballots in rounds, transferring votes.

This hosts instant-runoff voting (:class:`InstantRunoff`) and its
multi-winner relative, the single transferable vote
(:class:`TransferableVote`). Both methods look at the top choice of each
ballot among the candidates still in the count; striking a candidate from
the count thus transfers its ballots to their next choice.
'''

import logging
from numbers import Number
from typing import Callable, Collection, Dict, Iterable, List, Sequence, Union

import kingmaker.component.quota
from kingmaker.ballot import Ordinal
from kingmaker.candidate import Candidate
from kingmaker.evaluate.core import Method, SeatCountError, check_referenced
from kingmaker.evaluate.core import initial_totals
from kingmaker.outcome import SingleWinner, MultiWinner
from kingmaker.persist import simple_serialization


logger = logging.getLogger(__name__)


def count_top_choices(tally: Dict[Ordinal, int],
                      hopeful: Collection[int],
                      ) -> Dict[int, int]:
    '''Count the ballots by their top choice among hopeful candidates.

    Ballots ranking none of the hopeful candidates are exhausted and do not
    count towards any candidate.

    :param tally: Counts of distinct ballots.
    :param hopeful: Ids of candidates still in the count.
    '''
    totals = {cand_id: 0 for cand_id in hopeful}
    for ballot, count in tally.items():
        for cand_id in ballot:
            if cand_id in totals:
                totals[cand_id] += count
                break
    return totals


@simple_serialization
class InstantRunoff(Method):
    '''Instant-runoff voting (IRV), also called the alternative vote.

    In each round, the top remaining choices of the ballots are counted.
    A candidate holding a majority (more than half) of the ballots that are
    not yet exhausted wins. Otherwise, all candidates tied for the lowest
    positive count are eliminated together and the count is repeated.

    If all candidates with votes are tied for the lowest count, they tie for
    the win. An empty profile (or one where all ballots are empty) produces
    no winner.
    '''
    ballot_type = Ordinal

    def outcome(self,
                candidates: Sequence[Candidate],
                profile: Iterable[Ordinal],
                ) -> SingleWinner:
        profile = self.prepare(profile)
        hopeful = set(initial_totals(candidates))
        check_referenced(profile, hopeful)
        tally = {ballot: n for ballot, n in profile.tally().items() if ballot}
        round_i = 1
        while True:
            totals = count_top_choices(tally, hopeful)
            n_active = sum(totals.values())
            if n_active == 0:
                logger.info('all ballots exhausted, no winner')
                return SingleWinner.none()
            logger.debug('round %d totals: %s', round_i, totals)
            majority = n_active // 2 + 1
            contenders = {
                cand_id: total for cand_id, total in totals.items()
                if total > 0
            }
            leader = max(contenders, key=contenders.get)
            if contenders[leader] >= majority:
                logger.info('%s has a majority in round %d', leader, round_i)
                return SingleWinner.win(candidates, leader)
            lowest = min(contenders.values())
            losers = sorted(
                cand_id for cand_id, total in contenders.items()
                if total == lowest
            )
            if len(losers) == len(contenders):
                logger.info('all remaining candidates tied: %s', losers)
                return SingleWinner.tie(candidates, losers)
            logger.info('eliminating %s', losers)
            hopeful.difference_update(losers)
            round_i += 1


@simple_serialization
class TransferableVote(Method):
    '''Single transferable vote (STV) with whole-ballot transfers.

    The quota is computed once from the number of ballots. In each count,
    the top remaining choices of the ballots are counted. If any candidate
    reaches the quota, the one with the most votes is elected (lowest id on
    equal counts) and struck from the count, so all its ballots pass to
    their next choice. Otherwise, the candidate with the fewest votes is
    eliminated (lowest id on equal counts). When no more candidates remain
    in the count than there are seats left, all of them are elected.

    Exactly `seats` candidates are always elected from a non-empty profile;
    an empty profile elects nobody. If all ballots are empty, nobody reaches
    the quota and the candidates with the lowest ids are eliminated first.

    :param seats: Number of seats to fill.
    :param quota_function: A callable producing the quota from the number
        of ballots and seats, or the name of one from
        :mod:`kingmaker.component.quota`.
    :param simultaneous: Elect all candidates reaching the quota in a single
        count at once (in the order of their votes) instead of only the
        strongest one.
    :raises SeatCountError: If more seats are to be filled than there are
        candidates.
    '''
    ballot_type = Ordinal

    def __init__(self,
                 seats: int,
                 quota_function: Union[
                     str, Callable[[int, int], Number]
                 ] = 'droop',
                 simultaneous: bool = False,
                 ):
        if not isinstance(seats, int) or seats < 1:
            raise ValueError(f'seat count must be a positive integer: {seats}')
        self.seats = seats
        self.quota_function = kingmaker.component.quota.construct(
            quota_function
        )
        self.simultaneous = simultaneous

    def check_candidates(self, candidates: Sequence[Candidate]) -> None:
        super().check_candidates(candidates)
        if self.seats > len(candidates):
            raise SeatCountError(self.seats, len(candidates))

    def outcome(self,
                candidates: Sequence[Candidate],
                profile: Iterable[Ordinal],
                ) -> MultiWinner:
        self.check_candidates(candidates)
        profile = self.prepare(profile)
        hopeful = set(initial_totals(candidates))
        check_referenced(profile, hopeful)
        if not profile:
            return MultiWinner.none()
        quota = self.quota_function(len(profile), self.seats)
        logger.info('quota computed at %g', quota)
        tally = profile.tally()
        if not any(tally):
            logger.info('all ballots empty, seats filled by elimination order')
        elected = []
        count_i = 1
        while len(elected) < self.seats:
            open_seats = self.seats - len(elected)
            if len(hopeful) <= open_seats:
                logger.info('electing all remaining: %s', sorted(hopeful))
                elected.extend(sorted(hopeful))
                break
            totals = count_top_choices(tally, hopeful)
            logger.debug('count %d totals: %s', count_i, totals)
            ranked = sorted(totals, key=lambda cand_id: (-totals[cand_id],
                                                         cand_id))
            reaching = [c for c in ranked if totals[c] >= quota]
            if reaching:
                newly_elected = self._select_elected(reaching, open_seats)
                logger.info('%s elected by quota', newly_elected)
                elected.extend(newly_elected)
                hopeful.difference_update(newly_elected)
            else:
                eliminated = min(totals, key=lambda cand_id: (totals[cand_id],
                                                              cand_id))
                logger.info('eliminating %s', eliminated)
                hopeful.remove(eliminated)
            count_i += 1
        return MultiWinner.elected(candidates, elected)

    def _select_elected(self, reaching: List[int], open_seats: int
                        ) -> List[int]:
        if self.simultaneous:
            return reaching[:open_seats]
        else:
            return reaching[:1]

    def __repr__(self) -> str:
        return f'TransferableVote(seats={self.seats})'
