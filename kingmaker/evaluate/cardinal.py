'''Methods that evaluate score (cardinal) ballots.'''

import logging
from typing import Dict, Iterable, Optional, Sequence, Tuple

import kingmaker.util
from kingmaker.ballot import Cardinal
from kingmaker.candidate import Candidate
from kingmaker.evaluate.core import Method, check_referenced, initial_totals
from kingmaker.outcome import SingleWinner
from kingmaker.persist import simple_serialization


logger = logging.getLogger(__name__)


@simple_serialization
class Star(Method):
    '''Score then automatic runoff (STAR) voting.

    In the scoring round, the scores of every candidate are summed and the
    two candidates with the highest totals advance to the runoff (equal
    totals advance the lower id). Only candidates scored on some ballot
    can advance; with less than two of them, or if no candidate has
    a positive score total, there is no winner.

    In the automatic runoff, every ballot gives one point to the finalist
    it scores higher (a finalist missing from the ballot scores zero);
    ballots scoring both equally give no point. The finalist with more
    runoff points wins; equal runoff points make a tie of both finalists.
    '''
    ballot_type = Cardinal

    def outcome(self,
                candidates: Sequence[Candidate],
                profile: Iterable[Cardinal],
                ) -> SingleWinner:
        profile = self.prepare(profile)
        check_referenced(profile, initial_totals(candidates))
        finalists = self.finalists(profile)
        if finalists is None:
            logger.info('too few candidates scored, no winner')
            return SingleWinner.none()
        first, second = finalists
        first_points, second_points = self.runoff(profile, first, second)
        logger.debug('runoff %s:%s = %d:%d',
                     first, second, first_points, second_points)
        if first_points > second_points:
            return SingleWinner.win(candidates, first)
        elif second_points > first_points:
            return SingleWinner.win(candidates, second)
        else:
            return SingleWinner.tie(candidates, [first, second])

    @staticmethod
    def score_totals(profile: Iterable[Cardinal]) -> Dict[int, int]:
        '''Sum the scores of all candidates scored on some ballot.'''
        totals = {}
        for ballot in profile:
            for cand_id, score in ballot.items():
                totals[cand_id] = totals.get(cand_id, 0) + score
        return totals

    def finalists(self, profile: Iterable[Cardinal]
                  ) -> Optional[Tuple[int, int]]:
        '''Return the ids of the two candidates advancing to the runoff.

        Returns None if less than two candidates were scored at all or
        no candidate has a positive score total.
        '''
        totals = self.score_totals(profile)
        logger.debug('score totals: %s', totals)
        if len(totals) < 2 or not max(totals.values()) > 0:
            return None
        ranked = kingmaker.util.sorted_votes(totals)
        return ranked[0][0], ranked[1][0]

    @staticmethod
    def runoff(profile: Iterable[Cardinal],
               first: int,
               second: int,
               ) -> Tuple[int, int]:
        '''Count the ballots preferring each of the finalists.'''
        first_points, second_points = 0, 0
        for ballot in profile:
            first_score = ballot.get(first, 0)
            second_score = ballot.get(second, 0)
            if first_score > second_score:
                first_points += 1
            elif second_score > first_score:
                second_points += 1
        return first_points, second_points
