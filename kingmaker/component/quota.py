'''Quota functions used in transferable vote methods.

A quota function takes the total number of ballots and the number of seats
to fill and returns the number of votes a candidate needs to be elected.
The unrounded quota functions return fractions to retain exact values.

All supported quota functions are assembled in the `QUOTAS` dictionary keyed
by their name. `get()` retrieves from this dictionary by string key;
`construct()` also accepts callables and passes them through.
'''

from fractions import Fraction
from numbers import Number

import kingmaker.component.core


QUOTAS = {}


quota_mark, get, construct = kingmaker.component.core.register_functions(
    QUOTAS, 'quota'
)


@quota_mark
def droop(votes: int, seats: int) -> int:
    '''Droop quota, the most widely used one.

    The smallest integer quota guaranteeing that no more candidates than
    seats can reach it: ``floor(votes / (seats + 1)) + 1``.
    '''
    return votes // (seats + 1) + 1


@quota_mark
def hare(votes: int, seats: int) -> Fraction:
    '''Hare quota, the most basic one (unrounded).'''
    return Fraction(votes, seats)


@quota_mark
def hagenbach_bischoff(votes: int, seats: int) -> Fraction:
    '''Hagenbach-Bischoff quota (unrounded).

    Reaching it exactly can elect one candidate more than there are seats,
    so it is normally used with a strict comparison.
    '''
    return Fraction(votes, seats + 1)


def constant(quota: Number):
    '''Make a quota function always returning the given quota.'''
    def constant_quota(votes: int, seats: int) -> Number:
        return quota
    return constant_quota
