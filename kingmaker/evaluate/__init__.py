'''Voting methods turning ballot profiles into election outcomes.

Every method is a subclass of :class:`kingmaker.evaluate.core.Method`,
declares the ballot type it counts in its ``ballot_type`` attribute and
provides an ``outcome(candidates, profile)`` method.

-   Single-winner methods producing a
    :class:`kingmaker.outcome.SingleWinner`: :class:`Plurality`,
    :class:`Approval`, :class:`Borda` (and the general
    :class:`Positional`), :class:`RandomDictator`, :class:`InstantRunoff`
    and :class:`Star`.
-   Multi-winner methods producing a :class:`kingmaker.outcome.MultiWinner`:
    :class:`TransferableVote`.
'''

from kingmaker.evaluate.core import *
from kingmaker.evaluate.sequential import InstantRunoff, TransferableVote
from kingmaker.evaluate.cardinal import Star
