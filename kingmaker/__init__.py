"""Kingmaker - a simulator of strategic voting.

Kingmaker simulates elections many times over to study how strategic
voting changes their outcomes. An election is assembled from:

-   Candidates standing in it (the ``candidate`` module).
-   Voting blocs (the ``bloc`` module): groups of voters sharing a
    preference model that draws their honest ballots (the ``preference``
    subpackage - impartial culture, Mallows, Plackett-Luce or an explicit
    set of ballots) and a strategy, a weighted mixture of tactics that
    rewrite the honest ballots into the cast ones (the ``tactic`` module).
-   A voting method that tabulates the ballots into an outcome (the
    ``evaluate`` subpackage - plurality, approval, Borda, random dictator,
    instant-runoff, single transferable vote and STAR).

The :class:`Election` object from the ``election`` module combines these
and runs the election once or many times in parallel with reproducible
randomness; its outcomes (the ``outcome`` module) can be tabulated into a
distribution of results.
"""

from kingmaker.election import Election
