"""A commandline tool running an example strategic voting simulation.

Simulates a three-candidate election with three voting blocs many times
and shows how often each outcome occurs under the selected voting method.
"""

import argparse
import json
import logging
from typing import Callable, Dict, List, Optional

import kingmaker.evaluate
from kingmaker.bloc import VotingBloc
from kingmaker.candidate import Candidate
from kingmaker.election import Election, EXECUTORS
from kingmaker.preference import Impartial, Mallows
from kingmaker.ballot import Nominal, Cardinal
from kingmaker.tactic import Burial, Compromise, Identity

METHODS: Dict[str, Callable[[int], kingmaker.evaluate.Method]] = {
    'plurality': lambda seats: kingmaker.evaluate.Plurality(),
    'approval': lambda seats: kingmaker.evaluate.Approval(),
    'borda': lambda seats: kingmaker.evaluate.Borda(),
    'dowdall': lambda seats: kingmaker.evaluate.Positional('dowdall'),
    'random-dictator': lambda seats: kingmaker.evaluate.RandomDictator(),
    'irv': lambda seats: kingmaker.evaluate.InstantRunoff(),
    'stv': lambda seats: kingmaker.evaluate.TransferableVote(seats),
    'star': lambda seats: kingmaker.evaluate.Star(),
}

argparser = argparse.ArgumentParser(
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    '-m', '--method',
    choices=list(METHODS.keys()),
    default='plurality',
    help='voting method to tabulate the ballots with',
)
argparser.add_argument(
    '-n', '--runs',
    type=int,
    default=1000,
    help='number of simulated elections',
)
argparser.add_argument(
    '-s', '--seed',
    type=int,
    default=0,
    help='seed of the random source drawing the seeds of individual runs',
)
argparser.add_argument(
    '-w', '--workers',
    type=int,
    help='number of parallel workers (1 runs sequentially)',
)
argparser.add_argument(
    '-e', '--executor',
    choices=list(EXECUTORS.keys()),
    default='process',
    help='kind of the parallel worker pool',
)
argparser.add_argument(
    '-S', '--seats',
    type=int,
    default=2,
    help='seats to fill in multi-winner methods',
)
argparser.add_argument(
    '-j', '--json',
    dest='as_json',
    action='store_true',
    help='output the configuration and outcomes as JSON',
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all log messages',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any log messages',
)


def main(method: str = 'plurality',
         runs: int = 1000,
         seed: int = 0,
         workers: Optional[int] = None,
         executor: str = 'process',
         seats: int = 2,
         as_json: bool = False,
         verbose: bool = False,
         quiet: bool = False,
         ) -> None:
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    election = example_election(METHODS[method](seats))
    outcomes = election.run_many(runs, seed, workers=workers,
                                 executor=executor)
    if as_json:
        print(json.dumps(election.report(outcomes), indent=2))
    else:
        show_outcomes(election, outcomes)


def example_candidates() -> List[Candidate]:
    return [
        Candidate(0, 'A', 'DEM'),
        Candidate(1, 'B', 'REP'),
        Candidate(2, 'C'),
    ]


def example_blocs(ballot_type: type) -> List[VotingBloc]:
    '''Create the voting blocs of the example election.

    Ranked methods get three blocs with Mallows preferences centered on
    different rankings, some of their members voting tactically. Approval
    and score methods get blocs with impartial preferences.
    '''
    if ballot_type in (Nominal, Cardinal):
        return [
            VotingBloc(Impartial(ballot_type), members)
            for members in (40, 45, 15)
        ]
    return [
        VotingBloc(Mallows([0, 1, 2], 1.4), 40,
                   [(Identity(), .8), (Burial([1]), .2)]),
        VotingBloc(Mallows([1, 2, 0], 1.0), 45,
                   [(Identity(), .8)]),
        VotingBloc(Mallows([2, 0, 1], 1.2), 15,
                   [(Identity(), .8), (Compromise([0]), .2)]),
    ]


def example_election(method: kingmaker.evaluate.Method) -> Election:
    return Election(
        example_candidates(),
        example_blocs(method.ballot_type),
        method,
    )


def show_outcomes(election: Election, outcomes: list) -> None:
    '''Show how often each outcome occurred.'''
    print(f'Ran {len(outcomes)} elections with {election.n_voters} voters'
          f' under {election.method!r}')
    print()
    tabulated = sorted(
        election.tabulate(outcomes), key=lambda item: item[1], reverse=True
    )
    labels = [repr(outcome) for outcome, count in tabulated]
    n_just_chars = max((len(label) for label in labels), default=0)
    for label, (outcome, count) in zip(labels, tabulated):
        share = count / len(outcomes)
        print(label.ljust(n_just_chars), ' ', str(count).rjust(6),
              f'{share:8.1%}')


if __name__ == '__main__':
    main(**vars(argparser.parse_args()))
