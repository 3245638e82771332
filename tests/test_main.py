import sys
import os
import json

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import kingmaker.__main__ as cli
import kingmaker.evaluate


def test_parse_defaults():
    args = cli.argparser.parse_args([])
    assert args.method == 'plurality'
    assert args.runs == 1000
    assert args.seed == 0
    assert args.workers is None
    assert not args.as_json


@pytest.mark.parametrize('method', list(cli.METHODS.keys()))
def test_example_election(method, capsys):
    cli.main(method=method, runs=10, workers=1, quiet=True)
    output = capsys.readouterr().out
    assert output.startswith('Ran 10 elections with 100 voters')


def test_json_output(capsys):
    cli.main(method='irv', runs=10, workers=1, as_json=True, quiet=True)
    report = json.loads(capsys.readouterr().out)
    assert sum(item['times'] for item in report['outcomes']) == 10
    assert report['configuration']['method']['class'] \
        == 'kingmaker.evaluate.sequential.InstantRunoff'


def test_example_blocs_match_method():
    for make_method in cli.METHODS.values():
        method = make_method(2)
        election = cli.example_election(method)
        assert all(bloc.ballot_type is method.ballot_type
                   for bloc in election.blocs)
