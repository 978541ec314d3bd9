import sys
import os
import io

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import rcvlib.io.blt
from rcvlib.candidate import Option
from rcvlib.evaluate.sequential import InstantRunoffTally
from rcvlib.poll import Poll
from rcvlib.vote import RankedBallot

GARDENING = '''4 1
-2
3 1 3 0    # three voters
2 4 1 0
1 2 3 0
1 0
0
"Amy"
"Bob"
"Chuck"
"Diane"
"Gardening Club Election"
'''


def test_gardening():
    data = rcvlib.io.blt.loads(GARDENING)
    assert data.election_name == 'Gardening Club Election'
    assert data.options == [
        Option(1, 'Amy'), Option(3, 'Chuck'), Option(4, 'Diane')
    ]
    assert data.ballots == (
        [RankedBallot([1, 3])] * 3
        + [RankedBallot([4, 1])] * 2
        + [RankedBallot([3]), RankedBallot()]
    )


def test_gardening_tally():
    data = rcvlib.io.blt.load(io.StringIO(GARDENING))
    result = Poll(data.options).tally(data.ballots, InstantRunoffTally())
    assert result.winner == Option(1, 'Amy')
    assert [rnd.vote_counts for rnd in result.rounds] == [
        {1: 3, 3: 1, 4: 2},
        {1: 3, 4: 2},
    ]


def test_unnamed_candidates():
    data = rcvlib.io.blt.loads('3 1\n2 1 2 0\n1 3 0\n0\n')
    assert [opt.label for opt in data.options] == ['1', '2', '3']
    assert data.election_name is None
    assert len(data.ballots) == 3


def test_title_only():
    data = rcvlib.io.blt.loads('2 1\n1 1 0\n0\n"Referendum"\n')
    assert data.election_name == 'Referendum'
    assert [opt.label for opt in data.options] == ['1', '2']


def test_dumps():
    options = [Option('x', 'A'), Option('y', 'B')]
    ballots = [RankedBallot('xy'), RankedBallot('y'), RankedBallot('xy')]
    blt_text = rcvlib.io.blt.dumps(options, ballots, election_name='Test')
    assert blt_text == '2 1\n2 1 2 0\n1 2 0\n0\n"A"\n"B"\n"Test"\n'
    reloaded = rcvlib.io.blt.loads(blt_text)
    assert [opt.label for opt in reloaded.options] == ['A', 'B']
    assert sorted(b.preferences for b in reloaded.ballots) == [
        (1, 2), (1, 2), (2, )
    ]


def test_dump_unknown_option():
    with pytest.raises(ValueError):
        rcvlib.io.blt.dumps([Option('x', 'A')], [RankedBallot('z')])


def test_dump_file():
    out = io.StringIO()
    rcvlib.io.blt.dump(out, [Option(1, 'A'), Option(2, 'B')], [])
    assert out.getvalue() == '2 1\n0\n"A"\n"B"\n'


@pytest.mark.parametrize('text', [
    '',
    '2',
    '2 1 3',
    '2 1\n1 1 2 0\n',
    '2 1\n1 1 2\n0\n',
    '2 1\n1 1 1 0\n0\n',
    '2 1\n1 3 0\n0\n',
    '2 1\n1 1 x 0\n0\n',
    '2 1\n1 1 0\n-2\n0\n',
    '2 1\n-2 0\n1 1 0\n0\n',
    '2 1\n-3\n1 1 0\n0\n',
    '2 1\n-1 2\n1 1 0\n0\n',
    '2 1\n-1.5\n1 1 0\n0\n',
    '2 1\n0\n"A"\n"B"\n"C"\n"D"\n',
    '2 1\n0\nA\nB\n',
])
def test_parse_errors(text):
    with pytest.raises(rcvlib.io.blt.BLTParseError):
        rcvlib.io.blt.loads(text)


@pytest.mark.parametrize('text', [
    '3 2\n1 1 0\n0\n',
    '2 1\n1.5 1 2 0\n0\n',
])
def test_not_supported(text):
    with pytest.raises(rcvlib.io.blt.NotSupportedInBLT):
        rcvlib.io.blt.loads(text)
