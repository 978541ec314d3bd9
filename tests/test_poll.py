import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import rcvlib.evaluate.core
from rcvlib.candidate import Option, ConfigurationError
from rcvlib.evaluate.sequential import InstantRunoffTally
from rcvlib.poll import Poll
from rcvlib.result import ElectionResult, RoundSummary
from rcvlib.vote import RankedBallot, ValidationError

OPTIONS = [Option('p', 'Pizza'), Option('s', 'Sushi'), Option('t', 'Tacos')]


class RecordingTally(rcvlib.evaluate.core.TallyAlgorithm):
    def __init__(self):
        self.calls = []

    def compute(self, options, ballots, random_source=None):
        self.calls.append((options, ballots, random_source))
        return ElectionResult(
            options[0], [RoundSummary(1, {options[0].id: 1})],
            {options[0].id: 1}
        )


def test_construct():
    poll = Poll(iter(OPTIONS), title='Lunch?')
    assert poll.options == tuple(OPTIONS)
    assert poll.option_ids == ('p', 's', 't')
    assert poll.title == 'Lunch?'
    assert poll.get_option('s') == OPTIONS[1]
    with pytest.raises(KeyError):
        poll.get_option('x')


@pytest.mark.parametrize('options', [
    [],
    [Option('p', 'Pizza')],
    [Option('p', 'Pizza'), Option('p', 'Pasta')],
])
def test_construct_invalid(options):
    with pytest.raises(ConfigurationError):
        Poll(options)


def test_tally():
    poll = Poll(OPTIONS)
    result = poll.tally(
        [('s', 'p'), ('p', ), RankedBallot(['s']), ('t', 's'), ['s']],
        InstantRunoffTally(),
        random_source=1,
    )
    assert result.winner == OPTIONS[1]
    assert result.rounds[0].vote_counts == {'p': 1, 's': 3, 't': 1}


def test_tally_unknown_option():
    tally = RecordingTally()
    with pytest.raises(ValidationError) as excinfo:
        Poll(OPTIONS).tally([('p', ), ('s', 'x'), ('y', )], tally)
    assert excinfo.value.ballot_index == 1
    assert excinfo.value.option_id == 'x'
    assert not tally.calls


def test_tally_duplicate_ranking():
    with pytest.raises(ValidationError):
        Poll(OPTIONS).tally([('p', 's', 'p')], InstantRunoffTally())


def test_tally_string_ballots():
    tally = RecordingTally()
    with pytest.raises(ValidationError) as excinfo:
        Poll(OPTIONS).tally(['ps', 'ps', 't'], tally)
    assert excinfo.value.ballot_index == 0
    assert not tally.calls


def test_tally_empty():
    with pytest.raises(rcvlib.evaluate.core.EmptyInputError):
        Poll(OPTIONS).tally([], InstantRunoffTally())


def test_tally_delegates():
    tally = RecordingTally()
    result = Poll(OPTIONS).tally([('t', )], tally, random_source=42)
    assert result.winner == OPTIONS[0]
    options, ballots, random_source = tally.calls[0]
    assert options == tuple(OPTIONS)
    assert ballots == [RankedBallot(['t'])]
    assert random_source == 42


def test_tally_reproducible():
    poll = Poll(OPTIONS)
    votes = [('p', 't'), ('p', ), ('s', 't'), ('s', ), ('t', )] * 2
    results = [poll.tally(votes, InstantRunoffTally(), 5) for _ in range(3)]
    assert results[0] == results[1] == results[2]


def test_validate():
    poll = Poll(OPTIONS)
    assert poll.validate([['t', 's'], []]) == [
        RankedBallot(['t', 's']), RankedBallot()
    ]


def test_immutable():
    poll = Poll(OPTIONS, title='Lunch?')
    for attr in ('options', '_options', '_options_by_id', '_title', 'extra'):
        with pytest.raises(AttributeError):
            setattr(poll, attr, None)
    assert poll.options == tuple(OPTIONS)
    assert poll.title == 'Lunch?'
