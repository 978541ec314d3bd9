import sys
import os
import dataclasses

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from rcvlib.candidate import Option
from rcvlib.result import RoundSummary, ElectionResult

A = Option('a', 'Alice')
B = Option('b', 'Bob')


def test_round_summary():
    rnd = RoundSummary(2, {'a': 3, 'b': 0}, 'b')
    assert rnd.round_number == 2
    assert rnd.vote_counts == {'a': 3, 'b': 0}
    assert rnd.total_votes == 3
    assert not rnd.is_final
    assert RoundSummary(1, {'a': 1}).is_final


def test_round_summary_read_only():
    counts = {'a': 3, 'b': 1}
    rnd = RoundSummary(1, counts)
    counts['a'] = 10
    assert rnd.vote_counts['a'] == 3
    with pytest.raises(TypeError):
        rnd.vote_counts['a'] = 5
    with pytest.raises(dataclasses.FrozenInstanceError):
        rnd.round_number = 3


@pytest.mark.parametrize('round_number, counts', [
    (0, {'a': 1}),
    (-1, {'a': 1}),
    (1, {'a': -1}),
])
def test_round_summary_invalid(round_number, counts):
    with pytest.raises(ValueError):
        RoundSummary(round_number, counts)


def test_result_winner():
    result = ElectionResult(A, [RoundSummary(1, {'a': 2, 'b': 1})],
                            {'a': 2, 'b': 1})
    assert result.winner == A
    assert not result.is_tie
    assert result.tied_options == ()
    assert isinstance(result.rounds, tuple)
    assert result.final_round.round_number == 1
    assert result.eliminated_option_ids == ()


def test_result_tie():
    rounds = [
        RoundSummary(1, {'a': 2, 'b': 2, 'c': 1}, 'c'),
        RoundSummary(2, {'a': 2, 'b': 2}),
    ]
    result = ElectionResult(None, rounds, {'a': 2, 'b': 2}, [A, B])
    assert result.winner is None
    assert result.is_tie
    assert result.tied_options == (A, B)
    assert result.eliminated_option_ids == ('c', )


def test_result_equality():
    make = lambda: ElectionResult(A, [RoundSummary(1, {'a': 1})], {'a': 1})
    assert make() == make()


@pytest.mark.parametrize('winner, tied', [
    (None, []),
    (A, [A, B]),
    (None, [A]),
])
def test_result_inconsistent(winner, tied):
    with pytest.raises(ValueError):
        ElectionResult(winner, [RoundSummary(1, {'a': 1, 'b': 1})],
                       {'a': 1, 'b': 1}, tied)


def test_result_no_rounds():
    with pytest.raises(ValueError):
        ElectionResult(A, [], {'a': 1})
