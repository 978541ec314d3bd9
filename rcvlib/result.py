'''Outcomes of a tally: per-round snapshots and the final election result.

Both are produced by the tally algorithms only and are immutable. Vote counts
are exposed as read-only mappings keyed by option identifier.
'''

from __future__ import annotations

import dataclasses
import types
from typing import Mapping, Optional, Tuple

from rcvlib.candidate import Option, OptionId
from rcvlib.persist import simple_serialization


@simple_serialization
@dataclasses.dataclass(frozen=True)
class RoundSummary:
    '''Vote counts in a single counting round.

    :param round_number: 1-based number of the round.
    :param vote_counts: Number of ballots counted for each option still in the
        race at the start of the round (including those with no votes).
    :param eliminated_option_id: The option eliminated at the end of this
        round; None for the final round (winner found or tie reached).
    '''
    round_number: int
    vote_counts: Mapping[OptionId, int] = dataclasses.field(hash=False)
    eliminated_option_id: Optional[OptionId] = None

    def __post_init__(self):
        if self.round_number < 1:
            raise ValueError(
                f'round number must be positive, got {self.round_number}'
            )
        counts = dict(self.vote_counts)
        negative = {oid: n for oid, n in counts.items() if n < 0}
        if negative:
            raise ValueError(f'negative vote counts: {negative}')
        object.__setattr__(
            self, 'vote_counts', types.MappingProxyType(counts)
        )

    @property
    def total_votes(self) -> int:
        '''Number of ballots that counted for some option in this round.'''
        return sum(self.vote_counts.values())

    @property
    def is_final(self) -> bool:
        return self.eliminated_option_id is None


@simple_serialization
@dataclasses.dataclass(frozen=True)
class ElectionResult:
    '''Complete outcome of an election.

    The election ends either with a single winner or with a tie of two or
    more options, never both.

    :param winner: The winning option; must be None if the election ended
        in a tie.
    :param rounds: Summaries of all counting rounds, in order.
    :param final_vote_totals: Vote counts of the options remaining in the
        last round.
    :param tied_options: Options tied for the win; empty unless the election
        ended in a tie.
    :raises ValueError: If the winner and tie settings are inconsistent or
        there are no rounds.
    '''
    winner: Optional[Option]
    rounds: Tuple[RoundSummary, ...]
    final_vote_totals: Mapping[OptionId, int] = dataclasses.field(hash=False)
    tied_options: Tuple[Option, ...] = ()
    is_tie: bool = dataclasses.field(init=False)

    def __post_init__(self):
        rounds = tuple(self.rounds)
        tied = tuple(self.tied_options)
        if not rounds:
            raise ValueError('result must contain at least one round')
        if tied:
            if self.winner is not None:
                raise ValueError(
                    f'cannot have both a winner ({self.winner})'
                    f' and a tie ({tied})'
                )
            if len(tied) < 2:
                raise ValueError(
                    f'a tie needs at least two options, got {tied}'
                )
        elif self.winner is None:
            raise ValueError('winner is required when there is no tie')
        object.__setattr__(self, 'rounds', rounds)
        object.__setattr__(self, 'tied_options', tied)
        object.__setattr__(self, 'is_tie', bool(tied))
        object.__setattr__(
            self,
            'final_vote_totals',
            types.MappingProxyType(dict(self.final_vote_totals))
        )

    @property
    def final_round(self) -> RoundSummary:
        return self.rounds[-1]

    @property
    def eliminated_option_ids(self) -> Tuple[OptionId, ...]:
        '''Identifiers of the eliminated options, in order of elimination.'''
        return tuple(
            rnd.eliminated_option_id for rnd in self.rounds
            if not rnd.is_final
        )
