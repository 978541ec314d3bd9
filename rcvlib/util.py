'''Various utility functions for other modules of rcvlib.

There should normally be no need to use these functions directly.
'''

import operator
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from rcvlib.candidate import OptionId
from rcvlib.vote import RankedBallot


def count_first_preferences(ballots: Iterable[RankedBallot],
                            eligible: Sequence[OptionId],
                            ) -> Dict[OptionId, int]:
    '''Count each ballot for its most preferred eligible option.

    Ballots ranking none of the eligible options (exhausted ballots) are not
    counted for anyone.

    :param ballots: Ranked ballots.
    :param eligible: Identifiers of the options still in the race. Determines
        the key order of the result.
    :returns: Vote counts for all eligible options, zero counts included.
    '''
    counts = {option_id: 0 for option_id in eligible}
    for ballot in ballots:
        choice = ballot.first_choice(counts)
        if choice is not None:
            counts[choice] += 1
    return counts


def lowest_candidates(counts: Dict[OptionId, int]) -> List[OptionId]:
    '''Return all options sharing the lowest vote count, in key order.'''
    lowest = min(counts.values())
    return [option_id for option_id, n in counts.items() if n == lowest]


def sorted_votes(votes: Dict[Any, int],
                 descending: bool = True,
                 ) -> List[Tuple[Any, int]]:
    '''Return votes items sorted by value.'''
    return list(sorted(
        votes.items(),
        key=operator.itemgetter(1),
        reverse=descending
    ))
