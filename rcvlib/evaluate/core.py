'''General tally algorithm machinery.'''

import abc
import random
from typing import Any, Iterable, Sequence, Union

from rcvlib.candidate import Option
from rcvlib.result import ElectionResult
from rcvlib.vote import RankedBallot


RandomSource = Union[int, random.Random, None]


class EmptyInputError(Exception):
    '''A tally was requested with no ballots to count.'''
    def __init__(self, message: str = 'cannot tally an election with no'
                                      ' ballots'):
        super().__init__(message)


class TallyAlgorithm(metaclass=abc.ABCMeta):
    '''Count ranked ballots to determine the winner of an election.

    A root abstract base class for all counting methods. The algorithms do
    not check that the ballots only rank the given options; use
    :class:`rcvlib.poll.Poll` for that. Options ranked on a ballot but not
    given to the algorithm are never eligible to receive its vote.
    '''
    @abc.abstractmethod
    def compute(self,
                options: Sequence[Option],
                ballots: Iterable[RankedBallot],
                random_source: RandomSource = None,
                ) -> ElectionResult:
        '''Count the ballots and determine the election outcome.

        :param options: Options standing in the election.
        :param ballots: Ranked ballots cast by voters.
        :param random_source: Source of randomness for tiebreaking: a seed,
            a random generator, or None to draw from a fresh unseeded one.
        :raises EmptyInputError: If there are no ballots.
        '''
        raise NotImplementedError


def resolve_random_source(random_source: RandomSource = None
                          ) -> random.Random:
    '''Return a random generator to use for tiebreaking.

    :param random_source: An integer seed (for a stable outcome), a ready
        random generator (used as is) or None (a generator seeded from the
        operating system, so outcomes vary between runs).
    '''
    if random_source is None:
        return random.Random()
    elif isinstance(random_source, random.Random):
        return random_source
    elif isinstance(random_source, int) and not isinstance(random_source,
                                                           bool):
        return random.Random(random_source)
    else:
        raise TypeError(
            f'invalid random source: {random_source!r}, must be an int seed,'
            ' a random.Random instance or None'
        )


def pick_random(candidates: Sequence[Any],
                rng: random.Random,
                ) -> Any:
    '''Choose one of the candidates uniformly at random.

    Draws exactly one integer from the generator, so that a seeded generator
    always makes the same choice for the same candidate list.
    '''
    return candidates[rng.randrange(len(candidates))]
