'''Polls: fixed option sets that validate and count ranked ballots.'''

import logging
from typing import Any, Iterable, List, Optional, Tuple

import rcvlib.evaluate.core
from rcvlib.candidate import Option, OptionId, check_options
from rcvlib.result import ElectionResult
from rcvlib.vote import RankedBallot, validate_ballots

logger = logging.getLogger(__name__)


class Poll:
    '''A ranked-choice poll over a fixed set of options.

    The poll checks that submitted ballots only rank its options and passes
    them to a tally algorithm to determine the outcome. It is immutable, so
    a single poll can be counted many times, even concurrently.

    :param options: Options the voters can rank; at least two, with unique
        identifiers. Their order is kept and used wherever options are listed
        (vote counts, tied options, last-place draws).
    :param title: Optional title of the poll (e.g. the question asked).
    :raises ConfigurationError: If the options are not a valid setup.
    '''
    __slots__ = ('_options', '_options_by_id', '_title')

    def __init__(self,
                 options: Iterable[Option],
                 title: Optional[str] = None,
                 ):
        checked = tuple(check_options(options))
        object.__setattr__(self, '_options', checked)
        object.__setattr__(
            self, '_options_by_id', {opt.id: opt for opt in checked}
        )
        object.__setattr__(self, '_title', title)

    @property
    def options(self) -> Tuple[Option, ...]:
        return self._options

    @property
    def option_ids(self) -> Tuple[OptionId, ...]:
        return tuple(self._options_by_id.keys())

    @property
    def title(self) -> Optional[str]:
        return self._title

    def get_option(self, option_id: OptionId) -> Option:
        '''Return the option with the given identifier.

        :raises KeyError: If the poll has no such option.
        '''
        try:
            return self._options_by_id[option_id]
        except KeyError:
            raise KeyError(f'unknown option: {option_id!r}')

    def validate(self, ballots: Iterable[Any]) -> List[RankedBallot]:
        '''Check that the ballots are valid for this poll.

        :param ballots: Ranked ballots, or plain sequences of option
            identifiers to be converted to them.
        :returns: The validated ballots.
        :raises ValidationError: If any of the ballots ranks an unknown
            option or ranks an option twice. No ballots are returned then.
        '''
        return validate_ballots(ballots, self._options_by_id)

    def tally(self,
              ballots: Iterable[Any],
              algorithm: rcvlib.evaluate.core.TallyAlgorithm,
              random_source: rcvlib.evaluate.core.RandomSource = None,
              ) -> ElectionResult:
        '''Validate the ballots and count them to determine the outcome.

        :param ballots: Ranked ballots, or plain sequences of option
            identifiers.
        :param algorithm: The counting method to use.
        :param random_source: A seed or random generator to make tiebreaking
            reproducible. If None, the algorithm draws from a fresh unseeded
            generator.
        :raises ValidationError: If any ballot is invalid.
        :raises EmptyInputError: If there are no ballots.
        '''
        validated = self.validate(ballots)
        logger.debug('%d ballots validated for %d options',
                     len(validated), len(self._options))
        return algorithm.compute(self._options, validated, random_source)

    def __setattr__(self, name, value):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def __repr__(self):
        return f'{self.__class__.__name__}({list(self._options)!r})'
