'''Ranked ballots and their validation.

A ranked ballot lists the identifiers of the options the voter ranked, most
preferred first. Voters need not rank every option (a *partial* ballot); they
may even rank none, in which case the ballot counts for nobody in any round.
A ballot can never rank the same option twice.

Ballots are checked on two levels. Internal consistency (no repeated option)
is enforced by the :class:`RankedBallot` constructor. Whether the ranked
options actually stand in the election can only be decided against an option
set, which is what :func:`validate_ballots` (used by
:class:`rcvlib.poll.Poll`) does.
'''

import collections
from typing import Any, Collection, Dict, Iterable, List, Optional, Tuple

from rcvlib.candidate import OptionId
from rcvlib.persist import simple_serialization


class ValidationError(Exception):
    '''A ballot is invalid given the election rules.

    :param reason: What is wrong with the ballot.
    :param ballot: The offending ballot (or its raw preferences).
    :param ballot_index: Position of the ballot in the submitted batch,
        if the ballot was submitted as a part of one.
    :param option_id: The option identifier that made the ballot invalid,
        if a single one can be pinpointed.
    '''
    def __init__(self,
                 reason: str,
                 ballot: Any = None,
                 ballot_index: Optional[int] = None,
                 option_id: Optional[OptionId] = None,
                 ):
        self.reason = reason
        self.ballot = ballot
        self.ballot_index = ballot_index
        self.option_id = option_id
        message = f'invalid ballot: {reason}'
        if option_id is not None:
            message += f': {option_id!r}'
        if ballot_index is not None:
            message += f' (ballot #{ballot_index})'
        super().__init__(message)


@simple_serialization
class RankedBallot:
    '''A single voter's preference ordering of options.

    :param preferences: Option identifiers from the most to the least
        preferred. Must not contain duplicates.
    :raises ValidationError: If an option identifier is repeated.
    '''
    __slots__ = ('_preferences', )

    def __init__(self, preferences: Iterable[OptionId] = ()):
        pref_tuple = tuple(preferences)
        try:
            id_counts = collections.Counter(pref_tuple)
        except TypeError as err:
            raise ValidationError(
                f'option identifiers must be hashable ({err})',
                ballot=pref_tuple,
            ) from err
        for option_id, n_ranked in id_counts.items():
            if n_ranked > 1:
                raise ValidationError(
                    'option ranked more than once',
                    ballot=pref_tuple,
                    option_id=option_id,
                )
        object.__setattr__(self, '_preferences', pref_tuple)

    @property
    def preferences(self) -> Tuple[OptionId, ...]:
        return self._preferences

    def first_choice(self, eligible: Collection[OptionId]
                     ) -> Optional[OptionId]:
        '''Return the most preferred option that is still eligible.

        :param eligible: Identifiers of the options still in the race.
        :returns: The identifier, or None if the ballot is exhausted (it ranks
            none of the eligible options).
        '''
        for option_id in self._preferences:
            if option_id in eligible:
                return option_id
        return None

    def __setattr__(self, name, value):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def __len__(self):
        return len(self._preferences)

    def __iter__(self):
        return iter(self._preferences)

    def __eq__(self, other):
        if not isinstance(other, RankedBallot):
            return NotImplemented
        return self._preferences == other._preferences

    def __hash__(self):
        return hash(self._preferences)

    def __repr__(self):
        return f'{self.__class__.__name__}({list(self._preferences)!r})'


def validate_ballots(ballots: Iterable[Any],
                     option_ids: Collection[OptionId],
                     ) -> List[RankedBallot]:
    '''Check that all ballots only rank the given options.

    The whole batch is checked before anything is returned; a single invalid
    ballot invalidates the batch.

    :param ballots: Ballots to check. Plain sequences of option identifiers
        are accepted as well and converted to :class:`RankedBallot`.
    :param option_ids: Identifiers of the options standing in the election.
    :returns: The ballots as a list of :class:`RankedBallot` objects.
    :raises ValidationError: If any ballot repeats an option or ranks an
        option not in ``option_ids``, or is not a sequence of option
        identifiers. Strings are rejected rather than split into characters.
    '''
    validated = []
    for i, ballot in enumerate(ballots):
        if not isinstance(ballot, RankedBallot):
            if isinstance(ballot, (str, bytes)) or not hasattr(
                ballot, '__iter__'
            ):
                raise ValidationError(
                    'not a sequence of option identifiers',
                    ballot=ballot,
                    ballot_index=i,
                )
            try:
                ballot = RankedBallot(ballot)
            except ValidationError as err:
                raise ValidationError(
                    err.reason,
                    ballot=err.ballot,
                    ballot_index=i,
                    option_id=err.option_id,
                ) from err
        for option_id in ballot.preferences:
            if option_id not in option_ids:
                raise ValidationError(
                    'unknown option',
                    ballot=ballot,
                    ballot_index=i,
                    option_id=option_id,
                )
        validated.append(ballot)
    return validated


def ballot_from_rankings(rankings: Dict[OptionId, Optional[int]],
                         start_at: int = 1,
                         ) -> RankedBallot:
    '''Build a ranked ballot from numeric rankings of options.

    :param rankings: A dictionary mapping option identifiers to their numeric
        rankings. Lower numbers mean more preferred; options mapped to None
        are treated as unranked.
    :param start_at: The best ranking present in the rankings, to allow other
        than 1-based numbering.
    :raises ValidationError: If two options share a rank or a rank is
        skipped (e.g. rankings 1, 3, 4).
    '''
    filled = {
        option_id: rank for option_id, rank in rankings.items()
        if rank is not None
    }
    by_rank = {}
    for option_id, rank in filled.items():
        if rank in by_rank:
            raise ValidationError(
                f'rank {rank} shared', ballot=rankings, option_id=option_id,
            )
        by_rank[rank] = option_id
    expected = list(range(start_at, start_at + len(by_rank)))
    if sorted(by_rank) != expected:
        raise ValidationError(
            f'rankings must be consecutive from {start_at},'
            f' got {sorted(by_rank)}',
            ballot=rankings,
        )
    return RankedBallot(by_rank[rank] for rank in expected)
