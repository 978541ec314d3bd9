'''Election options (candidates) and option set validation.

An option is the thing voters rank: a person, a proposal, a lunch venue.
Ballots and results never hold the options themselves, only their identifiers,
so the identifier must be hashable and stable; any hashable object such as
a string, an integer or a UUID will do.

This module also hosts the check applied to a whole option set before it can
be used for counting (:func:`check_options`), and the error it raises.
'''

from __future__ import annotations

import collections
import dataclasses
from typing import Any, Hashable, Iterable, List

from rcvlib.persist import simple_serialization


OptionId = Hashable


class ConfigurationError(Exception):
    '''An election is set up with an invalid set of options.

    E.g. less than two options, or two options sharing an identifier.

    :param reason: What is wrong with the setup.
    :param options: The offending options, if known.
    '''
    def __init__(self, reason: str, options: Any = None):
        self.reason = reason
        self.options = options
        message = f'invalid election setup: {reason}'
        if options is not None:
            message += f' (got {options!r})'
        super().__init__(message)


@simple_serialization
@dataclasses.dataclass(frozen=True)
class Option:
    '''A single election option (candidate).

    Two options are equal if both their identifiers and labels match.

    :param id: Opaque unique identifier of the option within the election.
    :param label: Human-readable name of the option.
    '''
    id: OptionId
    label: str

    def __str__(self):
        return self.label


def check_options(options: Iterable[Option],
                  min_count: int = 2,
                  ) -> List[Option]:
    '''Check that the options can be used to run an election.

    :param options: Options to check.
    :param min_count: Minimum number of options required.
    :returns: The options as a list, in the original order.
    :raises ConfigurationError: If there are too few options or some of them
        share an identifier.
    '''
    option_list = list(options)
    if len(option_list) < min_count:
        raise ConfigurationError(
            f'at least {min_count} options required,'
            f' {len(option_list)} given'
        )
    id_counts = collections.Counter(opt.id for opt in option_list)
    duplicates = [opt_id for opt_id, n in id_counts.items() if n > 1]
    if duplicates:
        raise ConfigurationError('duplicate option ids', duplicates)
    return option_list
